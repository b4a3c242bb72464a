"""Model provider clients and prompt templates."""
