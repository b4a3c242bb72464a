"""External service models."""
