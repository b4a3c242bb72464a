"""Research assistant HTTP API."""
