"""Utility functions for the application."""

import uuid
from datetime import UTC, datetime


def get_current_timestamp() -> str:
    """Get current timestamp in ISO8601 format."""
    return datetime.now(UTC).isoformat()


def generate_entry_id(prefix: str) -> str:
    """Generate a unique identifier such as ``status-3f2a...``."""
    return f"{prefix}-{uuid.uuid4().hex}"
