"""Core functionality for the research assistant."""

from .config import Settings, settings
from .log import (
    get_logger,
    setup_logging,
    setup_test_logging,
)
from .services import (
    RecordChannel,
    ResearchPipeline,
    StreamService,
)
from .types import Environment

__all__ = [
    "Environment",
    "Settings",
    "settings",
    "get_logger",
    "setup_logging",
    "setup_test_logging",
    "RecordChannel",
    "ResearchPipeline",
    "StreamService",
]
