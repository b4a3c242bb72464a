"""Core services package."""

from .record_channel import ChannelClosedError, RecordChannel
from .research_pipeline import ResearchPipeline
from .stream_service import StreamService

__all__ = [
    "ChannelClosedError",
    "RecordChannel",
    "ResearchPipeline",
    "StreamService",
]
