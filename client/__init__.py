"""Client side of the research chat stream: decoding, display state and HTTP."""

from .decoder import StreamDecoder
from .display import DisplayState, StatusEntry, apply_record, start_request
from .research_client import ResearchClient

__all__ = [
    "DisplayState",
    "ResearchClient",
    "StatusEntry",
    "StreamDecoder",
    "apply_record",
    "start_request",
]
