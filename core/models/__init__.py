"""Unified models package for the research assistant."""

# API models (request/stream)
from core.models.api.requests import (
    ChatRequest,
    ConversationMessage,
    FilePart,
    TextPart,
)
from core.models.api.responses import HealthResponse, ModelConfigResponse
from core.models.api.streaming import StreamRecord

# Domain models
from core.models.domain.research import ResearchSubmission, StageResult

# External API models
from core.models.external.gemini import (
    GenerateContentResponse,
    GroundingChunk,
    GroundingMetadata,
    GroundingSupport,
)

__all__ = [
    "ChatRequest",
    "ConversationMessage",
    "FilePart",
    "GenerateContentResponse",
    "GroundingChunk",
    "GroundingMetadata",
    "GroundingSupport",
    "HealthResponse",
    "ModelConfigResponse",
    "ResearchSubmission",
    "StageResult",
    "StreamRecord",
    "TextPart",
]
