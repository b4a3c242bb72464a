"""Common type definitions for the research assistant."""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class LLMProvider(str, Enum):
    """Supported model providers."""

    GEMINI = "gemini"
    OPENAI = "openai"


class StreamRecordType(str, Enum):
    """Record kinds carried on the chat response stream."""

    STATUS = "status"
    TEXT_DELTA = "text-delta"
    FINISH = "finish"
    ERROR = "error"


class MessageRole(str, Enum):
    """Conversation message roles."""

    USER = "user"
    ASSISTANT = "assistant"
