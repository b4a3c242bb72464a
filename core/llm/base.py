"""Provider-neutral interface for the model calls the agents make."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Any

from pydantic import BaseModel, Field

from core.models.api.requests import FilePart
from core.models.external.gemini import GroundingMetadata


class ModelProviderError(Exception):
    """Base exception for model provider errors."""

    pass


class ModelRequestError(ModelProviderError):
    """Exception for failed provider API requests."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_data: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.error_data = error_data


class GenerationOptions(BaseModel):
    """Per-call options for a model request."""

    system: str | None = Field(default=None, description="System instruction")
    web_search: bool = Field(
        default=False, description="Enable the provider's web search tool"
    )
    attachments: list[FilePart] = Field(
        default_factory=list, description="Files sent alongside the prompt"
    )
    model: str | None = Field(
        default=None, description="Model override (defaults to the client model)"
    )


class GenerationResult(BaseModel):
    """Text of a completed generation plus any grounding metadata."""

    text: str
    grounding: GroundingMetadata | None = None


class BaseModelProvider(ABC):
    """Capability interface the research pipeline depends on."""

    @property
    @abstractmethod
    def model(self) -> str:
        """Default model name."""

    @abstractmethod
    async def generate(
        self, prompt: str, options: GenerationOptions | None = None
    ) -> GenerationResult:
        """Generate a complete response."""

    @abstractmethod
    def stream(
        self, prompt: str, options: GenerationOptions | None = None
    ) -> AsyncIterator[str]:
        """Generate a response as a lazy, finite sequence of text fragments."""

    async def aclose(self) -> None:
        """Release network resources held by the provider."""
