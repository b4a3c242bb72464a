"""Gemini API models for external service integration."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GeminiModel(BaseModel):
    """Base model accepting Gemini's camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class WebSource(GeminiModel):
    uri: str | None = None
    title: str | None = None


class GroundingChunk(GeminiModel):
    """A retrieved source backing part of a response."""

    web: WebSource | None = None


class GroundingSupport(GeminiModel):
    """Links a span of generated text to the chunks that support it."""

    grounding_chunk_indices: list[int] = Field(default_factory=list)
    confidence_scores: list[float] = Field(default_factory=list)


class GroundingMetadata(GeminiModel):
    """Grounding information returned with search-augmented responses."""

    web_search_queries: list[str] = Field(default_factory=list)
    grounding_chunks: list[GroundingChunk] = Field(default_factory=list)
    grounding_supports: list[GroundingSupport] = Field(default_factory=list)


class GeminiPart(GeminiModel):
    text: str | None = None
    thought: bool | None = None


class GeminiContent(GeminiModel):
    role: str | None = None
    parts: list[GeminiPart] = Field(default_factory=list)


class GeminiCandidate(GeminiModel):
    content: GeminiContent | None = None
    finish_reason: str | None = None
    grounding_metadata: GroundingMetadata | None = None


class GenerateContentResponse(GeminiModel):
    """Response body of generateContent and each streamGenerateContent event."""

    candidates: list[GeminiCandidate] = Field(default_factory=list)
    model_version: str | None = None

    @property
    def text(self) -> str:
        """Concatenated text of the first candidate, thought parts excluded."""
        if not self.candidates or not self.candidates[0].content:
            return ""
        return "".join(
            part.text
            for part in self.candidates[0].content.parts
            if part.text and not part.thought
        )

    @property
    def grounding_metadata(self) -> GroundingMetadata | None:
        if not self.candidates:
            return None
        return self.candidates[0].grounding_metadata
