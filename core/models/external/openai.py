"""OpenAI Responses API models for external service integration."""

from pydantic import BaseModel, ConfigDict, Field

from core.models.external.gemini import (
    GroundingChunk,
    GroundingMetadata,
    GroundingSupport,
    WebSource,
)


class OpenAIModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class OutputAnnotation(OpenAIModel):
    """Annotation attached to output text (only url_citation is used)."""

    type: str
    url: str | None = None
    title: str | None = None
    start_index: int | None = None
    end_index: int | None = None


class OutputContent(OpenAIModel):
    type: str
    text: str | None = None
    annotations: list[OutputAnnotation] = Field(default_factory=list)


class OutputItem(OpenAIModel):
    type: str
    role: str | None = None
    content: list[OutputContent] = Field(default_factory=list)


class ResponsesResult(OpenAIModel):
    """Subset of a Responses API result that the agents consume."""

    id: str | None = None
    model: str | None = None
    output: list[OutputItem] = Field(default_factory=list)

    def _output_texts(self) -> list[OutputContent]:
        return [
            content
            for item in self.output
            if item.type == "message"
            for content in item.content
            if content.type == "output_text"
        ]

    @property
    def output_text(self) -> str:
        return "".join(content.text or "" for content in self._output_texts())

    def to_grounding_metadata(self) -> GroundingMetadata | None:
        """Map URL citations onto the grounding chunk/support shape.

        Each citation becomes one chunk and one support pointing at it, so
        the same extraction applies to every provider.
        """
        chunks: list[GroundingChunk] = []
        supports: list[GroundingSupport] = []
        for content in self._output_texts():
            for annotation in content.annotations:
                if annotation.type != "url_citation" or not annotation.url:
                    continue
                supports.append(GroundingSupport(grounding_chunk_indices=[len(chunks)]))
                chunks.append(
                    GroundingChunk(
                        web=WebSource(uri=annotation.url, title=annotation.title)
                    )
                )
        if not chunks:
            return None
        return GroundingMetadata(grounding_chunks=chunks, grounding_supports=supports)
