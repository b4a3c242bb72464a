"""Domain models for one research pipeline run."""

from pydantic import BaseModel, Field

from core.models.api.requests import ChatRequest, FilePart


class ResearchSubmission(BaseModel):
    """The topic and uploaded files taken from the latest user message."""

    topic: str = Field(..., description="Research topic")
    files: list[FilePart] = Field(default_factory=list, description="Uploaded files")

    @property
    def has_files(self) -> bool:
        return bool(self.files)

    @classmethod
    def from_chat_request(cls, request: ChatRequest) -> "ResearchSubmission":
        """Build a submission from the last message of a chat request.

        Raises:
            ValueError: If the last message carries no text
        """
        message = request.latest_message
        topic = " ".join(part.text for part in message.text_parts).strip()
        if not topic:
            raise ValueError("The latest message does not contain a research topic")
        return cls(topic=topic, files=message.file_parts)


class StageResult(BaseModel):
    """Output of one non-streaming pipeline stage."""

    text: str = Field(default="", description="Stage output text")
    sources: list[str] = Field(
        default_factory=list, description="Source URLs in first-seen order"
    )
