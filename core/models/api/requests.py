"""API request models."""

import base64
import binascii
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from core.types import MessageRole
from core.utils import generate_entry_id


class TextPart(BaseModel):
    """Plain text segment of a message."""

    type: Literal["text"] = "text"
    text: str = Field(..., description="Text content")


class FilePart(BaseModel):
    """Uploaded file carried inline as a data URL."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["file"] = "file"
    filename: str = Field(..., description="Original file name")
    media_type: str = Field(
        default="application/octet-stream",
        alias="mediaType",
        description="MIME type of the file",
    )
    url: str = Field(..., description="data: URL holding the base64 file content")

    def decode_content(self) -> bytes:
        """Decode the file bytes from the data URL.

        Raises:
            ValueError: If the URL is not a base64 data URL
        """
        if not self.url.startswith("data:") or "," not in self.url:
            raise ValueError(f"File {self.filename!r} is not a data URL")
        header, _, payload = self.url.partition(",")
        if not header.endswith(";base64"):
            raise ValueError(f"File {self.filename!r} is not base64 encoded")
        try:
            return base64.b64decode(payload, validate=True)
        except binascii.Error as e:
            raise ValueError(f"File {self.filename!r} has invalid content: {e}")

    @classmethod
    def from_bytes(cls, filename: str, media_type: str, content: bytes) -> "FilePart":
        encoded = base64.b64encode(content).decode("ascii")
        return cls(
            filename=filename,
            media_type=media_type,
            url=f"data:{media_type};base64,{encoded}",
        )


MessagePart = Annotated[TextPart | FilePart, Field(discriminator="type")]


class ConversationMessage(BaseModel):
    """One chat message made of ordered text and file parts."""

    id: str = Field(default_factory=lambda: generate_entry_id("msg"))
    role: MessageRole
    parts: list[MessagePart] = Field(default_factory=list)

    @property
    def text(self) -> str:
        """Displayed text: the text parts concatenated in order."""
        return "".join(part.text for part in self.parts if isinstance(part, TextPart))

    @property
    def text_parts(self) -> list[TextPart]:
        return [part for part in self.parts if isinstance(part, TextPart)]

    @property
    def file_parts(self) -> list[FilePart]:
        return [part for part in self.parts if isinstance(part, FilePart)]


class ChatRequest(BaseModel):
    """Request body for the research chat endpoint."""

    messages: list[ConversationMessage] = Field(
        ..., min_length=1, description="Conversation so far, oldest first"
    )

    @property
    def latest_message(self) -> ConversationMessage:
        return self.messages[-1]
