"""Stream record models for the chat response stream."""

import json

from pydantic import BaseModel, Field

from core.constants import STREAM_RECORD_PREFIX
from core.types import StreamRecordType


class StreamRecord(BaseModel):
    """One framed unit on the server-to-client stream."""

    type: StreamRecordType
    content: str = Field(default="", description="Record payload text")

    @classmethod
    def status(cls, message: str) -> "StreamRecord":
        return cls(type=StreamRecordType.STATUS, content=message)

    @classmethod
    def text_delta(cls, fragment: str) -> "StreamRecord":
        return cls(type=StreamRecordType.TEXT_DELTA, content=fragment)

    @classmethod
    def finish(cls) -> "StreamRecord":
        return cls(type=StreamRecordType.FINISH)

    @classmethod
    def error(cls, message: str) -> "StreamRecord":
        return cls(type=StreamRecordType.ERROR, content=message)

    def to_line(self) -> str:
        """Frame the record as a tagged, newline-terminated JSON line."""
        payload = json.dumps(
            {"type": self.type.value, "content": self.content},
            ensure_ascii=False,
            separators=(",", ":"),
        )
        return f"{STREAM_RECORD_PREFIX}{payload}\n"

    @classmethod
    def from_line(cls, line: str) -> "StreamRecord | None":
        """Parse one framed line.

        Returns None for blank lines and lines on another channel.

        Raises:
            json.JSONDecodeError: If the payload is not valid JSON
            pydantic.ValidationError: If the payload is not a known record
        """
        line = line.strip()
        if not line or not line.startswith(STREAM_RECORD_PREFIX):
            return None
        payload = json.loads(line[len(STREAM_RECORD_PREFIX) :])
        return cls.model_validate(payload)
