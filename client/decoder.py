"""Incremental decoder for the framed chat response stream."""

import codecs
import json

from pydantic import ValidationError

from core.log import get_logger
from core.models.api.streaming import StreamRecord

logger = get_logger(__name__)


class StreamDecoder:
    """Turns response body chunks into stream records in a single pass.

    Chunks may split a record, or a multi-byte character, anywhere. Text
    after the last newline of a chunk is held back until the next chunk
    completes it. A line that fails to parse is logged and skipped.
    """

    def __init__(self) -> None:
        self._text_decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending = ""
        self.skipped_lines = 0

    def feed(self, chunk: bytes) -> list[StreamRecord]:
        """Decode one chunk.

        Args:
            chunk: Raw bytes as read from the response body

        Returns:
            Records completed by this chunk, in arrival order
        """
        self._pending += self._text_decoder.decode(chunk)
        *lines, self._pending = self._pending.split("\n")
        return self._parse_lines(lines)

    def flush(self) -> list[StreamRecord]:
        """Decode whatever remains once the stream has ended."""
        remainder = self._pending + self._text_decoder.decode(b"", final=True)
        self._pending = ""
        return self._parse_lines([remainder])

    def _parse_lines(self, lines: list[str]) -> list[StreamRecord]:
        records = []
        for line in lines:
            try:
                record = StreamRecord.from_line(line)
            except (json.JSONDecodeError, RecursionError, ValidationError) as e:
                self.skipped_lines += 1
                logger.error(f"Failed to parse line: {line!r} ({e})")
                continue
            if record is not None:
                records.append(record)
        return records
