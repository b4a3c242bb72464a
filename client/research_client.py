"""HTTP client that submits research requests and tracks the display state."""

import mimetypes
from collections.abc import AsyncGenerator
from pathlib import Path

import httpx

from client.decoder import StreamDecoder
from client.display import (
    DisplayEntry,
    DisplayState,
    apply_record,
    error_message,
    start_request,
)
from core.constants import TRANSPORT_ERROR_MESSAGE
from core.log import get_logger
from core.models.api.requests import ChatRequest, ConversationMessage, FilePart, TextPart
from core.types import MessageRole

logger = get_logger(__name__)

CHAT_PATH = "/api/chat"


class ResearchClient:
    """Posts the conversation to the research server and decodes the reply."""

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        clear_status_on_error: bool = True,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the research client.

        Args:
            base_url: Server base URL, e.g. http://localhost:8000
            timeout: Read timeout in seconds (None waits for the whole report)
            clear_status_on_error: Drop status chips when the server reports an error
            http_client: Preconfigured HTTP client, e.g. bound to an ASGI app
        """
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url, timeout=httpx.Timeout(10.0, read=timeout)
        )
        self.clear_status_on_error = clear_status_on_error
        self.state = DisplayState()
        self.is_loading = False

    @property
    def entries(self) -> list[DisplayEntry]:
        return self.state.entries

    async def research(
        self,
        topic: str,
        files: list[Path] | None = None,
    ) -> AsyncGenerator[list[DisplayEntry], None]:
        """Submit a topic and follow the response stream.

        Args:
            topic: Research topic
            files: Documents to upload with the topic

        Yields:
            The display entries after every change
        """
        if not topic.strip() or self.is_loading:
            return

        user_message = build_user_message(topic, files or [])
        self.state = start_request(self.state, user_message)
        self.is_loading = True
        yield self.entries

        request = ChatRequest(messages=self.state.messages)
        decoder = StreamDecoder()
        try:
            async with self._client.stream(
                "POST",
                CHAT_PATH,
                json=request.model_dump(mode="json", by_alias=True),
            ) as response:
                response.raise_for_status()
                async for chunk in response.aiter_bytes():
                    for record in decoder.feed(chunk):
                        self.state = apply_record(
                            self.state, record, self.clear_status_on_error
                        )
                        yield self.entries
                for record in decoder.flush():
                    self.state = apply_record(
                        self.state, record, self.clear_status_on_error
                    )
                    yield self.entries
        except Exception as e:
            logger.error(f"Research request failed: {e}")
            self.state = self.state.model_copy(
                update={
                    "entries": [
                        *self.state.entries,
                        error_message(TRANSPORT_ERROR_MESSAGE),
                    ]
                }
            )
            yield self.entries
        finally:
            self.is_loading = False

    async def aclose(self) -> None:
        await self._client.aclose()


def build_user_message(topic: str, files: list[Path]) -> ConversationMessage:
    """Build the user message with the topic followed by file parts."""
    parts: list[TextPart | FilePart] = [TextPart(text=topic)]
    for path in files:
        media_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        parts.append(FilePart.from_bytes(path.name, media_type, path.read_bytes()))
    return ConversationMessage(role=MessageRole.USER, parts=parts)
