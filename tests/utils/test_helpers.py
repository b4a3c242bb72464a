"""Test helper utilities for research assistant tests."""

import asyncio
from collections.abc import AsyncIterator
from typing import Any

from fastapi import FastAPI

from api.app import create_app
from api.services.app_initializer import AppServiceInitializer
from core.config import Settings
from client.decoder import StreamDecoder
from core.llm.base import BaseModelProvider, GenerationOptions, GenerationResult
from core.models.api.requests import (
    ChatRequest,
    ConversationMessage,
    FilePart,
    TextPart,
)
from core.models.api.streaming import StreamRecord
from core.models.domain.research import ResearchSubmission
from core.models.external.gemini import (
    GroundingChunk,
    GroundingMetadata,
    GroundingSupport,
    WebSource,
)
from core.services.record_channel import RecordChannel
from core.services.research_pipeline import ResearchPipeline
from core.types import MessageRole

GEMINI_MODEL = "gemini-2.5-flash"
GEMINI_SOURCES = [
    "https://example.org/climate-ml",
    "https://example.org/earth-system-models",
    "https://example.org/downscaling",
]
GEMINI_REPORT_FRAGMENTS = ["# Research Insights", ": AI for climate ", "modeling [1]"]


class FakeModelProvider(BaseModelProvider):
    """Deterministic provider returning scripted results in call order."""

    def __init__(
        self,
        results: list[GenerationResult | Exception] | None = None,
        fragments: list[str] | None = None,
        stream_error: Exception | None = None,
        model: str = "fake-model",
    ) -> None:
        self.results = list(results or [])
        self.fragments = ["# Report", "\n\nBody [1]"] if fragments is None else fragments
        self.stream_error = stream_error
        self.calls: list[tuple[str, GenerationOptions]] = []
        self.closed = False
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    async def generate(
        self, prompt: str, options: GenerationOptions | None = None
    ) -> GenerationResult:
        self.calls.append((prompt, options or GenerationOptions()))
        if not self.results:
            return GenerationResult(text=f"response {len(self.calls)}")
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    async def stream(
        self, prompt: str, options: GenerationOptions | None = None
    ) -> AsyncIterator[str]:
        self.calls.append((prompt, options or GenerationOptions()))
        for fragment in self.fragments:
            await asyncio.sleep(0)
            yield fragment
        if self.stream_error:
            raise self.stream_error

    async def aclose(self) -> None:
        self.closed = True


def decode_records(body: bytes) -> list[StreamRecord]:
    """Decode a complete chat response body."""
    decoder = StreamDecoder()
    return decoder.feed(body) + decoder.flush()


async def build_test_app(settings: Settings, provider: BaseModelProvider) -> FastAPI:
    """Create an app whose services use the given provider."""
    app = create_app()
    app.state.settings = settings
    initializer = AppServiceInitializer(settings)
    await initializer.initialize_all_services(app, model_provider=provider)
    return app


async def run_pipeline(
    pipeline: ResearchPipeline,
    submission: ResearchSubmission,
    maxsize: int = 4,
) -> list[StreamRecord]:
    """Run a pipeline while draining its channel and return every record."""
    channel = RecordChannel(maxsize=maxsize)
    task = asyncio.create_task(pipeline.run(submission, channel))
    records = [record async for record in channel]
    await task
    return records


class TestDataFactory:
    """Factory class for creating test data objects."""

    __test__ = False

    @staticmethod
    def create_grounding_metadata(
        urls: list[str],
        support_indices: list[list[int]] | None = None,
    ) -> GroundingMetadata:
        """Create grounding metadata with one chunk per URL.

        By default every chunk is referenced by its own support.
        """
        if support_indices is None:
            support_indices = [[i] for i in range(len(urls))]
        return GroundingMetadata(
            web_search_queries=["test query"],
            grounding_chunks=[
                GroundingChunk(web=WebSource(uri=url, title=f"Source {i}"))
                for i, url in enumerate(urls)
            ],
            grounding_supports=[
                GroundingSupport(grounding_chunk_indices=indices)
                for indices in support_indices
            ],
        )

    @staticmethod
    def create_file_part(
        filename: str = "notes.txt",
        media_type: str = "text/plain",
        content: bytes = b"Ocean heat content rose 0.6 W/m2 since 2005.",
    ) -> FilePart:
        return FilePart.from_bytes(filename, media_type, content)

    @staticmethod
    def create_user_message(
        text: str = "AI for climate modeling",
        files: list[FilePart] | None = None,
    ) -> ConversationMessage:
        parts: list[TextPart | FilePart] = [TextPart(text=text)]
        parts.extend(files or [])
        return ConversationMessage(role=MessageRole.USER, parts=parts)

    @staticmethod
    def create_chat_payload(
        text: str = "AI for climate modeling",
        files: list[FilePart] | None = None,
    ) -> dict[str, Any]:
        """Create a JSON chat request body as the browser client sends it."""
        request = ChatRequest(
            messages=[TestDataFactory.create_user_message(text, files)]
        )
        return request.model_dump(mode="json", by_alias=True)

    @staticmethod
    def frame(*records: StreamRecord) -> bytes:
        return "".join(record.to_line() for record in records).encode("utf-8")
