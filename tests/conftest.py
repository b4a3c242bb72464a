"""Global pytest configuration and fixtures."""

import json
from collections.abc import AsyncGenerator, Generator
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pytest_httpserver import HTTPServer
from werkzeug.wrappers import Request, Response

from core import setup_test_logging
from core.config import Settings
from core.llm.base import GenerationResult
from core.llm.gemini_client import GeminiClient
from core.models.domain.research import ResearchSubmission
from core.services.research_pipeline import ResearchPipeline
from core.types import Environment

from tests.utils.test_helpers import (
    GEMINI_MODEL,
    GEMINI_REPORT_FRAGMENTS,
    GEMINI_SOURCES,
    FakeModelProvider,
    TestDataFactory,
    build_test_app,
)


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Setup test logging for all tests."""
    setup_test_logging()


@pytest.fixture
def settings() -> Settings:
    """Settings for the testing environment."""
    return Settings(environment=Environment.TESTING, llm_api_key="test-api-key")


@pytest.fixture
def fake_provider() -> FakeModelProvider:
    """Provider returning grounded research followed by a plain review."""
    return FakeModelProvider(
        results=[
            _grounded_result("Findings about climate emulators [1]"),
            _plain_result("Strengths: ...\nGaps: ...\nQuestions: ..."),
        ],
    )


@pytest.fixture
def pipeline(fake_provider: FakeModelProvider) -> ResearchPipeline:
    return ResearchPipeline(provider=fake_provider)


@pytest.fixture
def submission() -> ResearchSubmission:
    return ResearchSubmission(topic="AI for climate modeling")


@pytest.fixture
def submission_with_files() -> ResearchSubmission:
    return ResearchSubmission(
        topic="AI for climate modeling",
        files=[TestDataFactory.create_file_part()],
    )


def _grounded_result(text: str) -> GenerationResult:
    return GenerationResult(
        text=text,
        grounding=TestDataFactory.create_grounding_metadata(GEMINI_SOURCES),
    )


def _plain_result(text: str) -> GenerationResult:
    return GenerationResult(text=text)


def gemini_text_response(text: str, urls: list[str] | None = None) -> dict[str, Any]:
    """Build a generateContent response body."""
    candidate: dict[str, Any] = {
        "content": {"role": "model", "parts": [{"text": text}]},
        "finishReason": "STOP",
    }
    if urls:
        candidate["groundingMetadata"] = {
            "webSearchQueries": ["ai climate modeling"],
            "groundingChunks": [
                {"web": {"uri": url, "title": f"Source {i}"}}
                for i, url in enumerate(urls)
            ],
            "groundingSupports": [
                {"segment": {"startIndex": 0, "endIndex": 10}, "groundingChunkIndices": [i]}
                for i in range(len(urls))
            ]
            + [{"groundingChunkIndices": [0, 1]}],
        }
    return {"candidates": [candidate], "modelVersion": GEMINI_MODEL}


def gemini_sse_body(fragments: list[str]) -> str:
    """Build a streamGenerateContent SSE body, one event per fragment."""
    return "".join(
        f"data: {json.dumps(gemini_text_response(fragment))}\r\n\r\n"
        for fragment in fragments
    )


@pytest.fixture
def mock_gemini_server(httpserver: HTTPServer) -> HTTPServer:
    """Set up a mock Gemini API server."""

    def generate_handler(request: Request) -> Response:
        body = json.loads(request.data.decode("utf-8"))
        if "tools" in body:
            response_data = gemini_text_response("Grounded findings [1]", GEMINI_SOURCES)
        else:
            response_data = gemini_text_response("Plain analysis")
        return Response(
            json.dumps(response_data),
            status=200,
            headers={"Content-Type": "application/json"},
        )

    httpserver.expect_request(
        f"/v1beta/models/{GEMINI_MODEL}:generateContent", method="POST"
    ).respond_with_handler(generate_handler)
    httpserver.expect_request(
        f"/v1beta/models/{GEMINI_MODEL}:streamGenerateContent", method="POST"
    ).respond_with_data(
        gemini_sse_body(GEMINI_REPORT_FRAGMENTS),
        content_type="text/event-stream",
    )
    return httpserver


@pytest_asyncio.fixture
async def gemini_client(
    mock_gemini_server: HTTPServer,
) -> AsyncGenerator[GeminiClient, None]:
    """Gemini client pointed at the mock server."""
    client = GeminiClient(
        api_key="test-api-key",
        base_url=mock_gemini_server.url_for("/v1beta"),
        model=GEMINI_MODEL,
    )
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def test_app(settings: Settings, fake_provider: FakeModelProvider) -> FastAPI:
    """App backed by the fake provider."""
    return await build_test_app(settings, fake_provider)


@pytest.fixture
def client(test_app: FastAPI) -> Generator[TestClient, None, None]:
    """Test client over the app backed by the fake provider."""
    yield TestClient(test_app)
