"""Tests for the research chat endpoint."""

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from core.constants import (
    PIPELINE_ERROR_MESSAGE,
    STATUS_DOCUMENTS_START,
    STATUS_RESEARCH_DONE,
    STATUS_RESEARCH_START,
)
from core.models.api.streaming import StreamRecord
from core.types import StreamRecordType

from tests.utils.test_helpers import (
    FakeModelProvider,
    TestDataFactory,
    build_test_app,
    decode_records,
)


def test_chat_streams_framed_records(client: TestClient) -> None:
    response = client.post("/api/chat", json=TestDataFactory.create_chat_payload())

    assert response.status_code == 200
    assert response.headers["content-type"] == "text/plain; charset=utf-8"
    assert response.headers["x-vercel-ai-data-stream"] == "v1"

    records = decode_records(response.content)
    types = [record.type for record in records]
    assert types == [StreamRecordType.STATUS] * 5 + [
        StreamRecordType.TEXT_DELTA,
        StreamRecordType.TEXT_DELTA,
        StreamRecordType.FINISH,
    ]
    assert records[0] == StreamRecord.status(STATUS_RESEARCH_START)
    assert records[1] == StreamRecord.status(STATUS_RESEARCH_DONE.format(count=3))
    report = "".join(
        r.content for r in records if r.type == StreamRecordType.TEXT_DELTA
    )
    assert report == "# Report\n\nBody [1]"


def test_every_line_is_tagged(client: TestClient) -> None:
    response = client.post("/api/chat", json=TestDataFactory.create_chat_payload())

    lines = response.text.split("\n")
    assert lines[-1] == ""
    assert all(line.startswith("0:") for line in lines[:-1])


def test_chat_with_file_runs_document_analysis(client: TestClient) -> None:
    payload = TestDataFactory.create_chat_payload(
        files=[TestDataFactory.create_file_part()]
    )

    response = client.post("/api/chat", json=payload)

    records = decode_records(response.content)
    assert records[0] == StreamRecord.status(STATUS_DOCUMENTS_START.format(count=1))
    assert records[-1] == StreamRecord.finish()


def test_chat_uses_latest_message_only(
    client: TestClient, fake_provider: FakeModelProvider
) -> None:
    payload = TestDataFactory.create_chat_payload("earlier topic")
    payload["messages"].append(
        TestDataFactory.create_user_message("latest topic").model_dump(
            mode="json", by_alias=True
        )
    )

    client.post("/api/chat", json=payload)

    research_prompt, _ = fake_provider.calls[0]
    assert "latest topic" in research_prompt
    assert "earlier topic" not in research_prompt


def test_chat_without_topic_returns_400(client: TestClient) -> None:
    payload = TestDataFactory.create_chat_payload(text="   ")

    response = client.post("/api/chat", json=payload)

    assert response.status_code == 400


def test_chat_without_messages_returns_422(client: TestClient) -> None:
    response = client.post("/api/chat", json={"messages": []})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_chat_pipeline_failure_streams_error(settings: Settings) -> None:
    provider = FakeModelProvider(results=[RuntimeError("model unavailable")])
    app = await build_test_app(settings, provider)

    response = TestClient(app).post(
        "/api/chat", json=TestDataFactory.create_chat_payload()
    )

    assert response.status_code == 200
    records = decode_records(response.content)
    assert [r.type for r in records] == [
        StreamRecordType.STATUS,
        StreamRecordType.ERROR,
    ]
    assert records[-1] == StreamRecord.error(PIPELINE_ERROR_MESSAGE)
    assert "model unavailable" not in response.text
