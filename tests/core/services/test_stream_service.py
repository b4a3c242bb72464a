"""Tests for the stream service."""

import asyncio

import pytest

from core.constants import PIPELINE_ERROR_MESSAGE
from core.models.api.streaming import StreamRecord
from core.models.domain.research import ResearchSubmission
from core.services.record_channel import RecordChannel
from core.services.research_pipeline import ResearchPipeline
from core.services.stream_service import StreamService
from core.types import StreamRecordType

from tests.utils.test_helpers import FakeModelProvider


class BlockingPipeline(ResearchPipeline):
    """Pipeline that sends one status and then waits until cancelled."""

    def __init__(self) -> None:
        super().__init__(provider=FakeModelProvider())
        self.cancelled = asyncio.Event()
        self.channel: RecordChannel | None = None

    async def run(self, submission: ResearchSubmission, channel: RecordChannel) -> None:
        self.channel = channel
        try:
            await channel.send(StreamRecord.status("working"))
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.cancelled.set()
            raise
        finally:
            channel.close()


@pytest.mark.asyncio
async def test_stream_research_yields_framed_lines(
    pipeline: ResearchPipeline, submission: ResearchSubmission
) -> None:
    service = StreamService(pipeline, queue_size=2)

    lines = [line async for line in service.stream_research(submission)]

    assert all(line.startswith("0:") and line.endswith("\n") for line in lines)
    records = [StreamRecord.from_line(line) for line in lines]
    assert records[0] is not None and records[0].type == StreamRecordType.STATUS
    assert records[-1] == StreamRecord.finish()


@pytest.mark.asyncio
async def test_stream_research_reports_pipeline_error(
    submission: ResearchSubmission,
) -> None:
    pipeline = ResearchPipeline(
        provider=FakeModelProvider(results=[RuntimeError("model unavailable")])
    )
    service = StreamService(pipeline)

    lines = [line async for line in service.stream_research(submission)]

    assert lines[-1] == StreamRecord.error(PIPELINE_ERROR_MESSAGE).to_line()


@pytest.mark.asyncio
async def test_consumer_stopping_early_cancels_pipeline(
    submission: ResearchSubmission,
) -> None:
    pipeline = BlockingPipeline()
    service = StreamService(pipeline)

    stream = service.stream_research(submission)
    first = await stream.__anext__()
    await stream.aclose()

    assert pipeline.cancelled.is_set()
    assert StreamRecord.from_line(first) == StreamRecord.status("working")
    assert pipeline.channel is not None and pipeline.channel.closed
