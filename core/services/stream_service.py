"""Stream service for handling streaming operations."""

import asyncio
import contextlib
from collections.abc import AsyncGenerator

from core.constants import DEFAULT_STREAM_QUEUE_SIZE
from core.log import get_logger
from core.models.domain.research import ResearchSubmission
from core.services.record_channel import RecordChannel
from core.services.research_pipeline import ResearchPipeline

logger = get_logger(__name__)


class StreamService:
    """Service turning a pipeline run into a framed response stream."""

    def __init__(
        self,
        pipeline: ResearchPipeline,
        queue_size: int = DEFAULT_STREAM_QUEUE_SIZE,
    ) -> None:
        """Initialize stream service.

        Args:
            pipeline: Research pipeline to run per request
            queue_size: Capacity of the record channel between pipeline and client
        """
        self.pipeline = pipeline
        self.queue_size = queue_size

    async def stream_research(
        self, submission: ResearchSubmission
    ) -> AsyncGenerator[str, None]:
        """Run the research pipeline and stream its records.

        Args:
            submission: Topic and files to research

        Yields:
            One framed record line per pipeline record
        """
        channel = RecordChannel(maxsize=self.queue_size)
        task = asyncio.create_task(self.pipeline.run(submission, channel))

        try:
            async for record in channel:
                yield record.to_line()
            await task
        finally:
            if not task.done():
                logger.warning("Stream consumer stopped early, cancelling pipeline")
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
