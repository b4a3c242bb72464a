"""Research pipeline driving the document, research, review and synthesis agents."""

from collections.abc import AsyncIterator

from core.constants import (
    DOCUMENT_ANALYSIS_PLACEHOLDER,
    PIPELINE_ERROR_MESSAGE,
    STATUS_DOCUMENTS_DONE,
    STATUS_DOCUMENTS_FAILED,
    STATUS_DOCUMENTS_START,
    STATUS_RESEARCH_DONE,
    STATUS_RESEARCH_START,
    STATUS_REVIEW_DONE,
    STATUS_REVIEW_START,
    STATUS_SYNTHESIS_START,
)
from core.llm.base import BaseModelProvider, GenerationOptions
from core.llm.grounding import extract_source_urls
from core.llm.prompts import (
    AgentPrompts,
    build_document_analysis_prompt,
    build_research_prompt,
    build_review_prompt,
    build_synthesis_prompt,
)
from core.log import get_logger
from core.models.api.streaming import StreamRecord
from core.models.domain.research import ResearchSubmission, StageResult
from core.services.record_channel import RecordChannel

logger = get_logger(__name__)


class ResearchPipeline:
    """Runs the research stages for one submission and reports progress."""

    def __init__(
        self,
        provider: BaseModelProvider,
        prompts: AgentPrompts | None = None,
        model: str | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            provider: Model provider used by every stage
            prompts: System prompt per stage
            model: Model override for every stage
        """
        self.provider = provider
        self.prompts = prompts or AgentPrompts()
        self.model = model

    async def run(self, submission: ResearchSubmission, channel: RecordChannel) -> None:
        """Run every stage, writing records into the channel.

        Ends with exactly one ``finish`` record on success or one ``error``
        record on failure. The channel is closed in every case.
        """
        logger.info(
            f"Starting research pipeline: topic={submission.topic!r}, "
            f"files={len(submission.files)}"
        )
        try:
            document_insights = ""
            if submission.has_files:
                document_insights = await self._run_document_analysis(
                    submission, channel
                )

            await channel.send(StreamRecord.status(STATUS_RESEARCH_START))
            research = await self.research(submission.topic, document_insights)
            await channel.send(
                StreamRecord.status(
                    STATUS_RESEARCH_DONE.format(count=len(research.sources))
                )
            )

            await channel.send(StreamRecord.status(STATUS_REVIEW_START))
            review = await self.review(
                submission.topic, research.text, document_insights
            )
            await channel.send(StreamRecord.status(STATUS_REVIEW_DONE))

            await channel.send(StreamRecord.status(STATUS_SYNTHESIS_START))
            fragments = 0
            async for fragment in self.synthesize(
                submission.topic,
                research,
                review.text,
                document_insights,
            ):
                fragments += 1
                await channel.send(StreamRecord.text_delta(fragment))

            await channel.send(StreamRecord.finish())
            logger.info(f"Research pipeline complete ({fragments} report fragments)")
        except Exception as e:
            logger.error(f"Error in research pipeline: {e}", exc_info=True)
            await channel.send(StreamRecord.error(PIPELINE_ERROR_MESSAGE))
        finally:
            channel.close()

    async def _run_document_analysis(
        self, submission: ResearchSubmission, channel: RecordChannel
    ) -> str:
        count = len(submission.files)
        await channel.send(StreamRecord.status(STATUS_DOCUMENTS_START.format(count=count)))
        try:
            result = await self.analyze_documents(submission)
        except Exception as e:
            logger.error(f"Document analysis failed, continuing without it: {e}")
            await channel.send(StreamRecord.status(STATUS_DOCUMENTS_FAILED))
            return DOCUMENT_ANALYSIS_PLACEHOLDER.format(count=count, error=e)

        await channel.send(StreamRecord.status(STATUS_DOCUMENTS_DONE.format(count=count)))
        return result.text

    async def analyze_documents(self, submission: ResearchSubmission) -> StageResult:
        """Extract structured insights from the uploaded files."""
        logger.info(
            "Analyzing documents: "
            + ", ".join(part.filename for part in submission.files)
        )
        result = await self.provider.generate(
            build_document_analysis_prompt(submission.topic),
            GenerationOptions(
                system=self.prompts.document_analyzer,
                attachments=submission.files,
                model=self.model,
            ),
        )
        logger.debug(f"Document insights length: {len(result.text)} characters")
        return StageResult(text=result.text)

    async def research(self, topic: str, document_insights: str = "") -> StageResult:
        """Gather web research findings and their source URLs."""
        result = await self.provider.generate(
            build_research_prompt(topic, document_insights),
            GenerationOptions(
                system=self.prompts.researcher, web_search=True, model=self.model
            ),
        )
        sources = extract_source_urls(result.grounding)
        logger.info(f"Research complete with {len(sources)} sources")
        logger.debug(f"Research length: {len(result.text)} characters")
        return StageResult(text=result.text, sources=sources)

    async def review(
        self, topic: str, research_findings: str, document_insights: str = ""
    ) -> StageResult:
        """Critique the research findings."""
        result = await self.provider.generate(
            build_review_prompt(topic, research_findings, document_insights),
            GenerationOptions(
                system=self.prompts.reviewer, web_search=True, model=self.model
            ),
        )
        logger.info("Review complete")
        logger.debug(f"Critique length: {len(result.text)} characters")
        return StageResult(text=result.text)

    async def synthesize(
        self,
        topic: str,
        research: StageResult,
        critique: str,
        document_insights: str = "",
    ) -> AsyncIterator[str]:
        """Stream the final report, citing the enumerated research sources."""
        prompt = build_synthesis_prompt(
            topic,
            research.text,
            critique,
            research.sources,
            document_insights,
        )
        async for fragment in self.provider.stream(
            prompt,
            GenerationOptions(
                system=self.prompts.synthesizer, web_search=True, model=self.model
            ),
        ):
            if fragment:
                yield fragment
