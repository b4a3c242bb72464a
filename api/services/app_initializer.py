"""Application service initializer for managing startup and shutdown."""

from fastapi import FastAPI

from core.config import Settings
from core.llm.base import BaseModelProvider
from core.llm.factory import create_model_provider
from core.log import get_logger
from core.services.research_pipeline import ResearchPipeline
from core.services.stream_service import StreamService

logger = get_logger(__name__)


class AppServiceInitializer:
    """Manages initialization and lifecycle of application services."""

    def __init__(self, settings: Settings):
        """Initialize with application settings."""
        self.settings = settings
        self.model_provider: BaseModelProvider | None = None
        self.research_pipeline: ResearchPipeline | None = None
        self.stream_service: StreamService | None = None

    async def initialize_all_services(
        self,
        app: FastAPI,
        llm_base_url: str | None = None,
        llm_api_key: str | None = None,
        model_provider: BaseModelProvider | None = None,
    ) -> None:
        """Initialize all services and configure app.state.

        Args:
            app: Application whose state receives the services
            llm_base_url: Override for the provider base URL
            llm_api_key: Override for the provider API key
            model_provider: Ready-made provider, bypassing the factory
        """
        logger.info("Initializing all application services...")

        await self.initialize_llm_services(llm_base_url, llm_api_key, model_provider)
        await self.initialize_research_services()
        self._setup_app_state(app)

        logger.info("All application services initialized successfully")

    async def initialize_llm_services(
        self,
        llm_base_url: str | None = None,
        llm_api_key: str | None = None,
        model_provider: BaseModelProvider | None = None,
    ) -> None:
        """Initialize the model provider client."""
        if model_provider:
            self.model_provider = model_provider
        else:
            self.model_provider = create_model_provider(
                self.settings, base_url=llm_base_url, api_key=llm_api_key
            )

    async def initialize_research_services(self) -> None:
        """Initialize the research pipeline and the stream service."""
        if not self.model_provider:
            raise RuntimeError(
                "LLM services must be initialized before research services"
            )

        self.research_pipeline = ResearchPipeline(
            provider=self.model_provider,
            prompts=self.settings.prompts,
        )
        self.stream_service = StreamService(
            self.research_pipeline, queue_size=self.settings.stream_queue_size
        )

    async def stop_all_services(self) -> None:
        """Release resources held by the services."""
        logger.info("Stopping all services...")

        if self.model_provider:
            try:
                await self.model_provider.aclose()
                logger.info("Model provider closed")
            except Exception as e:
                logger.error(f"Error closing model provider: {e}")

        logger.info("All services stopped")

    def _setup_app_state(self, app: FastAPI) -> None:
        """Configure app.state with initialized services."""
        app.state.model_provider = self.model_provider
        app.state.research_pipeline = self.research_pipeline
        app.state.stream_service = self.stream_service
