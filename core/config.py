"""Configuration management for the research assistant."""

import os
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .constants import DEFAULT_API_BASE_URLS, DEFAULT_MODELS, DEFAULT_STREAM_QUEUE_SIZE
from .llm.prompts import AgentPrompts
from .types import Environment, LLMProvider

# Environment variables consulted for the provider API key, most specific first
API_KEY_ENV_VARS: dict[LLMProvider, tuple[str, ...]] = {
    LLMProvider.GEMINI: ("RESEARCH_LLM_API_KEY", "GOOGLE_GENERATIVE_AI_API_KEY"),
    LLMProvider.OPENAI: ("RESEARCH_LLM_API_KEY", "OPENAI_API_KEY"),
}


class Settings(BaseModel):
    """Application settings."""

    # Environment
    version: str = Field(default="0.1.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production/testing)",
    )

    # API Settings
    api_title: str = Field(default="Research Assistant API", description="API title")
    api_version: str = Field(default="1.0.0", description="API version")
    cors_allow_origins: list[str] = Field(
        default=["*"], description="Allowed CORS origins"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # LLM Settings
    llm_provider: LLMProvider = Field(
        default=LLMProvider.GEMINI, description="Model provider backing the agents"
    )
    llm_api_key: str = Field(default="", description="Model provider API key")
    llm_model: str = Field(
        default="", description="Model name (empty selects the provider default)"
    )
    llm_api_base_url: str = Field(
        default="", description="Provider base URL (empty selects the default)"
    )
    llm_timeout: float = Field(
        default=120.0, description="Timeout in seconds for one provider request"
    )
    max_retries: int = Field(
        default=3, description="Maximum number of retries for provider requests"
    )

    # Streaming
    stream_queue_size: int = Field(
        default=DEFAULT_STREAM_QUEUE_SIZE,
        ge=1,
        description="Capacity of the per-request record channel",
    )

    # Agent system prompts
    prompts: AgentPrompts = Field(
        default_factory=AgentPrompts, description="System prompt per pipeline stage"
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if not self.llm_model:
            self.llm_model = DEFAULT_MODELS[self.llm_provider.value]
        if not self.llm_api_base_url:
            self.llm_api_base_url = DEFAULT_API_BASE_URLS[self.llm_provider.value]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == Environment.TESTING


def _load_prompts() -> AgentPrompts:
    """Build agent prompts, applying RESEARCH_PROMPT_<AGENT> overrides."""
    overrides = {}
    for name in AgentPrompts.model_fields:
        value = os.getenv(f"RESEARCH_PROMPT_{name.upper()}")
        if value:
            overrides[name] = value
    return AgentPrompts(**overrides)


def _load_api_key(provider: LLMProvider) -> str:
    for var in API_KEY_ENV_VARS[provider]:
        value = os.getenv(var)
        if value:
            return value
    return "*"


def load_settings() -> Settings:
    """Load settings from environment variables."""

    # Load .env file if it exists
    load_dotenv()

    cors_origins_str = os.getenv("RESEARCH_CORS_ORIGINS", "*")
    if cors_origins_str == "*":
        cors_origins = ["*"]
    else:
        cors_origins = [origin.strip() for origin in cors_origins_str.split(",")]

    provider = LLMProvider(os.getenv("RESEARCH_LLM_PROVIDER", "gemini").lower())

    return Settings(
        environment=Environment(os.getenv("RESEARCH_ENV", "development")),
        api_title=os.getenv("RESEARCH_API_TITLE", "Research Assistant API"),
        api_version=os.getenv("RESEARCH_API_VERSION", "1.0.0"),
        cors_allow_origins=cors_origins,
        log_level=os.getenv("RESEARCH_LOG_LEVEL", "INFO").upper(),
        llm_provider=provider,
        llm_api_key=_load_api_key(provider),
        llm_model=os.getenv("RESEARCH_LLM_MODEL", ""),
        llm_api_base_url=os.getenv("RESEARCH_LLM_API_BASE_URL", ""),
        llm_timeout=float(os.getenv("RESEARCH_LLM_TIMEOUT", "120")),
        max_retries=int(os.getenv("RESEARCH_LLM_MAX_RETRIES", "3")),
        stream_queue_size=int(
            os.getenv("RESEARCH_STREAM_QUEUE_SIZE", str(DEFAULT_STREAM_QUEUE_SIZE))
        ),
        prompts=_load_prompts(),
    )


# Global settings instance
settings = load_settings()
