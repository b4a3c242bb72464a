"""Factory selecting the model provider client from settings."""

from core.config import Settings
from core.llm.base import BaseModelProvider
from core.llm.gemini_client import GeminiClient
from core.llm.openai_client import OpenAIClient
from core.log import get_logger
from core.types import LLMProvider

logger = get_logger(__name__)

_providers: dict[LLMProvider, type[GeminiClient] | type[OpenAIClient]] = {
    LLMProvider.GEMINI: GeminiClient,
    LLMProvider.OPENAI: OpenAIClient,
}


def create_model_provider(
    settings: Settings,
    base_url: str | None = None,
    api_key: str | None = None,
) -> BaseModelProvider:
    """Create the provider client configured in settings.

    Args:
        settings: Application settings
        base_url: Override for the provider base URL
        api_key: Override for the provider API key

    Returns:
        Provider client instance

    Raises:
        KeyError: If the configured provider is not supported
    """
    if api_key is None and settings.llm_api_key in ("", "*"):
        logger.warning(f"No API key configured for {settings.llm_provider.value}.")

    provider_cls = _providers[settings.llm_provider]
    return provider_cls(
        api_key=api_key or settings.llm_api_key,
        base_url=base_url or settings.llm_api_base_url,
        timeout=settings.llm_timeout,
        model=settings.llm_model,
        max_retries=settings.max_retries,
    )
