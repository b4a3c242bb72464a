"""Configuration router for API settings."""

from fastapi import APIRouter, Depends

from api.dependencies import get_model_provider, get_settings
from api.literals import CONFIG_BASE_PATH, CONFIG_MODEL_ENDPOINT
from core.config import Settings
from core.llm.base import BaseModelProvider
from core.models import ModelConfigResponse

router = APIRouter(prefix=CONFIG_BASE_PATH, tags=["config"])


@router.get(CONFIG_MODEL_ENDPOINT, response_model=ModelConfigResponse)
async def get_model_config(
    settings: Settings = Depends(get_settings),
    provider: BaseModelProvider = Depends(get_model_provider),
) -> ModelConfigResponse:
    """Get the provider and model behind the research agents."""
    return ModelConfigResponse(
        provider=settings.llm_provider.value,
        model=provider.model,
    )
