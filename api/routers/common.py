"""Common API endpoints router."""

from fastapi import APIRouter, Depends

from api.dependencies import get_settings
from api.literals import HEALTH_ENDPOINT
from core.config import Settings
from core.models import HealthResponse
from core.utils import get_current_timestamp

router = APIRouter(tags=["common"])


@router.get(HEALTH_ENDPOINT, response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=settings.api_version,
        timestamp=get_current_timestamp(),
    )
