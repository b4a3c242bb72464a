"""FastAPI dependencies."""

from fastapi import Request

from core.config import Settings
from core.llm.base import BaseModelProvider
from core.services.stream_service import StreamService


def get_settings(request: Request) -> Settings:
    """Get settings from app state."""
    settings: Settings = request.app.state.settings
    return settings


def get_model_provider(request: Request) -> BaseModelProvider:
    """Get the model provider client from app state."""
    provider: BaseModelProvider = request.app.state.model_provider
    return provider


def get_stream_service(request: Request) -> StreamService:
    """Get the stream service from app state."""
    service: StreamService = request.app.state.stream_service
    return service
