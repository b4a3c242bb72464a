"""API routers package."""

from .chat import router as chat_router
from .common import router as common_router
from .config import router as config_router

__all__ = [
    "chat_router",
    "common_router",
    "config_router",
]
