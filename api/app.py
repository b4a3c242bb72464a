"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routers import chat_router, common_router, config_router
from api.services.app_initializer import AppServiceInitializer
from core import get_logger, setup_logging
from core.config import load_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = app.state.settings
    setup_logging(
        level=settings.log_level,
        enable_file_logging=settings.is_production,
    )
    logger.info(f"Starting research assistant API in {settings.environment} mode")

    initializer: AppServiceInitializer | None = None
    if getattr(app.state, "stream_service", None) is None:
        initializer = AppServiceInitializer(settings)
        await initializer.initialize_all_services(app)
    else:
        logger.info("Using preconfigured services")

    logger.info(
        f"Research agents use {settings.llm_provider.value} "
        f"model {app.state.model_provider.model}"
    )

    yield

    if initializer:
        await initializer.stop_all_services()

    logger.info("Research assistant API shutting down")


def create_app() -> FastAPI:
    """Create FastAPI app with current settings."""
    settings = load_settings()

    app = FastAPI(
        title=settings.api_title,
        description="Multi-agent research assistant streaming grounded reports",
        version=settings.api_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(common_router)
    app.include_router(config_router)
    app.include_router(chat_router)

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Global exception handler."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    return app


app = create_app()
