from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from src.matchboard.api.middlewares import setup_middlewares
from src.matchboard.api.v1.router import api_router
from src.matchboard.core.config import Settings, get_settings
from src.matchboard.core.db import create_engine_from_settings, create_session_factory
from src.matchboard.core.exceptions import setup_exception_handlers
from src.matchboard.core.health import setup_health_endpoint, setup_metrics
from src.matchboard.core.logging import get_logger, setup_logging
from src.matchboard.core.shutdown import request_tracker

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, console=settings.debug)
    logger.info("app_starting", app_name=settings.app_name, app_env=settings.app_env)

    yield

    grace_period = settings.shutdown_grace_period
    await request_tracker.start_shutdown()

    drained = await request_tracker.wait_for_drain(timeout=grace_period)
    if not drained:
        logger.warning(
            "shutdown_incomplete",
            grace_period=grace_period,
            in_flight_requests=request_tracker.in_flight_count,
        )

    await app.state.engine.dispose()
    logger.info("shutdown_complete")


OPENAPI_TAGS = [
    {"name": "projects", "description": "Project registry, project page and delivery stage"},
    {"name": "tasks", "description": "Project task board"},
    {"name": "tendering", "description": "Bids from professionals"},
    {"name": "nominations", "description": "Private staffing roster"},
    {"name": "health", "description": "Liveness and dependency checks"},
]


def create_app(settings: Settings | None = None, engine: AsyncEngine | None = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Defaults to the cached environment settings
        engine: Pre-built engine, e.g. one bound to a test database
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Project collaboration API: task boards, tendering and nominations",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    app.state.settings = settings
    app.state.engine = engine or create_engine_from_settings(settings)
    app.state.session_factory = create_session_factory(app.state.engine)

    setup_exception_handlers(app)
    setup_middlewares(app, settings)

    app.include_router(api_router)

    setup_health_endpoint(app)
    setup_metrics(app, settings)

    return app


app = create_app()
