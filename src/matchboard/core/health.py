"""Liveness check and Prometheus metrics."""

import secrets
import time
from dataclasses import dataclass
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.matchboard.core.config import Settings
from src.matchboard.core.db import get_session
from src.matchboard.core.logging import get_logger
from src.matchboard.core.shutdown import request_tracker

logger = get_logger(__name__)


@dataclass
class _HealthCache:
    """Last database check, reused for ``ttl`` seconds to keep health checks cheap."""

    ttl: float = 10.0
    report: dict[str, Any] | None = None
    taken_at: float = 0.0

    def fresh(self, now: float) -> dict[str, Any] | None:
        if self.report is None or now - self.taken_at >= self.ttl:
            return None
        return {**self.report, "cached": True, "cache_age_seconds": round(now - self.taken_at, 1)}

    def store(self, report: dict[str, Any], now: float) -> None:
        self.report, self.taken_at = report, now


_cache = _HealthCache()


def reset_health_cache() -> None:
    """Forget the last check. For testing only."""
    _cache.report = None
    _cache.taken_at = 0.0


async def _check_database(
    session_factory: async_sessionmaker[AsyncSession],
) -> dict[str, Any]:
    try:
        async with get_session(session_factory) as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("health_database_unreachable", error=str(e))
        return {"status": "unhealthy", "database": "unreachable", "cached": False}
    return {"status": "healthy", "database": "healthy", "cached": False}


def setup_health_endpoint(app: FastAPI) -> None:
    @app.get("/health", tags=["health"])
    async def health(request: Request) -> JSONResponse:
        """503 while draining or when the database cannot be reached."""
        if request_tracker.is_shutting_down:
            return JSONResponse(
                {"status": "draining", "in_flight_requests": request_tracker.in_flight_count},
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        now = time.monotonic()
        report = _cache.fresh(now)
        if report is None:
            report = await _check_database(request.app.state.session_factory)
            _cache.store(report, now)

        healthy = report["status"] == "healthy"
        return JSONResponse(
            report,
            status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        )


def setup_metrics(app: FastAPI, settings: Settings) -> None:
    """Expose /metrics, behind X-Metrics-Key when METRICS_API_KEY is set."""
    instrumentator = Instrumentator(excluded_handlers=["/health", "/metrics"]).instrument(app)

    dependencies = []
    if settings.metrics_api_key:
        expected_key = settings.metrics_api_key
        api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
            if api_key is None or not secrets.compare_digest(api_key, expected_key):
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Invalid or missing metrics API key",
                )

        dependencies.append(Depends(verify_metrics_key))

    instrumentator.expose(app, endpoint="/metrics", dependencies=dependencies)
