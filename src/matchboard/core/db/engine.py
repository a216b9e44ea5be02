"""Database engine construction.

Engines are built by the application factory and stored on ``app.state``;
nothing in this module keeps a process-wide engine.
"""

from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from src.matchboard.core.config import Settings


def _engine_kwargs(url: str, settings: Settings) -> dict[str, Any]:
    if url.startswith("sqlite"):
        # In-memory SQLite needs one shared connection across sessions
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.endswith("://"):
            kwargs["poolclass"] = StaticPool
        return kwargs
    return {
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
        "pool_pre_ping": True,
    }


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create the async engine used by request sessions."""
    return create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        **_engine_kwargs(settings.database_url, settings),
    )


def get_sync_url(url: str) -> str:
    """Convert an async driver URL to its sync counterpart (asyncpg -> psycopg2)."""
    return url.replace("+asyncpg", "").replace("+aiosqlite", "")


def create_sync_engine(settings: Settings) -> Engine:
    """Create a sync engine, used by Alembic and maintenance scripts."""
    url = get_sync_url(settings.database_migrations_url or settings.database_url)
    return create_engine(url, pool_pre_ping=True)
