"""Database utilities - engine, session, migrations."""

from src.matchboard.core.db.engine import (
    create_engine_from_settings,
    create_sync_engine,
    get_sync_url,
)
from src.matchboard.core.db.migrations import run_migrations_async, run_migrations_sync
from src.matchboard.core.db.session import create_session_factory, get_session

__all__ = [
    # Engine
    "create_engine_from_settings",
    "create_sync_engine",
    "get_sync_url",
    # Session
    "create_session_factory",
    "get_session",
    # Migrations
    "run_migrations_async",
    "run_migrations_sync",
]
