"""Root test fixtures shared across all test types.

Environment defaults are set before any application import so that
``get_settings()`` can be built without a .env file. API tests run
against a throwaway SQLite file; integration tests need PostgreSQL.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./matchboard-test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-characters")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import Generator

import pytest

from src.matchboard.core.audit_context import clear_audit_context
from src.matchboard.core.config import get_settings
from src.matchboard.core.health import reset_health_cache
from src.matchboard.core.shutdown import request_tracker

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _reset_process_state() -> Generator[None]:
    """Reset module-level state that would otherwise leak between tests."""
    reset_health_cache()
    request_tracker.reset()
    yield
    clear_audit_context()
    reset_health_cache()
    request_tracker.reset()
