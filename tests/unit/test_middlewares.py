"""Tests for the request-scope and security header middlewares."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from structlog.testing import capture_logs

from src.matchboard.api.middlewares import setup_middlewares
from src.matchboard.api.middlewares.security_headers import (
    DOCS_CSP,
    build_security_headers,
    is_private_path,
)
from src.matchboard.core.audit_context import get_audit_context
from src.matchboard.core.config import Settings
from src.matchboard.core.shutdown import request_tracker

pytestmark = pytest.mark.unit


def make_settings(**overrides) -> Settings:
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite://",
        jwt_secret_key="s" * 32,
        **overrides,
    )


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    setup_middlewares(app, make_settings())

    @app.get("/api/v1/projects/{project_id}")
    async def project_detail(project_id: str) -> dict:
        ctx = get_audit_context()
        return {
            "in_flight": request_tracker.in_flight_count,
            "ip": ctx.ip_address if ctx else None,
            "request_id": ctx.request_id if ctx else None,
        }

    @app.get("/health")
    async def health() -> dict:
        return {"in_flight": request_tracker.in_flight_count}

    return TestClient(app)


def test_api_request_is_tracked_and_stamped(client):
    response = client.get(
        "/api/v1/projects/p-1",
        headers={"X-Forwarded-For": "203.0.113.5, 10.0.0.1"},
    )

    body = response.json()
    assert body["in_flight"] == 1
    assert body["ip"] == "203.0.113.5"
    assert body["request_id"] == response.headers["X-Request-ID"]
    assert request_tracker.in_flight_count == 0
    assert get_audit_context() is None


def test_health_check_is_not_tracked(client):
    assert client.get("/health").json() == {"in_flight": 0}


def test_request_finished_logged(client):
    with capture_logs() as logs:
        client.get("/api/v1/projects/p-1")

    finished = [entry for entry in logs if entry["event"] == "request_finished"]
    assert len(finished) == 1
    assert finished[0]["status_code"] == 200
    assert finished[0]["path"] == "/api/v1/projects/p-1"


def test_security_headers_and_no_store(client):
    response = client.get("/api/v1/projects/p-1")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["Content-Security-Policy"] == DOCS_CSP
    assert response.headers["Cache-Control"] == "no-store"


def test_strict_csp_when_docs_disabled():
    headers = build_security_headers(make_settings(enable_openapi=False))

    assert headers["Content-Security-Policy"] == "default-src 'self'; frame-ancestors 'none'"


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/api/v1/projects/abc", True),
        ("/api/v1/projects/abc/nominate", True),
        ("/api/v1/projects/abc/nominate/def", True),
        ("/api/v1/projects/abc/audit-logs", True),
        ("/api/v1/projects", False),
        ("/api/v1/projects/abc/tasks", False),
    ],
)
def test_private_paths(path, expected):
    assert is_private_path(path) is expected
