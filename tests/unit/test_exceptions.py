"""Tests for domain error rendering."""

from uuid import uuid4

import pytest
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from src.matchboard.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    setup_exception_handlers,
)

pytestmark = pytest.mark.unit


class Body(BaseModel):
    title: str


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    setup_exception_handlers(app)
    app.add_middleware(CorrelationIdMiddleware)

    @app.get("/forbidden")
    async def forbidden() -> None:
        raise ForbiddenError()

    @app.get("/missing")
    async def missing() -> None:
        raise NotFoundError("Project 42 not found")

    @app.get("/conflict")
    async def conflict() -> None:
        raise ConflictError("You have already applied to this project")

    @app.post("/validate")
    async def validate(body: Body) -> None:
        return None

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("secret internals")

    return TestClient(app, raise_server_exceptions=False)


def test_forbidden_is_generic(client):
    response = client.get("/forbidden")

    assert response.status_code == 403
    body = response.json()
    assert body["error"] == "forbidden"
    assert body["detail"] == "Forbidden"
    assert body["request_id"]


def test_not_found(client):
    response = client.get("/missing")

    assert response.status_code == 404
    assert response.json()["detail"] == "Project 42 not found"


def test_conflict_reported_as_400(client):
    response = client.get("/conflict")

    assert response.status_code == 400
    assert response.json()["error"] == "conflict"


def test_validation_errors_list_fields(client):
    response = client.post("/validate", json={})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "invalid_input"
    assert body["errors"][0]["field"] == "title"


def test_unhandled_error_hides_details(client):
    response = client.get("/boom")

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "internal_fault"
    assert "secret" not in body["detail"]
    assert "request_id" in body


def test_unknown_route_echoes_request_id(client):
    request_id = str(uuid4())

    response = client.get("/nope", headers={"X-Request-ID": request_id})

    assert response.status_code == 404
    assert response.json()["request_id"] == request_id
