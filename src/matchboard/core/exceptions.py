"""Domain errors and the exception handlers that render them.

Every error response carries the correlation ID so clients can quote it
when reporting a problem:

    {"error": "not_found", "detail": "Project ... not found", "request_id": "..."}
"""

from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.matchboard.core.logging import get_logger

logger = get_logger(__name__)


class DomainError(Exception):
    """Base class for errors raised by services and mapped to HTTP responses."""

    kind: str = "internal_fault"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class UnauthenticatedError(DomainError):
    kind = "unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class ForbiddenError(DomainError):
    """Policy denial. The outward message never names the failing predicate."""

    kind = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"

    def __init__(self) -> None:
        super().__init__(self.default_detail)


class NotFoundError(DomainError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ConflictError(DomainError):
    """Uniqueness violation on a bid or nomination.

    Reported as 400 to match the public API contract.
    """

    kind = "conflict"
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Conflict"


class InvalidInputError(DomainError):
    kind = "invalid_input"
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"


_STATUS_KINDS = {
    status.HTTP_400_BAD_REQUEST: InvalidInputError.kind,
    status.HTTP_401_UNAUTHORIZED: UnauthenticatedError.kind,
    status.HTTP_403_FORBIDDEN: ForbiddenError.kind,
    status.HTTP_404_NOT_FOUND: NotFoundError.kind,
    status.HTTP_405_METHOD_NOT_ALLOWED: InvalidInputError.kind,
}


def _error_body(kind: str, detail: Any, **extra: Any) -> dict[str, Any]:
    return {"error": kind, "detail": detail, "request_id": correlation_id.get(), **extra}


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    errors = []
    for err in exc.errors():
        # Drop the "body"/"query"/"path" prefix FastAPI adds to locations
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        errors.append({"field": ".".join(loc) or "body", "message": err.get("msg", "")})
    return errors


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("domain_error", kind=exc.kind, path=request.url.path)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.kind, exc.detail),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body(
                InvalidInputError.kind, "Request validation failed", errors=_field_errors(exc)
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        fallback = "internal_fault" if exc.status_code >= 500 else "error"
        kind = _STATUS_KINDS.get(exc.status_code, fallback)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(kind, exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("internal_fault", "Internal server error"),
        )
