"""Application middlewares."""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.matchboard.core.config import Settings

from .request_context import RequestContextMiddleware
from .security_headers import SecurityHeadersMiddleware, build_security_headers

__all__ = [
    "setup_middlewares",
    "RequestContextMiddleware",
    "SecurityHeadersMiddleware",
]


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    """Install the middleware stack.

    Starlette runs the last-added middleware first. The resulting order,
    outermost to innermost, is correlation ID, CORS, security headers,
    request context.
    """
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, headers=build_security_headers(settings))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    # Must wrap everything so request_id is set before the context is bound
    app.add_middleware(CorrelationIdMiddleware)
