"""Response hardening: static security headers plus no-store on roster data."""

import re
from collections.abc import Mapping

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from src.matchboard.core.config import Settings

# Swagger UI loads its bundle from a CDN and runs inline scripts
DOCS_CSP = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
    "style-src 'self' 'unsafe-inline' cdn.jsdelivr.net; "
    "img-src 'self' data: cdn.jsdelivr.net; "
    "frame-ancestors 'none'"
)

# Project detail, the roster and the audit trail vary by caller
PRIVATE_PATHS = (
    re.compile(r"^/api/v1/projects/[^/]+$"),
    re.compile(r"^/api/v1/projects/[^/]+/nominate(/.*)?$"),
    re.compile(r"^/api/v1/projects/[^/]+/audit-logs$"),
)


def build_security_headers(settings: Settings) -> dict[str, str]:
    """Headers stamped on every response.

    The strict production CSP only applies once the interactive docs are off.
    """
    csp = DOCS_CSP
    if not settings.enable_openapi and settings.csp_production:
        csp = settings.csp_production
    return {
        "Content-Security-Policy": csp,
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
        "Referrer-Policy": "strict-origin-when-cross-origin",
    }


def is_private_path(path: str) -> bool:
    return any(pattern.match(path) for pattern in PRIVATE_PATHS)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, headers: Mapping[str, str]):
        super().__init__(app)
        self.headers = dict(headers)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers.update(self.headers)
        if is_private_path(request.url.path):
            response.headers["Cache-Control"] = "no-store"
        return response
