"""Per-request scope: log context, audit metadata, drain accounting, access log."""

import time

from asgi_correlation_id import correlation_id
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.matchboard.core.audit_context import (
    clear_audit_context,
    get_client_ip,
    set_audit_context,
)
from src.matchboard.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
)
from src.matchboard.core.shutdown import request_tracker

logger = get_logger(__name__)

# Health checks and scrapes: not counted for shutdown and not access-logged
UNTRACKED_PATHS = frozenset({"/health", "/metrics"})


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Set up and tear down everything scoped to one API request.

    Binds the correlation ID to structlog, stamps the audit context with the
    caller's IP and user agent, and counts the request as in flight so a
    shutdown can wait for it. Both contexts are cleared on the way out, even
    when the handler raises.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in UNTRACKED_PATHS:
            return await call_next(request)

        request_id = correlation_id.get()
        client_host = request.client.host if request.client else None

        clear_request_context()
        bind_request_context(request_id)
        set_audit_context(
            ip_address=get_client_ip(request.headers.get("x-forwarded-for"), client_host),
            user_agent=request.headers.get("user-agent"),
            request_id=request_id,
        )

        started = time.perf_counter()
        try:
            async with request_tracker.track_request():
                response = await call_next(request)
            logger.info(
                "request_finished",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
            return response
        finally:
            clear_audit_context()
            clear_request_context()
