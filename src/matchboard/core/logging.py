"""structlog setup and request-scoped log context."""

import logging
import sys
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

# Libraries that log every statement or connection at INFO
_NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "httpx", "httpcore")


def _renderer(console: bool) -> structlog.typing.Processor:
    if console:
        return structlog.dev.ConsoleRenderer(colors=True)
    return structlog.processors.JSONRenderer()


def setup_logging(level: str = "INFO", *, console: bool = False) -> None:
    """Route structlog through stdlib logging on stdout.

    Args:
        level: Root log level name.
        console: Human-readable coloured output for local runs; JSON otherwise.
    """
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(console),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None) -> None:
    if request_id:
        bind_contextvars(request_id=request_id)


def bind_principal_context(
    user_id: UUID,
    role: str,
    organization_id: UUID | None = None,
    email: str | None = None,
    *,
    log_email: bool = False,
) -> None:
    """Tag the rest of the request's log lines with who is calling.

    The email is only bound when ``log_email`` is set (LOG_USER_EMAILS).
    """
    fields: dict[str, str] = {"user_id": str(user_id), "role": role}
    if organization_id is not None:
        fields["organization_id"] = str(organization_id)
    if email and log_email:
        fields["user_email"] = email
    bind_contextvars(**fields)


def clear_request_context() -> None:
    clear_contextvars()
