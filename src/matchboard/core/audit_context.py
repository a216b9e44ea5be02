"""Where a mutation came from: client address, user agent and request ID.

The request middleware captures these once per request; AuditService reads
them back when it writes a row, so services never handle the request.
"""

from contextvars import ContextVar
from dataclasses import asdict, dataclass

USER_AGENT_MAX_LENGTH = 500


@dataclass(frozen=True)
class AuditContext:
    ip_address: str | None = None
    user_agent: str | None = None
    request_id: str | None = None

    def as_columns(self) -> dict[str, str | None]:
        """Values for the matching AuditLog columns."""
        return asdict(self)


_current: ContextVar[AuditContext | None] = ContextVar("audit_context", default=None)


def set_audit_context(
    ip_address: str | None = None,
    user_agent: str | None = None,
    request_id: str | None = None,
) -> None:
    _current.set(
        AuditContext(
            ip_address=ip_address,
            user_agent=user_agent[:USER_AGENT_MAX_LENGTH] if user_agent else user_agent,
            request_id=request_id,
        )
    )


def get_audit_context() -> AuditContext | None:
    return _current.get()


def clear_audit_context() -> None:
    _current.set(None)


def get_client_ip(forwarded_for: str | None, client_host: str | None) -> str | None:
    """Leftmost X-Forwarded-For hop, else the socket peer."""
    if not forwarded_for:
        return client_host
    client, _, _proxies = forwarded_for.partition(",")
    return client.strip() or client_host
