"""Authorization policy - who may do what to which project.

``decide`` is a pure function over the principal, the operation and the
resource it targets. It returns a ``Decision`` instead of raising, so rules
can be tested without HTTP or database plumbing. Services call
``authorize``, which logs the failing predicate and raises a generic
``ForbiddenError``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol
from uuid import UUID

from src.matchboard.core.exceptions import ForbiddenError
from src.matchboard.core.logging import get_logger
from src.matchboard.core.security import Principal
from src.matchboard.models.enums import UserRole

logger = get_logger(__name__)


class Operation(str, Enum):
    CREATE_PROJECT = "create_project"
    SUBMIT_BID = "submit_bid"
    NOMINATE_PROFESSIONAL = "nominate_professional"
    REMOVE_NOMINATION = "remove_nomination"
    VIEW_NOMINATION_ROSTER = "view_nomination_roster"
    UPDATE_PROJECT_STAGE = "update_project_stage"
    VIEW_AUDIT_LOG = "view_audit_log"
    VIEW_PROJECT = "view_project"
    VIEW_BID_COUNT = "view_bid_count"
    LIST_TASKS = "list_tasks"
    CREATE_TASK = "create_task"
    MOVE_TASK = "move_task"
    REINDEX_TASKS = "reindex_tasks"
    TAG_TASK_STAGE = "tag_task_stage"


class DenyReason(str, Enum):
    ROLE_MISMATCH = "role_mismatch"
    MISSING_LINKAGE = "missing_linkage"
    OWNERSHIP_MISMATCH = "ownership_mismatch"
    MISSING_RESOURCE = "missing_resource"


class OwnedResource(Protocol):
    """Anything owned by an organization; in practice a Project."""

    @property
    def organization_id(self) -> UUID: ...


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: DenyReason | None = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> "Decision":
        return cls(allowed=False, reason=reason)


# Operations on the private side of a project: staffing, stage, audit trail
OWNER_OPERATIONS = frozenset(
    {
        Operation.NOMINATE_PROFESSIONAL,
        Operation.REMOVE_NOMINATION,
        Operation.VIEW_NOMINATION_ROSTER,
        Operation.UPDATE_PROJECT_STAGE,
        Operation.VIEW_AUDIT_LOG,
    }
)

# Public within the platform: any authenticated principal
OPEN_OPERATIONS = frozenset(
    {
        Operation.VIEW_PROJECT,
        Operation.VIEW_BID_COUNT,
        Operation.LIST_TASKS,
        Operation.CREATE_TASK,
        Operation.MOVE_TASK,
        Operation.REINDEX_TASKS,
        Operation.TAG_TASK_STAGE,
    }
)


def _owner_or_admin(principal: Principal, resource: OwnedResource | None) -> Decision:
    if principal.role == UserRole.ADMIN:
        return Decision.allow()
    if principal.role != UserRole.DEVELOPER:
        return Decision.deny(DenyReason.ROLE_MISMATCH)
    if principal.organization_id is None:
        return Decision.deny(DenyReason.MISSING_LINKAGE)
    if resource is None:
        return Decision.deny(DenyReason.MISSING_RESOURCE)
    if principal.organization_id != resource.organization_id:
        return Decision.deny(DenyReason.OWNERSHIP_MISMATCH)
    return Decision.allow()


def decide(
    principal: Principal,
    operation: Operation,
    resource: OwnedResource | None = None,
) -> Decision:
    """Evaluate one operation for one principal."""
    if operation == Operation.CREATE_PROJECT:
        if principal.role != UserRole.DEVELOPER:
            return Decision.deny(DenyReason.ROLE_MISMATCH)
        if principal.organization_id is None:
            return Decision.deny(DenyReason.MISSING_LINKAGE)
        return Decision.allow()

    if operation == Operation.SUBMIT_BID:
        if principal.role != UserRole.PROFESSIONAL:
            return Decision.deny(DenyReason.ROLE_MISMATCH)
        if principal.professional_id is None:
            return Decision.deny(DenyReason.MISSING_LINKAGE)
        return Decision.allow()

    if operation in OWNER_OPERATIONS:
        return _owner_or_admin(principal, resource)

    if operation in OPEN_OPERATIONS:
        return Decision.allow()

    raise ValueError(f"Unknown operation: {operation!r}")


def is_allowed(
    principal: Principal,
    operation: Operation,
    resource: OwnedResource | None = None,
) -> bool:
    return decide(principal, operation, resource).allowed


def authorize(
    principal: Principal,
    operation: Operation,
    resource: OwnedResource | None = None,
) -> None:
    """Raise ForbiddenError unless ``decide`` allows the operation.

    The deny reason goes to the log only; callers see a generic message.
    """
    decision = decide(principal, operation, resource)
    if decision.allowed:
        return
    logger.warning(
        "authorization_denied",
        operation=operation.value,
        reason=decision.reason.value if decision.reason else None,
        user_id=str(principal.user_id),
        role=principal.role.value,
    )
    raise ForbiddenError()
