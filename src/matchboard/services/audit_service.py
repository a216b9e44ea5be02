"""Audit logging service - records who changed what on a project."""

import contextlib
from enum import Enum
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.matchboard.core.audit_context import AuditContext, get_audit_context
from src.matchboard.core.logging import get_logger
from src.matchboard.core.security import Principal
from src.matchboard.models import AuditAction, AuditLog, Project
from src.matchboard.repositories import AuditLogRepository
from src.matchboard.services.policy import Operation, authorize

logger = get_logger(__name__)


def _value(item: AuditAction | str) -> str:
    return item.value if isinstance(item, Enum) else item


class AuditService:
    """Service for recording audit logs.

    Runs on its own session so a record survives a rolled-back business
    transaction. Failures to record are logged and never block the caller.
    """

    def __init__(self, audit_repo: AuditLogRepository, session: AsyncSession):
        self.audit_repo = audit_repo
        self.session = session

    async def log_action(
        self,
        action: AuditAction | str,
        entity_type: str,
        entity_id: UUID | None = None,
        user_id: UUID | None = None,
        project_id: UUID | None = None,
        changes: dict[str, Any] | None = None,
    ) -> AuditLog | None:
        """Record an audit log entry stamped with the current request metadata.

        Returns:
            The created AuditLog, or None if logging failed
        """
        try:
            ctx = get_audit_context() or AuditContext()
            audit_log = AuditLog(
                user_id=user_id,
                project_id=project_id,
                action=_value(action),
                entity_type=entity_type,
                entity_id=entity_id,
                changes=changes,
                **ctx.as_columns(),
            )
            self.audit_repo.add(audit_log)
            await self.session.commit()
        except Exception as e:
            logger.warning(
                "audit_log_failed",
                action=_value(action),
                entity_type=entity_type,
                error=str(e),
            )
            # Only this isolated session is affected; business data is already committed
            with contextlib.suppress(Exception):
                await self.session.rollback()
            return None

        logger.debug(
            "audit_log_recorded",
            action=audit_log.action,
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id else None,
        )
        return audit_log

    async def log_success(
        self,
        principal: Principal,
        action: AuditAction,
        entity_type: str,
        entity_id: UUID | None = None,
        project_id: UUID | None = None,
        changes: dict[str, Any] | None = None,
    ) -> AuditLog | None:
        return await self.log_action(
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            user_id=principal.user_id,
            project_id=project_id,
            changes=changes,
        )

    async def list_project_logs(
        self,
        principal: Principal,
        project: Project,
        cursor: str | None = None,
        limit: int = 50,
        action: str | None = None,
    ) -> tuple[list[AuditLog], str | None, bool]:
        """Audit trail of one project, for its owning organization and admins."""
        authorize(principal, Operation.VIEW_AUDIT_LOG, project)
        return await self.audit_repo.list_by_project(
            project.id, cursor=cursor, limit=limit, action=action
        )
