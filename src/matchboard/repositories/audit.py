"""Repository for AuditLog entity."""

from uuid import UUID

from sqlmodel import select

from src.matchboard.models import AuditLog
from src.matchboard.repositories.base import BaseRepository


class AuditLogRepository(BaseRepository[AuditLog]):
    model = AuditLog

    async def list_by_project(
        self,
        project_id: UUID,
        cursor: str | None = None,
        limit: int = 50,
        action: str | None = None,
    ) -> tuple[list[AuditLog], str | None, bool]:
        """List audit logs recorded against a project, newest first."""
        query = select(AuditLog).where(AuditLog.project_id == project_id)
        if action:
            query = query.where(AuditLog.action == action)
        return await self.paginate(query, cursor, limit)

