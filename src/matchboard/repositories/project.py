"""Repository for Project entity."""

from uuid import UUID

from sqlmodel import select

from src.matchboard.models import Project
from src.matchboard.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    model = Project

    async def list_all(
        self,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Project], str | None, bool]:
        """List every project, newest first."""
        query = select(Project)
        return await self.paginate(query, cursor, limit)

    async def list_for_organization(
        self,
        organization_id: UUID,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Project], str | None, bool]:
        """List the projects owned by one organization, newest first."""
        query = select(Project).where(Project.organization_id == organization_id)
        return await self.paginate(query, cursor, limit)

    async def get_for_update(self, project_id: UUID) -> Project | None:
        """Load a project and hold a row lock on it until the transaction ends.

        Task creation and re-indexing take this lock so that writers to the
        same board run one at a time. SQLite ignores FOR UPDATE and
        serializes writers on its own.
        """
        result = await self.session.execute(
            select(Project).where(Project.id == project_id).with_for_update()
        )
        return result.scalar_one_or_none()
