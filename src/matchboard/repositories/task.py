"""Repository for Task entity."""

from uuid import UUID

from sqlalchemy import case, func
from sqlmodel import col, select

from src.matchboard.models import ProfessionalProfile, Task, TaskStatus, User
from src.matchboard.repositories.base import BaseRepository

# Board columns left to right
_STATUS_RANK = case(
    {status.value: status.rank for status in TaskStatus},
    value=Task.status,
    else_=len(TaskStatus),
)


class TaskRepository(BaseRepository[Task]):
    model = Task

    async def list_for_project(
        self, project_id: UUID
    ) -> list[tuple[Task, ProfessionalProfile | None, User | None]]:
        """All tasks of a project in board order, each with its assignee records.

        Column order first, then order_index, then newest first for the
        rare equal order_index left behind by manual moves. Unassigned
        tasks come back with None for the profile and user.
        """
        result = await self.session.execute(
            select(Task, ProfessionalProfile, User)
            .outerjoin(ProfessionalProfile, col(ProfessionalProfile.id) == col(Task.assignee_id))
            .outerjoin(User, col(User.id) == col(ProfessionalProfile.user_id))
            .where(Task.project_id == project_id)
            .order_by(_STATUS_RANK, col(Task.order_index).asc(), col(Task.created_at).desc())
        )
        return [(row[0], row[1], row[2]) for row in result.all()]

    async def get_for_project(self, project_id: UUID, task_id: UUID) -> Task | None:
        result = await self.session.execute(
            select(Task).where(Task.id == task_id, Task.project_id == project_id)
        )
        return result.scalar_one_or_none()

    async def max_order_index(self, project_id: UUID, status: TaskStatus) -> int | None:
        """Highest order_index in a column, or None if the column is empty."""
        result = await self.session.execute(
            select(func.max(Task.order_index)).where(
                Task.project_id == project_id,
                Task.status == status.value,
            )
        )
        return result.scalar_one_or_none()

    async def list_partition(self, project_id: UUID, status: TaskStatus) -> list[Task]:
        result = await self.session.execute(
            select(Task)
            .where(Task.project_id == project_id, Task.status == status.value)
            .order_by(col(Task.order_index).asc())
        )
        return list(result.scalars().all())

    async def count_for_project(self, project_id: UUID) -> int:
        return await self.count_where(Task.project_id == project_id)
