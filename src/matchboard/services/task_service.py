"""Task board - ordered columns of tasks per project."""

from typing import NamedTuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.matchboard.core.exceptions import InvalidInputError, NotFoundError
from src.matchboard.core.logging import get_logger
from src.matchboard.core.security import Principal
from src.matchboard.models import ProfessionalProfile, Project, RibaStage, Task, User
from src.matchboard.models.base import utc_now
from src.matchboard.repositories import (
    ProfessionalProfileRepository,
    ProjectRepository,
    TaskRepository,
)
from src.matchboard.schemas.task import TaskCreate, TaskPlacementUpdate, TaskReorder
from src.matchboard.services.policy import Operation, authorize

logger = get_logger(__name__)


class BoardCard(NamedTuple):
    task: Task
    profile: ProfessionalProfile | None = None
    user: User | None = None


class TaskService:
    """Create, list and move tasks on a project board.

    Within one (project, status) column order_index values are unique.
    New tasks go to the bottom of their column; creation locks the project
    row so concurrent creations in the same column cannot pick the same
    index. Moves store the caller's values as-is and do not renumber
    siblings; ``reindex`` rewrites a whole column in one step.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        task_repo: TaskRepository,
        profile_repo: ProfessionalProfileRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.task_repo = task_repo
        self.profile_repo = profile_repo
        self.session = session

    async def _get_project(self, project_id: UUID, for_update: bool = False) -> Project:
        if for_update:
            project = await self.project_repo.get_for_update(project_id)
        else:
            project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        return project

    async def _get_task(self, project_id: UUID, task_id: UUID) -> Task:
        task = await self.task_repo.get_for_project(project_id, task_id)
        if task is None:
            raise NotFoundError(f"Task {task_id} not found")
        return task

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def list_tasks(self, principal: Principal, project_id: UUID) -> list[BoardCard]:
        """All tasks of a project in board order, with their assignees."""
        authorize(principal, Operation.LIST_TASKS)
        await self._get_project(project_id)
        rows = await self.task_repo.list_for_project(project_id)
        return [BoardCard(*row) for row in rows]

    async def cards(self, tasks: list[Task]) -> list[BoardCard]:
        """Pair already-loaded tasks with their assignees' display records."""
        assignee_ids = list({task.assignee_id for task in tasks if task.assignee_id is not None})
        assignees = await self.profile_repo.list_with_users(assignee_ids)
        return [
            BoardCard(task, *assignees.get(task.assignee_id, (None, None)))
            if task.assignee_id is not None
            else BoardCard(task)
            for task in tasks
        ]

    async def create_task(self, principal: Principal, project_id: UUID, data: TaskCreate) -> Task:
        """Append a task to the bottom of its column."""
        authorize(principal, Operation.CREATE_TASK)

        try:
            # Held until commit: serializes writers to this project's board
            await self._get_project(project_id, for_update=True)

            if (
                data.assignee_id is not None
                and await self.profile_repo.get_by_id(data.assignee_id) is None
            ):
                raise NotFoundError(f"Professional {data.assignee_id} not found")

            current_max = await self.task_repo.max_order_index(project_id, data.status)
            order_index = 0 if current_max is None else current_max + 1

            task = Task(
                project_id=project_id,
                title=data.title,
                description=data.description,
                status=data.status.value,
                riba_stage=data.riba_stage.value if data.riba_stage else None,
                due_date=data.due_date,
                assignee_id=data.assignee_id,
                order_index=order_index,
            )
            self.task_repo.add(task)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "task_created",
            project_id=str(project_id),
            task_id=str(task.id),
            status=task.status,
            order_index=order_index,
        )
        return task

    async def update_placement(
        self, principal: Principal, project_id: UUID, data: TaskPlacementUpdate
    ) -> Task:
        """Move a task to another column and/or position, verbatim."""
        authorize(principal, Operation.MOVE_TASK)
        task = await self._get_task(project_id, data.task_id)

        moved = False
        if data.status is not None and data.status.value != task.status:
            task.status = data.status.value
            moved = True
        if data.order_index is not None and data.order_index != task.order_index:
            task.order_index = data.order_index
            moved = True

        if moved:
            task.updated_at = utc_now()
            await self._commit()
            logger.info("task_moved", project_id=str(project_id), task_id=str(task.id))
        return task

    async def reindex(
        self, principal: Principal, project_id: UUID, data: TaskReorder
    ) -> list[Task]:
        """Renumber a whole column 0..n-1 in the order given.

        ``data.task_ids`` must list exactly the tasks currently in the
        column; anything else is rejected and nothing changes.
        """
        authorize(principal, Operation.REINDEX_TASKS)

        try:
            await self._get_project(project_id, for_update=True)
            partition = await self.task_repo.list_partition(project_id, data.status)

            by_id = {task.id: task for task in partition}
            if set(by_id) != set(data.task_ids):
                raise InvalidInputError(
                    f"taskIds must list exactly the tasks in the {data.status.value} column"
                )

            now = utc_now()
            ordered = [by_id[task_id] for task_id in data.task_ids]
            for index, task in enumerate(ordered):
                if task.order_index != index:
                    task.order_index = index
                    task.updated_at = now
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "task_column_reindexed",
            project_id=str(project_id),
            status=data.status.value,
            count=len(ordered),
        )
        return ordered

    async def tag_stage(
        self,
        principal: Principal,
        project_id: UUID,
        task_id: UUID,
        stage: RibaStage | None,
    ) -> Task:
        """Tag a task with a delivery stage, independent of the project's stage."""
        authorize(principal, Operation.TAG_TASK_STAGE)
        task = await self._get_task(project_id, task_id)

        new_value = stage.value if stage else None
        if task.riba_stage != new_value:
            task.riba_stage = new_value
            task.updated_at = utc_now()
            await self._commit()
            logger.info(
                "task_stage_tagged",
                project_id=str(project_id),
                task_id=str(task_id),
                riba_stage=new_value,
            )
        return task

