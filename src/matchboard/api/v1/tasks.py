"""Task board endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.matchboard.api.dependencies import AuditServiceDep, CurrentPrincipal, TaskServiceDep
from src.matchboard.models import AuditAction
from src.matchboard.schemas.task import (
    TaskCreate,
    TaskPlacementUpdate,
    TaskRead,
    TaskReorder,
    TaskStageUpdate,
    task_read,
)

router = APIRouter(prefix="/projects/{project_id}/tasks", tags=["tasks"])


@router.get(
    "",
    response_model=list[TaskRead],
    summary="List tasks",
    description=(
        "Tasks in board order: by column, then position, newest first on ties. "
        "Each card embeds its assignee's display fields."
    ),
    responses={404: {"description": "Project not found"}},
)
async def list_tasks(
    project_id: UUID,
    principal: CurrentPrincipal,
    task_service: TaskServiceDep,
) -> list[TaskRead]:
    cards = await task_service.list_tasks(principal, project_id)
    return [task_read(*card) for card in cards]


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
    description="Adds the task to the bottom of its column.",
    responses={404: {"description": "Project or assignee not found"}},
)
async def create_task(
    project_id: UUID,
    request: TaskCreate,
    principal: CurrentPrincipal,
    task_service: TaskServiceDep,
    audit: AuditServiceDep,
) -> TaskRead:
    task = await task_service.create_task(principal, project_id, request)
    await audit.log_success(
        principal,
        AuditAction.TASK_CREATE,
        "task",
        entity_id=task.id,
        project_id=project_id,
        changes={"status": task.status, "order_index": task.order_index},
    )
    (card,) = await task_service.cards([task])
    return task_read(*card)


@router.patch(
    "",
    response_model=TaskRead,
    summary="Move task",
    description=(
        "Sets the task's column and/or position exactly as given. Other tasks "
        "are not renumbered; use PUT /order to rewrite a whole column."
    ),
    responses={404: {"description": "Task not found in this project"}},
)
async def move_task(
    project_id: UUID,
    request: TaskPlacementUpdate,
    principal: CurrentPrincipal,
    task_service: TaskServiceDep,
    audit: AuditServiceDep,
) -> TaskRead:
    task = await task_service.update_placement(principal, project_id, request)
    await audit.log_success(
        principal,
        AuditAction.TASK_MOVE,
        "task",
        entity_id=task.id,
        project_id=project_id,
        changes=request.model_dump(mode="json", exclude_none=True, exclude={"task_id"}),
    )
    (card,) = await task_service.cards([task])
    return task_read(*card)


@router.put(
    "/order",
    response_model=list[TaskRead],
    summary="Reorder column",
    description="Renumbers every task in one column 0..n-1 in the order given.",
    responses={
        400: {"description": "taskIds do not match the tasks in the column"},
        404: {"description": "Project not found"},
    },
)
async def reorder_column(
    project_id: UUID,
    request: TaskReorder,
    principal: CurrentPrincipal,
    task_service: TaskServiceDep,
    audit: AuditServiceDep,
) -> list[TaskRead]:
    tasks = await task_service.reindex(principal, project_id, request)
    await audit.log_success(
        principal,
        AuditAction.TASK_REINDEX,
        "project",
        entity_id=project_id,
        project_id=project_id,
        changes={"status": request.status.value, "task_ids": [str(t.id) for t in tasks]},
    )
    return [task_read(*card) for card in await task_service.cards(tasks)]


@router.patch(
    "/{task_id}/stage",
    response_model=TaskRead,
    summary="Tag task with a delivery stage",
    responses={404: {"description": "Task not found in this project"}},
)
async def tag_task_stage(
    project_id: UUID,
    task_id: UUID,
    request: TaskStageUpdate,
    principal: CurrentPrincipal,
    task_service: TaskServiceDep,
    audit: AuditServiceDep,
) -> TaskRead:
    task = await task_service.tag_stage(principal, project_id, task_id, request.riba_stage)
    await audit.log_success(
        principal,
        AuditAction.TASK_STAGE_TAG,
        "task",
        entity_id=task.id,
        project_id=project_id,
        changes={"riba_stage": task.riba_stage},
    )
    (card,) = await task_service.cards([task])
    return task_read(*card)
