"""Project endpoints - registry, project page and delivery stage."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.matchboard.api.dependencies import AuditServiceDep, CurrentPrincipal, ProjectServiceDep
from src.matchboard.models import AuditAction
from src.matchboard.schemas.audit import AuditLogRead
from src.matchboard.schemas.pagination import PaginatedResponse
from src.matchboard.schemas.project import (
    OrganizationSummary,
    ProjectCreate,
    ProjectDetail,
    ProjectRead,
    StageUpdate,
)
from src.matchboard.schemas.tendering import nomination_read
from src.matchboard.services import ProjectDetailView

router = APIRouter(prefix="/projects", tags=["projects"])

CursorQuery = Annotated[str | None, Query(description="Cursor for pagination")]
LimitQuery = Annotated[int, Query(ge=1, le=100, description="Max items to return")]


def _detail(view: ProjectDetailView) -> ProjectDetail:
    base = ProjectRead.model_validate(view.project)
    return ProjectDetail(
        **base.model_dump(exclude={"current_stage_label"}),
        developer=(
            OrganizationSummary.model_validate(view.organization) if view.organization else None
        ),
        bid_count=view.bid_count,
        task_count=view.task_count,
        professionals=[nomination_read(*entry) for entry in view.roster],
    )


@router.get(
    "",
    response_model=PaginatedResponse[ProjectRead],
    summary="List projects",
    description=(
        "Developers see their own organization's projects; "
        "professionals and admins see every project."
    ),
)
async def list_projects(
    principal: CurrentPrincipal,
    project_service: ProjectServiceDep,
    cursor: CursorQuery = None,
    limit: LimitQuery = 50,
) -> PaginatedResponse[ProjectRead]:
    projects, next_cursor, has_more = await project_service.list_projects(
        principal, cursor=cursor, limit=limit
    )
    return PaginatedResponse(
        items=[ProjectRead.model_validate(p) for p in projects],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={
        201: {"description": "Project created at Stage 0"},
        403: {"description": "Only developers with an organization can create projects"},
    },
)
async def create_project(
    request: ProjectCreate,
    principal: CurrentPrincipal,
    project_service: ProjectServiceDep,
    audit: AuditServiceDep,
) -> ProjectRead:
    project = await project_service.create_project(principal, request)
    await audit.log_success(
        principal,
        AuditAction.PROJECT_CREATE,
        "project",
        entity_id=project.id,
        project_id=project.id,
        changes={"title": project.title, "current_stage": project.current_stage},
    )
    return ProjectRead.model_validate(project)


@router.get(
    "/{project_id}",
    response_model=ProjectDetail,
    summary="Get project",
    description=(
        "Project page with bid and task counts. The nomination roster is only "
        "filled in for the owning organization and admins."
    ),
    responses={404: {"description": "Project not found"}},
)
async def get_project(
    project_id: UUID,
    principal: CurrentPrincipal,
    project_service: ProjectServiceDep,
) -> ProjectDetail:
    view = await project_service.get_detail(principal, project_id)
    return _detail(view)


@router.patch(
    "/{project_id}/stage",
    response_model=ProjectRead,
    summary="Change delivery stage",
    responses={
        403: {"description": "Not a member of the owning organization"},
        404: {"description": "Project not found"},
    },
)
async def change_stage(
    project_id: UUID,
    request: StageUpdate,
    principal: CurrentPrincipal,
    project_service: ProjectServiceDep,
    audit: AuditServiceDep,
) -> ProjectRead:
    project, previous = await project_service.change_stage(principal, project_id, request.stage)
    if previous != request.stage:
        await audit.log_success(
            principal,
            AuditAction.PROJECT_STAGE_CHANGE,
            "project",
            entity_id=project.id,
            project_id=project.id,
            changes={"current_stage": [previous.value, request.stage.value]},
        )
    return ProjectRead.model_validate(project)


@router.get(
    "/{project_id}/audit-logs",
    response_model=PaginatedResponse[AuditLogRead],
    summary="Project audit trail",
    responses={
        403: {"description": "Not a member of the owning organization"},
        404: {"description": "Project not found"},
    },
)
async def list_audit_logs(
    project_id: UUID,
    principal: CurrentPrincipal,
    project_service: ProjectServiceDep,
    audit: AuditServiceDep,
    cursor: CursorQuery = None,
    limit: LimitQuery = 50,
    action: Annotated[str | None, Query(description="Filter by action type")] = None,
) -> PaginatedResponse[AuditLogRead]:
    project = await project_service.get_project(project_id)
    logs, next_cursor, has_more = await audit.list_project_logs(
        principal, project, cursor=cursor, limit=limit, action=action
    )
    return PaginatedResponse(
        items=[AuditLogRead.model_validate(log) for log in logs],
        next_cursor=next_cursor,
        has_more=has_more,
    )
