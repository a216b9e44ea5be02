"""Nomination endpoints - the private staffing roster."""

from uuid import UUID

from fastapi import APIRouter, status

from src.matchboard.api.dependencies import (
    AuditServiceDep,
    CurrentPrincipal,
    NominationServiceDep,
)
from src.matchboard.models import AuditAction
from src.matchboard.schemas.base import MessageResponse
from src.matchboard.schemas.tendering import NominationCreate, NominationRead, nomination_read

router = APIRouter(prefix="/projects/{project_id}/nominate", tags=["nominations"])


@router.get(
    "",
    response_model=list[NominationRead],
    summary="View roster",
    responses={
        403: {"description": "Not a member of the owning organization"},
        404: {"description": "Project not found (ADMIN only; others get 403)"},
    },
)
async def view_roster(
    project_id: UUID,
    principal: CurrentPrincipal,
    nomination_service: NominationServiceDep,
) -> list[NominationRead]:
    roster = await nomination_service.view_roster(principal, project_id)
    return [nomination_read(*entry) for entry in roster]


@router.post(
    "",
    response_model=NominationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Nominate professional",
    responses={
        400: {"description": "Invalid body, or professional already nominated"},
        403: {"description": "Not a member of the owning organization"},
        404: {"description": "Project or professional not found"},
    },
)
async def nominate(
    project_id: UUID,
    request: NominationCreate,
    principal: CurrentPrincipal,
    nomination_service: NominationServiceDep,
    audit: AuditServiceDep,
) -> NominationRead:
    nomination = await nomination_service.nominate(
        principal, project_id, request.professional_id, request.role_description
    )
    await audit.log_success(
        principal,
        AuditAction.NOMINATION_CREATE,
        "nomination",
        entity_id=nomination.id,
        project_id=project_id,
        changes={
            "professional_id": str(nomination.professional_id),
            "role_description": nomination.role_description,
        },
    )
    return nomination_read(nomination)


@router.delete(
    "/{assignment_id}",
    response_model=MessageResponse,
    summary="Remove nomination",
    responses={
        400: {"description": "Nomination belongs to a different project"},
        403: {"description": "Not a member of the owning organization"},
        404: {"description": "Nomination not found"},
    },
)
async def remove_nomination(
    project_id: UUID,
    assignment_id: UUID,
    principal: CurrentPrincipal,
    nomination_service: NominationServiceDep,
    audit: AuditServiceDep,
) -> MessageResponse:
    nomination = await nomination_service.remove(principal, project_id, assignment_id)
    await audit.log_success(
        principal,
        AuditAction.NOMINATION_REMOVE,
        "nomination",
        entity_id=assignment_id,
        project_id=project_id,
        changes={"professional_id": str(nomination.professional_id)},
    )
    return MessageResponse(message="Professional removed from project")
