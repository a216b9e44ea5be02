"""Tendering endpoint - professionals apply to projects."""

from uuid import UUID

from fastapi import APIRouter, status

from src.matchboard.api.dependencies import AuditServiceDep, CurrentPrincipal, TenderingServiceDep
from src.matchboard.models import AuditAction
from src.matchboard.schemas.tendering import BidCreate, BidRead

router = APIRouter(prefix="/projects/{project_id}", tags=["tendering"])


@router.post(
    "/apply",
    response_model=BidRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit bid",
    description=(
        "Submits the caller's tender. The proposal is frozen into a single text "
        "snapshot, including the selected qualifications and portfolio items."
    ),
    responses={
        400: {"description": "Invalid body, or already applied to this project"},
        403: {"description": "Only professionals can apply"},
        404: {"description": "Project not found"},
    },
)
async def submit_bid(
    project_id: UUID,
    request: BidCreate,
    principal: CurrentPrincipal,
    tendering_service: TenderingServiceDep,
    audit: AuditServiceDep,
) -> BidRead:
    bid = await tendering_service.submit_bid(principal, project_id, request)
    await audit.log_success(
        principal,
        AuditAction.BID_SUBMIT,
        "bid",
        entity_id=bid.id,
        project_id=project_id,
    )
    return BidRead.model_validate(bid)
