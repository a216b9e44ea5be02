"""Service factory dependencies."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request

from src.matchboard.api.dependencies.db import DBSession
from src.matchboard.api.dependencies.repositories import (
    BidRepo,
    NominationRepo,
    OrganizationRepo,
    PortfolioRepo,
    ProfileRepo,
    ProjectRepo,
    QualificationRepo,
    TaskRepo,
)
from src.matchboard.core.db import get_session
from src.matchboard.repositories import AuditLogRepository
from src.matchboard.services import (
    AuditService,
    NominationService,
    ProjectService,
    TaskService,
    TenderingService,
)


def get_nomination_service(
    project_repo: ProjectRepo,
    profile_repo: ProfileRepo,
    nomination_repo: NominationRepo,
    session: DBSession,
) -> NominationService:
    return NominationService(project_repo, profile_repo, nomination_repo, session)


NominationServiceDep = Annotated[NominationService, Depends(get_nomination_service)]


def get_project_service(
    project_repo: ProjectRepo,
    organization_repo: OrganizationRepo,
    task_repo: TaskRepo,
    bid_repo: BidRepo,
    nomination_service: NominationServiceDep,
    session: DBSession,
) -> ProjectService:
    return ProjectService(
        project_repo, organization_repo, task_repo, bid_repo, nomination_service, session
    )


def get_task_service(
    project_repo: ProjectRepo,
    task_repo: TaskRepo,
    profile_repo: ProfileRepo,
    session: DBSession,
) -> TaskService:
    return TaskService(project_repo, task_repo, profile_repo, session)


def get_tendering_service(
    project_repo: ProjectRepo,
    bid_repo: BidRepo,
    qualification_repo: QualificationRepo,
    portfolio_repo: PortfolioRepo,
    session: DBSession,
) -> TenderingService:
    return TenderingService(project_repo, bid_repo, qualification_repo, portfolio_repo, session)


async def get_audit_service(request: Request) -> AsyncGenerator[AuditService]:
    """Get audit service with its own isolated session.

    Commits independently from the business transaction so audit rows are
    kept even when the request's own work rolls back.
    """
    async with get_session(request.app.state.session_factory) as session:
        yield AuditService(AuditLogRepository(session), session)


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
TenderingServiceDep = Annotated[TenderingService, Depends(get_tendering_service)]
AuditServiceDep = Annotated[AuditService, Depends(get_audit_service)]
