"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.matchboard.api.dependencies.db import DBSession
from src.matchboard.repositories import (
    BidRepository,
    NominationRepository,
    OrganizationRepository,
    PortfolioItemRepository,
    ProfessionalProfileRepository,
    ProjectRepository,
    QualificationRepository,
    TaskRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_organization_repository(session: DBSession) -> OrganizationRepository:
    return OrganizationRepository(session)


def get_profile_repository(session: DBSession) -> ProfessionalProfileRepository:
    return ProfessionalProfileRepository(session)


def get_qualification_repository(session: DBSession) -> QualificationRepository:
    return QualificationRepository(session)


def get_portfolio_repository(session: DBSession) -> PortfolioItemRepository:
    return PortfolioItemRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_task_repository(session: DBSession) -> TaskRepository:
    return TaskRepository(session)


def get_bid_repository(session: DBSession) -> BidRepository:
    return BidRepository(session)


def get_nomination_repository(session: DBSession) -> NominationRepository:
    return NominationRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
OrganizationRepo = Annotated[OrganizationRepository, Depends(get_organization_repository)]
ProfileRepo = Annotated[ProfessionalProfileRepository, Depends(get_profile_repository)]
QualificationRepo = Annotated[QualificationRepository, Depends(get_qualification_repository)]
PortfolioRepo = Annotated[PortfolioItemRepository, Depends(get_portfolio_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
TaskRepo = Annotated[TaskRepository, Depends(get_task_repository)]
BidRepo = Annotated[BidRepository, Depends(get_bid_repository)]
NominationRepo = Annotated[NominationRepository, Depends(get_nomination_repository)]
