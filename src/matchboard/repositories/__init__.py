"""Repository layer - data access abstraction."""

from src.matchboard.repositories.audit import AuditLogRepository
from src.matchboard.repositories.base import BaseRepository
from src.matchboard.repositories.identity import (
    OrganizationRepository,
    PortfolioItemRepository,
    ProfessionalProfileRepository,
    QualificationRepository,
    UserRepository,
)
from src.matchboard.repositories.project import ProjectRepository
from src.matchboard.repositories.task import TaskRepository
from src.matchboard.repositories.tendering import BidRepository, NominationRepository

__all__ = [
    "AuditLogRepository",
    "BaseRepository",
    "BidRepository",
    "NominationRepository",
    "OrganizationRepository",
    "PortfolioItemRepository",
    "ProfessionalProfileRepository",
    "ProjectRepository",
    "QualificationRepository",
    "TaskRepository",
    "UserRepository",
]
