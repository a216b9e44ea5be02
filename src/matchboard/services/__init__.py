"""Service layer - business rules and transaction control."""

from src.matchboard.services.audit_service import AuditService
from src.matchboard.services.nomination_service import NominationService, RosterEntry
from src.matchboard.services.project_service import ProjectDetailView, ProjectService
from src.matchboard.services.task_service import TaskService
from src.matchboard.services.tendering_service import TenderingService

__all__ = [
    "AuditService",
    "NominationService",
    "ProjectDetailView",
    "ProjectService",
    "RosterEntry",
    "TaskService",
    "TenderingService",
]
