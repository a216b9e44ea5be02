"""FastAPI dependency injection definitions."""

from src.matchboard.api.dependencies.auth import CurrentPrincipal, get_current_principal
from src.matchboard.api.dependencies.db import DBSession, get_db_session
from src.matchboard.api.dependencies.services import (
    AuditServiceDep,
    NominationServiceDep,
    ProjectServiceDep,
    TaskServiceDep,
    TenderingServiceDep,
    get_audit_service,
    get_nomination_service,
    get_project_service,
    get_task_service,
    get_tendering_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "CurrentPrincipal",
    "get_current_principal",
    # Services
    "AuditServiceDep",
    "NominationServiceDep",
    "ProjectServiceDep",
    "TaskServiceDep",
    "TenderingServiceDep",
    "get_audit_service",
    "get_nomination_service",
    "get_project_service",
    "get_task_service",
    "get_tendering_service",
]
