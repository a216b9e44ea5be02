"""Model exports.

Import from here: `from src.matchboard.models import Project, Task`
"""

from src.matchboard.models.audit import AuditAction, AuditLog
from src.matchboard.models.enums import BidStatus, RibaStage, TaskStatus, UserRole
from src.matchboard.models.identity import (
    Organization,
    PortfolioItem,
    ProfessionalProfile,
    Qualification,
    User,
)
from src.matchboard.models.project import Project, Task
from src.matchboard.models.tendering import Bid, ProjectProfessional

__all__ = [
    # Enums
    "BidStatus",
    "RibaStage",
    "TaskStatus",
    "UserRole",
    # Identity
    "Organization",
    "PortfolioItem",
    "ProfessionalProfile",
    "Qualification",
    "User",
    # Collaboration
    "Bid",
    "Project",
    "ProjectProfessional",
    "Task",
    # Audit
    "AuditAction",
    "AuditLog",
]
