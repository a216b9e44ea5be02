"""Audit log schemas for API responses."""

from datetime import datetime
from typing import Any
from uuid import UUID

from src.matchboard.schemas.base import APIModel


class AuditLogRead(APIModel):
    id: UUID
    user_id: UUID | None
    project_id: UUID | None
    action: str
    entity_type: str
    entity_id: UUID | None
    changes: dict[str, Any] | None
    request_id: str | None
    created_at: datetime
