"""Audit log model for tracking project mutations."""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Column, Index
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

from src.matchboard.models.base import new_id, utc_now

class AuditAction(str, Enum):
    """Audit action types for type-safe logging."""

    # Projects
    PROJECT_CREATE = "project.create"
    PROJECT_STAGE_CHANGE = "project.stage_change"

    # Task board
    TASK_CREATE = "task.create"
    TASK_MOVE = "task.move"
    TASK_REINDEX = "task.reindex"
    TASK_STAGE_TAG = "task.stage_tag"

    # Tendering
    BID_SUBMIT = "bid.submit"

    # Nominations
    NOMINATION_CREATE = "nomination.create"
    NOMINATION_REMOVE = "nomination.remove"


class AuditLog(SQLModel, table=True):
    """Append-only record of who changed what, and from where."""

    __tablename__ = "audit_logs"
    __table_args__ = (
        Index("ix_audit_logs_project_created", "project_id", "created_at"),
        Index("ix_audit_logs_user_created", "user_id", "created_at"),
        Index("ix_audit_logs_entity", "entity_type", "entity_id"),
    )

    id: UUID = Field(default_factory=new_id, primary_key=True)

    # Context
    user_id: UUID | None = Field(default=None, foreign_key="users.id")
    project_id: UUID | None = Field(default=None)

    # Action details
    action: str = Field(max_length=50)  # AuditAction value
    entity_type: str = Field(max_length=50)  # "project", "task", "bid", "nomination"
    entity_id: UUID | None = Field(default=None)
    changes: dict[str, Any] | None = Field(
        default=None,
        sa_column=Column(JSON().with_variant(JSONB(), "postgresql"), nullable=True),
    )

    # Request metadata
    ip_address: str | None = Field(max_length=45, default=None)
    user_agent: str | None = Field(max_length=500, default=None)
    request_id: str | None = Field(max_length=64, default=None)

    created_at: datetime = Field(default_factory=utc_now)
