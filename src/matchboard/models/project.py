"""Project and task board models."""

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from src.matchboard.models.base import new_id, utc_now
from src.matchboard.models.enums import RibaStage, TaskStatus


class Project(SQLModel, table=True):
    """A development scheme owned by one developer organization."""

    __tablename__ = "projects"
    __table_args__ = (Index("ix_projects_org_created", "organization_id", "created_at"),)

    id: UUID = Field(default_factory=new_id, primary_key=True)
    organization_id: UUID = Field(foreign_key="organizations.id")
    title: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    site_address: str | None = Field(default=None, max_length=500)
    local_authority: str | None = Field(default=None, max_length=200)
    units_planned: int | None = Field(default=None)
    budget_estimate: int | None = Field(default=None)
    current_stage: str = Field(default=RibaStage.STAGE_0.value, max_length=20)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)


class Task(SQLModel, table=True):
    """A card on a project's board.

    Within one (project_id, status) column, order_index values are unique.
    Gaps are allowed.
    """

    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_project_status_order", "project_id", "status", "order_index"),
    )

    id: UUID = Field(default_factory=new_id, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id")
    title: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    status: str = Field(default=TaskStatus.BACKLOG.value, max_length=20)
    riba_stage: str | None = Field(default=None, max_length=20)
    due_date: date | None = Field(default=None)
    assignee_id: UUID | None = Field(default=None, foreign_key="professional_profiles.id")
    order_index: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
