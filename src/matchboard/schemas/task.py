"""Task board schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from src.matchboard.models import ProfessionalProfile, Task, User
from src.matchboard.models.enums import RibaStage, TaskStatus
from src.matchboard.schemas.base import APIModel
from src.matchboard.schemas.tendering import ProfessionalSummary, professional_summary


class TaskCreate(APIModel):
    """New card. The position in its column is assigned by the server."""

    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    status: TaskStatus = TaskStatus.BACKLOG
    riba_stage: RibaStage | None = None
    due_date: date | None = None
    assignee_id: UUID | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Task title cannot be empty or whitespace only")
        return v


class TaskPlacementUpdate(APIModel):
    """Move a card. Values are stored as given; siblings are not renumbered."""

    task_id: UUID
    status: TaskStatus | None = None
    order_index: int | None = Field(default=None, ge=0)


class TaskReorder(APIModel):
    """Full ordering of one column, first card first."""

    status: TaskStatus
    task_ids: list[UUID]

    @model_validator(mode="after")
    def check_unique_ids(self) -> "TaskReorder":
        if len(set(self.task_ids)) != len(self.task_ids):
            raise ValueError("task_ids must not contain duplicates")
        return self


class TaskStageUpdate(APIModel):
    """Tag a task with a delivery stage, or clear it with null."""

    riba_stage: RibaStage | None


class TaskRead(APIModel):
    id: UUID
    project_id: UUID
    title: str
    description: str | None
    status: TaskStatus
    riba_stage: RibaStage | None
    due_date: date | None
    assignee_id: UUID | None
    order_index: int
    created_at: datetime
    updated_at: datetime
    assignee: ProfessionalSummary | None = None


def task_read(
    task: Task,
    profile: ProfessionalProfile | None = None,
    user: User | None = None,
) -> TaskRead:
    """Build a board card; the assignee is embedded when its profile is known."""
    read = TaskRead.model_validate(task)
    if profile is not None and user is not None:
        read.assignee = professional_summary(profile, user)
    return read
