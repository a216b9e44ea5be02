"""Project schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, computed_field, field_validator

from src.matchboard.models.enums import RibaStage
from src.matchboard.schemas.base import APIModel
from src.matchboard.schemas.tendering import NominationRead


def _strip_optional(v: str | None) -> str | None:
    if v is not None:
        v = v.strip()
        if not v:
            return None
    return v


class ProjectCreate(APIModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    site_address: str | None = Field(default=None, max_length=500)
    local_authority: str | None = Field(default=None, max_length=200)
    units_planned: int | None = Field(default=None, ge=0)
    budget_estimate: int | None = Field(default=None, ge=0)
    current_stage: RibaStage = RibaStage.STAGE_0

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project title cannot be empty or whitespace only")
        return v

    @field_validator("description", "site_address", "local_authority")
    @classmethod
    def validate_free_text(cls, v: str | None) -> str | None:
        return _strip_optional(v)


class StageUpdate(APIModel):
    stage: RibaStage


class ProjectRead(APIModel):
    id: UUID
    organization_id: UUID
    title: str
    description: str | None
    site_address: str | None
    local_authority: str | None
    units_planned: int | None
    budget_estimate: int | None
    current_stage: RibaStage
    created_at: datetime
    updated_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def current_stage_label(self) -> str:
        return self.current_stage.label


class OrganizationSummary(APIModel):
    id: UUID
    name: str


class ProjectDetail(ProjectRead):
    """Project page payload.

    ``professionals`` is the private roster. Callers outside the owning
    organization get an empty list, the same shape as a project nobody
    has been appointed to.
    """

    developer: OrganizationSummary | None = None
    bid_count: int = 0
    task_count: int = 0
    professionals: list[NominationRead] = Field(default_factory=list)
