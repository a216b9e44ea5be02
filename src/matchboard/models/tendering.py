"""Bids (tender applications) and nominations (private staffing roster)."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Text, UniqueConstraint
from sqlmodel import Field, SQLModel

from src.matchboard.models.base import new_id, utc_now
from src.matchboard.models.enums import BidStatus


class Bid(SQLModel, table=True):
    """A professional's tender for a project.

    proposal_text is a frozen snapshot taken at submission and is never
    rebuilt from live profile data.
    """

    __tablename__ = "bids"
    __table_args__ = (
        UniqueConstraint("project_id", "professional_id", name="uq_bids_project_professional"),
    )

    id: UUID = Field(default_factory=new_id, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    professional_id: UUID = Field(foreign_key="professional_profiles.id", index=True)
    status: str = Field(default=BidStatus.SUBMITTED.value, max_length=20)
    proposal_text: str = Field(sa_type=Text)
    submitted_at: datetime = Field(default_factory=utc_now)


class ProjectProfessional(SQLModel, table=True):
    """A professional appointed to a project by its owning organization."""

    __tablename__ = "project_professionals"
    __table_args__ = (
        UniqueConstraint(
            "project_id",
            "professional_id",
            name="uq_project_professionals_project_professional",
        ),
    )

    id: UUID = Field(default_factory=new_id, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    professional_id: UUID = Field(foreign_key="professional_profiles.id", index=True)
    role_description: str = Field(max_length=200)
    appointed_at: datetime = Field(default_factory=utc_now)
