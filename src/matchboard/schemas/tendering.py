"""Bid and nomination schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from src.matchboard.models import ProfessionalProfile, ProjectProfessional, User
from src.matchboard.models.enums import BidStatus
from src.matchboard.schemas.base import APIModel


class BidCreate(APIModel):
    proposal_text: str = Field(min_length=1, max_length=20000)
    fee_proposal: str = Field(min_length=1, max_length=5000)
    methodology: str = Field(min_length=1, max_length=20000)
    timeline: str = Field(min_length=1, max_length=5000)
    qualification_ids: list[UUID] = Field(default_factory=list)
    portfolio_ids: list[UUID] = Field(default_factory=list)

    @field_validator("proposal_text", "fee_proposal", "methodology", "timeline")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field cannot be empty or whitespace only")
        return v


class BidRead(APIModel):
    id: UUID
    project_id: UUID
    professional_id: UUID
    status: BidStatus
    proposal_text: str
    submitted_at: datetime


class NominationCreate(APIModel):
    professional_id: UUID
    role_description: str = Field(min_length=1, max_length=200)

    @field_validator("role_description")
    @classmethod
    def validate_role_description(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Role description cannot be empty or whitespace only")
        return v


class ProfessionalSummary(APIModel):
    id: UUID
    full_name: str
    company_name: str | None
    profession: str


class NominationRead(APIModel):
    id: UUID
    project_id: UUID
    professional_id: UUID
    role_description: str
    appointed_at: datetime
    professional: ProfessionalSummary | None = None


def professional_summary(profile: ProfessionalProfile, user: User) -> ProfessionalSummary:
    return ProfessionalSummary(
        id=profile.id,
        full_name=user.full_name,
        company_name=profile.company_name,
        profession=profile.profession,
    )


def nomination_read(
    nomination: ProjectProfessional,
    profile: ProfessionalProfile | None = None,
    user: User | None = None,
) -> NominationRead:
    """Build a roster entry; display fields are included when the profile is known."""
    professional = None
    if profile is not None and user is not None:
        professional = professional_summary(profile, user)
    return NominationRead(
        id=nomination.id,
        project_id=nomination.project_id,
        professional_id=nomination.professional_id,
        role_description=nomination.role_description,
        appointed_at=nomination.appointed_at,
        professional=professional,
    )
