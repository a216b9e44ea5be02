"""Identity-side models: organizations, users and professional profiles.

These rows are owned by the registration and profile flows. The
collaboration engine only reads them.
"""

from datetime import datetime
from uuid import UUID

from sqlmodel import Field, SQLModel

from src.matchboard.models.base import new_id, utc_now
from src.matchboard.models.enums import UserRole


class Organization(SQLModel, table=True):
    """Developer organization - the tenant that owns projects."""

    __tablename__ = "organizations"

    id: UUID = Field(default_factory=new_id, primary_key=True)
    name: str = Field(max_length=200)
    created_at: datetime = Field(default_factory=utc_now)


class User(SQLModel, table=True):
    """Platform account. Credentials live with the identity provider."""

    __tablename__ = "users"

    id: UUID = Field(default_factory=new_id, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    full_name: str = Field(max_length=100)
    role: str = Field(default=UserRole.DEVELOPER.value, max_length=20)
    organization_id: UUID | None = Field(
        default=None, foreign_key="organizations.id", index=True
    )
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ProfessionalProfile(SQLModel, table=True):
    """Public face of a PROFESSIONAL user; target of bids and nominations."""

    __tablename__ = "professional_profiles"

    id: UUID = Field(default_factory=new_id, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", unique=True)
    company_name: str | None = Field(default=None, max_length=200)
    profession: str = Field(max_length=100)
    created_at: datetime = Field(default_factory=utc_now)


class Qualification(SQLModel, table=True):
    __tablename__ = "qualifications"

    id: UUID = Field(default_factory=new_id, primary_key=True)
    profile_id: UUID = Field(foreign_key="professional_profiles.id", index=True)
    title: str = Field(max_length=200)
    authority: str | None = Field(default=None, max_length=200)
    credential_id: str | None = Field(default=None, max_length=100)
    created_at: datetime = Field(default_factory=utc_now)


class PortfolioItem(SQLModel, table=True):
    __tablename__ = "portfolio_items"

    id: UUID = Field(default_factory=new_id, primary_key=True)
    profile_id: UUID = Field(foreign_key="professional_profiles.id", index=True)
    title: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    location: str | None = Field(default=None, max_length=200)
    units: int | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
