"""Organization, user and professional profile factories."""

from polyfactory import Use

from src.matchboard.models import (
    Organization,
    PortfolioItem,
    ProfessionalProfile,
    Qualification,
    User,
    UserRole,
)
from tests.factories.base import BaseFactory, new_id, utc_now


class OrganizationFactory(BaseFactory):
    __model__ = Organization

    id = Use(new_id)
    name = Use(lambda: f"Developer {new_id().hex[-8:]}")
    created_at = Use(utc_now)


class UserFactory(BaseFactory):
    """Factory for generating User test data."""

    __model__ = User

    id = Use(new_id)
    email = Use(lambda: f"user_{new_id().hex[-8:]}@example.com")
    full_name = "Test User"
    role = UserRole.DEVELOPER.value
    organization_id = None
    is_active = True
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def developer(cls, organization_id, **kwargs):
        return cls.build(
            role=UserRole.DEVELOPER.value, organization_id=organization_id, **kwargs
        )

    @classmethod
    def professional(cls, **kwargs):
        return cls.build(
            role=UserRole.PROFESSIONAL.value,
            full_name=kwargs.pop("full_name", "Pat Professional"),
            **kwargs,
        )

    @classmethod
    def admin(cls, **kwargs):
        return cls.build(
            role=UserRole.ADMIN.value, full_name=kwargs.pop("full_name", "Ada Admin"), **kwargs
        )

    @classmethod
    def inactive(cls, **kwargs):
        """Create an inactive user."""
        return cls.build(is_active=False, **kwargs)


class ProfessionalProfileFactory(BaseFactory):
    __model__ = ProfessionalProfile

    id = Use(new_id)
    user_id = None
    company_name = "Studio Ltd"
    profession = "Architect"
    created_at = Use(utc_now)


class QualificationFactory(BaseFactory):
    __model__ = Qualification

    id = Use(new_id)
    profile_id = None
    title = "RIBA Chartered"
    authority = "RIBA"
    credential_id = None
    created_at = Use(utc_now)


class PortfolioItemFactory(BaseFactory):
    __model__ = PortfolioItem

    id = Use(new_id)
    profile_id = None
    title = "Riverside Homes"
    description = None
    location = "Leeds"
    units = 40
    created_at = Use(utc_now)
