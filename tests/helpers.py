"""Test helper functions for common data creation patterns."""

from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from src.matchboard.core.security import create_access_token
from src.matchboard.models import Organization, ProfessionalProfile, Project, User
from tests.factories import (
    OrganizationFactory,
    ProfessionalProfileFactory,
    ProjectFactory,
    UserFactory,
)


def auth_headers(user: User) -> dict[str, str]:
    """Bearer header for a user, as the identity provider would issue it."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


def expired_auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(user.id, expires_delta=timedelta(minutes=-1))
    return {"Authorization": f"Bearer {token}"}


async def create_developer(
    session: AsyncSession,
    organization: Organization | None = None,
    **user_kwargs,
) -> tuple[User, Organization]:
    """Create a developer user and the organization they belong to.

    Args:
        session: Database session
        organization: Existing organization to join (default: a new one)
        **user_kwargs: Additional args passed to UserFactory

    Returns:
        Tuple of (user, organization)
    """
    if organization is None:
        organization = OrganizationFactory.build()
        session.add(organization)
        await session.flush()

    user = UserFactory.developer(organization.id, **user_kwargs)
    session.add(user)
    await session.flush()
    return user, organization


async def create_professional(
    session: AsyncSession,
    **user_kwargs,
) -> tuple[User, ProfessionalProfile]:
    """Create a professional user with their profile.

    Returns:
        Tuple of (user, profile)
    """
    profile_kwargs = {
        key: user_kwargs.pop(key) for key in ("company_name", "profession") if key in user_kwargs
    }
    user = UserFactory.professional(**user_kwargs)
    session.add(user)
    await session.flush()

    profile = ProfessionalProfileFactory.build(user_id=user.id, **profile_kwargs)
    session.add(profile)
    await session.flush()
    return user, profile


async def create_admin(session: AsyncSession, **user_kwargs) -> User:
    user = UserFactory.admin(**user_kwargs)
    session.add(user)
    await session.flush()
    return user


async def create_project(
    session: AsyncSession,
    organization: Organization,
    **project_kwargs,
) -> Project:
    project = ProjectFactory.build(organization_id=organization.id, **project_kwargs)
    session.add(project)
    await session.flush()
    return project
