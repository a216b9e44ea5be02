"""Read-only repositories for identity-side records."""

from collections.abc import Sequence
from uuid import UUID

from sqlmodel import col, select

from src.matchboard.models import (
    Organization,
    PortfolioItem,
    ProfessionalProfile,
    Qualification,
    User,
)
from src.matchboard.repositories.base import BaseRepository


class OrganizationRepository(BaseRepository[Organization]):
    model = Organization


class UserRepository(BaseRepository[User]):
    model = User


class ProfessionalProfileRepository(BaseRepository[ProfessionalProfile]):
    model = ProfessionalProfile

    async def get_by_user_id(self, user_id: UUID) -> ProfessionalProfile | None:
        result = await self.session.execute(
            select(ProfessionalProfile).where(ProfessionalProfile.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_with_users(
        self, ids: Sequence[UUID]
    ) -> dict[UUID, tuple[ProfessionalProfile, User]]:
        """Profiles among ``ids`` with their user accounts, keyed by profile id."""
        if not ids:
            return {}
        result = await self.session.execute(
            select(ProfessionalProfile, User)
            .join(User, col(User.id) == col(ProfessionalProfile.user_id))
            .where(col(ProfessionalProfile.id).in_(list(ids)))
        )
        return {row[0].id: (row[0], row[1]) for row in result.all()}


class QualificationRepository(BaseRepository[Qualification]):
    model = Qualification

    async def list_owned(self, profile_id: UUID, ids: Sequence[UUID]) -> list[Qualification]:
        """Return the qualifications among ``ids`` that belong to ``profile_id``.

        Ids owned by another profile, or unknown, are left out.
        """
        if not ids:
            return []
        result = await self.session.execute(
            select(Qualification).where(
                Qualification.profile_id == profile_id,
                Qualification.id.in_(list(ids)),  # type: ignore[attr-defined]
            )
        )
        return list(result.scalars().all())


class PortfolioItemRepository(BaseRepository[PortfolioItem]):
    model = PortfolioItem

    async def list_owned(self, profile_id: UUID, ids: Sequence[UUID]) -> list[PortfolioItem]:
        """Return the portfolio items among ``ids`` that belong to ``profile_id``."""
        if not ids:
            return []
        result = await self.session.execute(
            select(PortfolioItem).where(
                PortfolioItem.profile_id == profile_id,
                PortfolioItem.id.in_(list(ids)),  # type: ignore[attr-defined]
            )
        )
        return list(result.scalars().all())
