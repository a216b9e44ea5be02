"""Repositories for bids and nominations."""

from uuid import UUID

from sqlmodel import col, select

from src.matchboard.models import (
    Bid,
    ProfessionalProfile,
    ProjectProfessional,
    User,
)
from src.matchboard.repositories.base import BaseRepository


class BidRepository(BaseRepository[Bid]):
    model = Bid

    async def get_for_pair(self, project_id: UUID, professional_id: UUID) -> Bid | None:
        result = await self.session.execute(
            select(Bid).where(
                Bid.project_id == project_id,
                Bid.professional_id == professional_id,
            )
        )
        return result.scalar_one_or_none()

    async def count_for_project(self, project_id: UUID) -> int:
        return await self.count_where(Bid.project_id == project_id)


class NominationRepository(BaseRepository[ProjectProfessional]):
    model = ProjectProfessional

    async def get_for_pair(
        self, project_id: UUID, professional_id: UUID
    ) -> ProjectProfessional | None:
        result = await self.session.execute(
            select(ProjectProfessional).where(
                ProjectProfessional.project_id == project_id,
                ProjectProfessional.professional_id == professional_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_roster(
        self, project_id: UUID
    ) -> list[tuple[ProjectProfessional, ProfessionalProfile, User]]:
        """Nominations of a project with the professional's display records."""
        result = await self.session.execute(
            select(ProjectProfessional, ProfessionalProfile, User)
            .join(
                ProfessionalProfile,
                col(ProfessionalProfile.id) == col(ProjectProfessional.professional_id),
            )
            .join(User, col(User.id) == col(ProfessionalProfile.user_id))
            .where(ProjectProfessional.project_id == project_id)
            .order_by(col(ProjectProfessional.appointed_at).asc())
        )
        return [(row[0], row[1], row[2]) for row in result.all()]

    async def count_for_project(self, project_id: UUID) -> int:
        return await self.count_where(ProjectProfessional.project_id == project_id)
