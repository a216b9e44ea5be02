"""Nominations - the private staffing roster of a project."""

from typing import NamedTuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.matchboard.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from src.matchboard.core.logging import get_logger
from src.matchboard.core.security import Principal
from src.matchboard.models import ProfessionalProfile, Project, ProjectProfessional, User
from src.matchboard.repositories import (
    NominationRepository,
    ProfessionalProfileRepository,
    ProjectRepository,
)
from src.matchboard.services.policy import Operation, authorize, is_allowed

logger = get_logger(__name__)


class RosterEntry(NamedTuple):
    nomination: ProjectProfessional
    profile: ProfessionalProfile
    user: User


class NominationService:
    """Appoint and remove professionals, and guard who may see the roster."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        profile_repo: ProfessionalProfileRepository,
        nomination_repo: NominationRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.profile_repo = profile_repo
        self.nomination_repo = nomination_repo
        self.session = session

    async def _get_project(self, project_id: UUID) -> Project:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        return project

    async def nominate(
        self,
        principal: Principal,
        project_id: UUID,
        professional_id: UUID,
        role_description: str,
    ) -> ProjectProfessional:
        """Appoint a professional to a project.

        Raises:
            NotFoundError: project or professional profile does not exist
            ForbiddenError: caller is not in the owning organization nor ADMIN
            ConflictError: the professional is already on this project
        """
        project = await self._get_project(project_id)
        authorize(principal, Operation.NOMINATE_PROFESSIONAL, project)

        if await self.profile_repo.get_by_id(professional_id) is None:
            raise NotFoundError(f"Professional {professional_id} not found")

        if await self.nomination_repo.get_for_pair(project_id, professional_id) is not None:
            raise ConflictError("Professional is already nominated for this project")

        nomination = ProjectProfessional(
            project_id=project_id,
            professional_id=professional_id,
            role_description=role_description,
        )
        self.nomination_repo.add(nomination)

        try:
            await self.session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent nomination of the same pair
            await self.session.rollback()
            raise ConflictError("Professional is already nominated for this project") from e
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "professional_nominated",
            project_id=str(project_id),
            professional_id=str(professional_id),
            nomination_id=str(nomination.id),
        )
        return nomination

    async def remove(
        self,
        principal: Principal,
        project_id: UUID,
        assignment_id: UUID,
    ) -> ProjectProfessional:
        """Remove a nomination from a project.

        The nomination must belong to ``project_id``; an id from another
        project is rejected before any permission check and nothing is
        deleted.
        """
        nomination = await self.nomination_repo.get_by_id(assignment_id)
        if nomination is None:
            raise NotFoundError(f"Nomination {assignment_id} not found")

        if nomination.project_id != project_id:
            raise InvalidInputError("Nomination does not belong to this project")

        project = await self._get_project(nomination.project_id)
        authorize(principal, Operation.REMOVE_NOMINATION, project)

        await self.nomination_repo.delete(nomination)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "nomination_removed",
            project_id=str(project_id),
            nomination_id=str(assignment_id),
        )
        return nomination

    async def view_roster(self, principal: Principal, project_id: UUID) -> list[RosterEntry]:
        """Return the roster, or raise ForbiddenError.

        A missing project is reported as forbidden to everyone but ADMIN, so
        the answer for an outsider never depends on what exists.
        """
        project = await self.project_repo.get_by_id(project_id)
        authorize(principal, Operation.VIEW_NOMINATION_ROSTER, project)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        return await self._roster(project.id)

    async def visible_roster(self, principal: Principal, project: Project) -> list[RosterEntry]:
        """Roster for embedding in a project page; empty when not permitted."""
        if not is_allowed(principal, Operation.VIEW_NOMINATION_ROSTER, project):
            return []
        return await self._roster(project.id)

    async def _roster(self, project_id: UUID) -> list[RosterEntry]:
        rows = await self.nomination_repo.list_roster(project_id)
        return [RosterEntry(*row) for row in rows]
