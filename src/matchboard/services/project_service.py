"""Projects - creation, listing, the project page and delivery stage."""

from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.matchboard.core.exceptions import ForbiddenError, NotFoundError
from src.matchboard.core.logging import get_logger
from src.matchboard.core.security import Principal
from src.matchboard.models import Organization, Project, RibaStage, UserRole
from src.matchboard.models.base import utc_now
from src.matchboard.repositories import (
    BidRepository,
    OrganizationRepository,
    ProjectRepository,
    TaskRepository,
)
from src.matchboard.schemas.project import ProjectCreate
from src.matchboard.services.nomination_service import NominationService, RosterEntry
from src.matchboard.services.policy import Operation, authorize

logger = get_logger(__name__)


@dataclass
class ProjectDetailView:
    project: Project
    organization: Organization | None
    bid_count: int
    task_count: int
    roster: list[RosterEntry] = field(default_factory=list)


class ProjectService:
    def __init__(
        self,
        project_repo: ProjectRepository,
        organization_repo: OrganizationRepository,
        task_repo: TaskRepository,
        bid_repo: BidRepository,
        nomination_service: NominationService,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.organization_repo = organization_repo
        self.task_repo = task_repo
        self.bid_repo = bid_repo
        self.nomination_service = nomination_service
        self.session = session

    async def get_project(self, project_id: UUID) -> Project:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        return project

    async def create_project(self, principal: Principal, data: ProjectCreate) -> Project:
        """Create a project owned by the caller's organization."""
        authorize(principal, Operation.CREATE_PROJECT)
        if principal.organization_id is None:
            raise ForbiddenError()

        project = Project(
            organization_id=principal.organization_id,
            title=data.title,
            description=data.description,
            site_address=data.site_address,
            local_authority=data.local_authority,
            units_planned=data.units_planned,
            budget_estimate=data.budget_estimate,
            current_stage=data.current_stage.value,
        )
        self.project_repo.add(project)

        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "project_created",
            project_id=str(project.id),
            organization_id=str(project.organization_id),
        )
        return project

    async def list_projects(
        self,
        principal: Principal,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Project], str | None, bool]:
        """Developers see their organization's projects; everyone else sees all."""
        if principal.role == UserRole.DEVELOPER:
            if principal.organization_id is None:
                return [], None, False
            return await self.project_repo.list_for_organization(
                principal.organization_id, cursor=cursor, limit=limit
            )
        return await self.project_repo.list_all(cursor=cursor, limit=limit)

    async def get_detail(self, principal: Principal, project_id: UUID) -> ProjectDetailView:
        """Project page: counts for everyone, roster only for the owner side."""
        authorize(principal, Operation.VIEW_PROJECT)
        project = await self.get_project(project_id)

        authorize(principal, Operation.VIEW_BID_COUNT)
        return ProjectDetailView(
            project=project,
            organization=await self.organization_repo.get_by_id(project.organization_id),
            bid_count=await self.bid_repo.count_for_project(project.id),
            task_count=await self.task_repo.count_for_project(project.id),
            roster=await self.nomination_service.visible_roster(principal, project),
        )

    async def change_stage(
        self, principal: Principal, project_id: UUID, stage: RibaStage
    ) -> tuple[Project, RibaStage]:
        """Move a project to any delivery stage. Returns (project, previous stage)."""
        project = await self.get_project(project_id)
        authorize(principal, Operation.UPDATE_PROJECT_STAGE, project)

        previous = RibaStage(project.current_stage)
        if previous != stage:
            project.current_stage = stage.value
            project.updated_at = utc_now()
            try:
                await self.session.commit()
            except Exception:
                await self.session.rollback()
                raise
            logger.info(
                "project_stage_changed",
                project_id=str(project_id),
                previous=previous.value,
                current=stage.value,
            )
        return project, previous
