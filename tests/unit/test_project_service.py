"""Unit tests for ProjectService with mocked repositories."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.matchboard.core.exceptions import ForbiddenError, NotFoundError
from src.matchboard.core.security import Principal
from src.matchboard.models import Project, RibaStage, UserRole
from src.matchboard.schemas.project import ProjectCreate
from src.matchboard.services.project_service import ProjectService

pytestmark = pytest.mark.unit

ORG_ID = uuid4()
OWNER = Principal(user_id=uuid4(), role=UserRole.DEVELOPER, organization_id=ORG_ID)
PROFESSIONAL = Principal(user_id=uuid4(), role=UserRole.PROFESSIONAL, professional_id=uuid4())


@pytest.fixture
def project() -> Project:
    return Project(id=uuid4(), organization_id=ORG_ID, title="Scheme")


@pytest.fixture
def project_repo(project) -> MagicMock:
    repo = MagicMock()
    repo.add = MagicMock()
    repo.get_by_id = AsyncMock(return_value=project)
    repo.list_all = AsyncMock(return_value=([project], None, False))
    repo.list_for_organization = AsyncMock(return_value=([project], None, False))
    return repo


@pytest.fixture
def nomination_service() -> MagicMock:
    service = MagicMock()
    service.visible_roster = AsyncMock(return_value=[])
    return service


@pytest.fixture
def session() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def service(project_repo, nomination_service, session) -> ProjectService:
    organization_repo = MagicMock()
    organization_repo.get_by_id = AsyncMock(return_value=None)
    task_repo = MagicMock()
    task_repo.count_for_project = AsyncMock(return_value=3)
    bid_repo = MagicMock()
    bid_repo.count_for_project = AsyncMock(return_value=2)
    return ProjectService(
        project_repo, organization_repo, task_repo, bid_repo, nomination_service, session
    )


class TestCreateProject:
    async def test_starts_at_stage_zero(self, service, project_repo, session):
        project = await service.create_project(OWNER, ProjectCreate(title="Riverside"))

        assert project.organization_id == ORG_ID
        assert project.current_stage == RibaStage.STAGE_0.value
        project_repo.add.assert_called_once_with(project)
        session.commit.assert_awaited_once()

    async def test_developer_without_organization_forbidden(self, service, project_repo):
        orphan = Principal(user_id=uuid4(), role=UserRole.DEVELOPER)

        with pytest.raises(ForbiddenError):
            await service.create_project(orphan, ProjectCreate(title="Riverside"))

        project_repo.add.assert_not_called()

    async def test_missing_organization_refused_even_when_policy_allows(
        self, service, project_repo, monkeypatch
    ):
        monkeypatch.setattr(
            "src.matchboard.services.project_service.authorize", lambda *args: None
        )
        orphan = Principal(user_id=uuid4(), role=UserRole.DEVELOPER)

        with pytest.raises(ForbiddenError):
            await service.create_project(orphan, ProjectCreate(title="Riverside"))

        project_repo.add.assert_not_called()

    async def test_starting_stage_taken_from_request(self, service):
        project = await service.create_project(
            OWNER, ProjectCreate(title="Riverside", current_stage=RibaStage.STAGE_3)
        )

        assert project.current_stage == RibaStage.STAGE_3.value

    async def test_professional_forbidden(self, service, project_repo):
        with pytest.raises(ForbiddenError):
            await service.create_project(PROFESSIONAL, ProjectCreate(title="Riverside"))

        project_repo.add.assert_not_called()


class TestListProjects:
    async def test_developer_sees_own_organization(self, service, project_repo):
        await service.list_projects(OWNER)

        project_repo.list_for_organization.assert_awaited_once_with(ORG_ID, cursor=None, limit=50)
        project_repo.list_all.assert_not_called()

    async def test_developer_without_organization_sees_nothing(self, service, project_repo):
        orphan = Principal(user_id=uuid4(), role=UserRole.DEVELOPER)

        assert await service.list_projects(orphan) == ([], None, False)
        project_repo.list_all.assert_not_called()

    async def test_professional_sees_all(self, service, project_repo):
        await service.list_projects(PROFESSIONAL, limit=10)

        project_repo.list_all.assert_awaited_once_with(cursor=None, limit=10)


class TestGetDetail:
    async def test_counts_and_roster(self, service, project, nomination_service):
        view = await service.get_detail(PROFESSIONAL, project.id)

        assert (view.bid_count, view.task_count) == (2, 3)
        assert view.roster == []
        nomination_service.visible_roster.assert_awaited_once_with(PROFESSIONAL, project)

    async def test_missing_project(self, service, project_repo):
        project_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await service.get_detail(OWNER, uuid4())


class TestChangeStage:
    async def test_any_stage_reachable(self, service, project, session):
        changed, previous = await service.change_stage(OWNER, project.id, RibaStage.STAGE_5)

        assert previous == RibaStage.STAGE_0
        assert changed.current_stage == RibaStage.STAGE_5.value
        session.commit.assert_awaited_once()

        changed, previous = await service.change_stage(OWNER, project.id, RibaStage.STAGE_1)
        assert previous == RibaStage.STAGE_5
        assert changed.current_stage == RibaStage.STAGE_1.value

    async def test_same_stage_is_a_no_op(self, service, project, session):
        await service.change_stage(OWNER, project.id, RibaStage.STAGE_0)

        session.commit.assert_not_awaited()

    async def test_professional_forbidden(self, service, project, session):
        with pytest.raises(ForbiddenError):
            await service.change_stage(PROFESSIONAL, project.id, RibaStage.STAGE_2)

        assert project.current_stage == RibaStage.STAGE_0.value
