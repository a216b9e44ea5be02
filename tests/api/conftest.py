"""HTTP test fixtures.

Each test gets a fresh SQLite file so the request session and the audit
session hold separate connections, as they would against PostgreSQL.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlmodel import SQLModel

from src.matchboard import models  # noqa: F401
from src.matchboard.main import create_app
from src.matchboard.models import Organization, ProfessionalProfile, Project, User
from tests.helpers import create_admin, create_developer, create_professional, create_project


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'api.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session for seeding and inspecting data.

    Changes are only visible to the app after ``await session.commit()``.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def app(engine: AsyncEngine) -> FastAPI:
    return create_app(engine=engine)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def developer(db_session: AsyncSession) -> tuple[User, Organization]:
    user, organization = await create_developer(db_session, full_name="Dana Developer")
    await db_session.commit()
    return user, organization


@pytest.fixture
async def other_developer(db_session: AsyncSession) -> tuple[User, Organization]:
    user, organization = await create_developer(db_session, full_name="Olly Outsider")
    await db_session.commit()
    return user, organization


@pytest.fixture
async def professional(db_session: AsyncSession) -> tuple[User, ProfessionalProfile]:
    user, profile = await create_professional(
        db_session, full_name="Pat Professional", company_name="Pat Studio"
    )
    await db_session.commit()
    return user, profile


@pytest.fixture
async def admin(db_session: AsyncSession) -> User:
    user = await create_admin(db_session)
    await db_session.commit()
    return user


@pytest.fixture
async def project(db_session: AsyncSession, developer) -> Project:
    _, organization = developer
    project = await create_project(db_session, organization, title="Riverside")
    await db_session.commit()
    return project
