"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from toolsmith.db.base import Base
# Import all models to register with Base.metadata
import toolsmith.db.models  # noqa: F401
from toolsmith.services.organizations import OrganizationsService
from toolsmith.services.security import make_access_token
from toolsmith.services.users import UsersService


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Create a test database session."""
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(db_engine):
    """Create a test application instance with in-memory DB."""
    from toolsmith.main import create_app

    _app = create_app()
    _app.state.db_engine = db_engine
    _app.state.db_session_factory = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )
    return _app


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def seed_workspace(db_session):
    """Factory creating a user with a password and an organization they own.

    Returns ``(user, organization, auth_headers)``.
    """

    async def _seed(
        email: str = "owner@example.com",
        password: str = "password123",
        org_name: str = "Acme",
    ):
        user = await UsersService(db_session).create(
            email, first_name="Ada", last_name="Owner", password=password
        )
        organization = await OrganizationsService(db_session).create(org_name, user)
        user.default_organization_id = organization.id
        await db_session.commit()
        token = make_access_token(user.id, user.email, organization.id)
        return user, organization, {"Authorization": f"Bearer {token}"}

    return _seed
