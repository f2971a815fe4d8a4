"""Service test fixtures — async DB, fake identity service, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - Bearer tokens resolved by FakeIdentityClient (no network)
    - Stride lookups answered by FakeStride (vehicles / failure set per test)
    - Profiles seeded: one admin, one super_admin, one plain user; GHOST_ID has no profile

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - db_manager patched: the readiness probe uses db_manager directly
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import (
    get_identity_client, get_stride_client, get_webhook_client,
)
from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.models.profile import Profile
import app.infrastructure.database as db_module
from app.main import app
from tests.services.fakes import (
    ADMIN_ID, SUPER_ADMIN_ID, USER_ID, FakeIdentityClient, FakeStride,
)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def seed_profiles(test_db):
    test_db.add_all([
        Profile(id=ADMIN_ID, full_name="Dana Admin", phone="050-1111111", role="admin"),
        Profile(id=SUPER_ADMIN_ID, full_name="Root Admin", phone="050-2222222", role="super_admin"),
        Profile(
            id=USER_ID, full_name="Yossi Cohen", phone="050-3333333",
            email="yossi@example.com", role="user",
        ),
    ])
    await test_db.commit()


@pytest.fixture
def stride():
    return FakeStride()


@pytest.fixture
async def client(test_engine, test_session_factory, seed_profiles, stride):
    """FastAPI test client with DB and outbound dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_client] = FakeIdentityClient
    app.dependency_overrides[get_stride_client] = lambda: stride
    app.dependency_overrides[get_webhook_client] = lambda: None

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def fresh_db(test_session_factory):
    """Second session for asserting what the routes committed."""
    async with test_session_factory() as session:
        yield session
