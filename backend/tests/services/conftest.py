"""Service test fixtures — async DB, SMP managers and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_smp_managers dependency overridden with managers built on the test DB
    - db_manager and app.state.smp_managers set for the readiness probe,
      which reads them directly

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares one connection,
      so all managers see the same database
    - Managers built with create_smp_managers, exactly as the lifespan does
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from smp_directory.api.dependencies import get_smp_managers
from smp_directory.config import Settings
from smp_directory.core.domain_types import IdentifierType
from smp_directory.db.base import Base
from smp_directory.infrastructure.database import DatabaseSessionManager
import smp_directory.infrastructure.database as db_module
import smp_directory.models  # noqa: F401
from smp_directory.main import app
from smp_directory.services.smp_managers import create_smp_managers

OWNER_NAME = "owner"
OWNER_PASSWORD = "owner-secret"
OTHER_NAME = "intruder"
OTHER_PASSWORD = "intruder-secret"
SERVICE_GROUP_ID = "iso6523-actorid-upis::0088:5798000000001"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
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
def fake_db_manager(test_engine, test_session_factory):
    """DatabaseSessionManager bound to the in-memory engine."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite:///:memory:",
        identifier_type=IdentifierType.PEPPOL,
        directory_integration_enabled=True,
    )


@pytest.fixture
def managers(fake_db_manager, settings):
    return create_smp_managers(fake_db_manager, settings)


@pytest.fixture
async def owner(managers):
    return await managers.user_mgr.create_user(OWNER_NAME, OWNER_PASSWORD)


@pytest.fixture
async def other_user(managers):
    return await managers.user_mgr.create_user(OTHER_NAME, OTHER_PASSWORD)


@pytest.fixture
async def service_group(managers, owner):
    identifier = managers.identifier_factory.parse_participant_identifier(
        SERVICE_GROUP_ID,
    )
    return await managers.service_group_mgr.create_service_group(identifier, owner)


@pytest.fixture
async def client(managers, fake_db_manager):
    """FastAPI test client with SMP managers overridden."""
    app.dependency_overrides[get_smp_managers] = lambda: managers

    original_manager = db_module.db_manager
    db_module.db_manager = fake_db_manager
    app.state.smp_managers = managers

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
    del app.state.smp_managers
