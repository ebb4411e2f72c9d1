"""Integration test fixtures for database and HTTP client operations.

These fixtures require external resources (PostgreSQL database).
Uses polyfactory for type-safe test data generation.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool

from src.timetrack.core import db
from src.timetrack.core.config import get_settings
from src.timetrack.core.db import run_migrations_async
from src.timetrack.main import create_app
from tests.factories import (
    DEFAULT_TEST_PASSWORD,
    AccountFactory,
    ClientFactory,
    ProfileAccountFactory,
    ProfileFactory,
    ProjectFactory,
    ProjectTaskFactory,
    TaskFactory,
)
from tests.helpers import create_profile_in_account, login
from tests.utils.cleanup import cleanup_account_cascade, cleanup_profile_cascade


@pytest.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create test database engine and ensure migrations are applied."""
    await db.dispose_engine()

    settings = get_settings()
    test_engine = create_async_engine(settings.database_url, poolclass=NullPool)

    await run_migrations_async()

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    IMPORTANT: The AsyncSession context manager only closes the session on exit;
    it does NOT auto-commit. Tests must explicitly call `await session.commit()`
    to persist changes to the database.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """Create an unauthenticated test client."""
    await db.dispose_engine()

    app = create_app()
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    await db.dispose_engine()


@pytest.fixture
async def test_account(engine: AsyncEngine, db_session: AsyncSession) -> AsyncGenerator[dict]:
    """Create an account owned by a fresh profile.

    Yields the ids and credentials of the owner.
    """
    account = AccountFactory.build()
    profile = ProfileFactory.build()
    db_session.add_all([account, profile])
    await db_session.flush()

    db_session.add(ProfileAccountFactory.build(profile_id=profile.id, account_id=account.id))
    await db_session.commit()

    yield {
        "account_id": account.id,
        "profile_id": profile.id,
        "email": profile.email,
        "password": DEFAULT_TEST_PASSWORD,
    }

    # Cleanup using utilities
    async with engine.connect() as conn:
        await cleanup_account_cascade(conn, account.id)
        await cleanup_profile_cascade(conn, profile.email)
        await conn.commit()


@pytest.fixture
async def test_member(
    engine: AsyncEngine, db_session: AsyncSession, test_account: dict
) -> AsyncGenerator[dict]:
    """A profile with the plain user role in ``test_account``."""
    profile, _ = await create_profile_in_account(db_session, test_account["account_id"])
    await db_session.commit()

    yield {"profile_id": profile.id, "email": profile.email, "password": DEFAULT_TEST_PASSWORD}

    async with engine.connect() as conn:
        await cleanup_profile_cascade(conn, profile.email)
        await conn.commit()


@pytest.fixture
async def catalog(db_session: AsyncSession, test_account: dict) -> dict:
    """A client with one project offering one billable task.

    Removed with the account by ``test_account``.
    """
    account_id = test_account["account_id"]
    client = ClientFactory.build(account_id=account_id, name="Acme")
    task = TaskFactory.build(account_id=account_id, name="Design")
    db_session.add_all([client, task])
    await db_session.flush()

    project = ProjectFactory.build(account_id=account_id, client_id=client.id, name="Website")
    db_session.add(project)
    await db_session.flush()

    db_session.add(
        ProjectTaskFactory.build(
            project_id=project.id, task_id=task.id, account_id=account_id, rate=50.0
        )
    )
    await db_session.commit()

    return {"client_id": client.id, "project_id": project.id, "task_id": task.id}


@pytest.fixture
async def auth_client(client: AsyncClient, test_account: dict) -> AsyncClient:
    """Client logged in as the owner of ``test_account``."""
    token = await login(client, test_account["email"], test_account["password"])
    client.headers["Authorization"] = f"Bearer {token}"
    return client
