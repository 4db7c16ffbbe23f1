"""Service test fixtures — async DB, repository, service, and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - bcrypt runs with 4 rounds (BCRYPT_ROUNDS in root conftest)

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so the schema
      created by the fixture is visible to every session
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from account_api.db.base import Base
from account_api.infrastructure.account_repository import SqlAccountRepository
from account_api.infrastructure.database import get_db, DatabaseSessionManager
from account_api.infrastructure.password_hasher import BcryptPasswordHasher
from account_api.services.account_service import AccountService
import account_api.infrastructure.database as db_module
import account_api.models  # noqa: F401
from account_api.main import app


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
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def hasher():
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def repository(test_db):
    return SqlAccountRepository(test_db)


@pytest.fixture
def service(repository, hasher):
    return AccountService(repository, hasher)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

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
def register(client):
    """POST /users helper. Returns the response."""
    async def _register(
        email: str = "x@y.com", password: str = "abc12345", **profile,
    ):
        return await client.post(
            "/users", json={"email": email, "password": password, **profile},
        )
    return _register


@pytest.fixture
def as_user():
    """Identity headers for a caller."""
    def _headers(account_id: int, role: str | None = None) -> dict:
        headers = {"x-user-id": str(account_id)}
        if role:
            headers["x-user-role"] = role
        return headers
    return _headers
