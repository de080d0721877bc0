"""API test fixtures: async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so readiness probes hit the test DB

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so every
      session sees the same database
    - user fixtures return (token, user_id): most tests need both
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

import devconnect.infrastructure.database as db_module
import devconnect.models  # noqa: F401
from devconnect.db.base import Base
from devconnect.infrastructure.database import DatabaseSessionManager, get_db
from devconnect.main import app


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


async def _register(client, name, email, password="secret123"):
    """Register through the API; return (token, user_id)."""
    res = await client.post(
        "/api/users", json={"name": name, "email": email, "password": password},
    )
    assert res.status_code == 200, res.text
    token = res.json()["token"]
    me = await client.get("/api/auth", headers={"x-auth-token": token})
    return token, me.json()["id"]


@pytest.fixture
async def alice(client):
    return await _register(client, "Alice", "alice@example.com")


@pytest.fixture
async def bob(client):
    return await _register(client, "Bob", "bob@example.com")


@pytest.fixture
def make_user(client):
    """Factory for additional accounts: await make_user(name, email)."""
    async def _make(name: str, email: str):
        return await _register(client, name, email)
    return _make
