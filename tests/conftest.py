"""Test fixtures: a fresh in-memory database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI + aiosqlite:

1. Each test gets its own in-memory SQLite engine. StaticPool keeps the
   single connection alive, so every session in the test sees the same data.
2. The schema is created from the models, then get_db is overridden to
   hand out sessions bound to that engine.
3. When the test ends the engine is disposed and the database vanishes.

Unlike an override of get_current_user, the `client` fixture runs the
real auth gate: tests register users and send real bearer tokens.
"""

import os

# Must be set before taskify.config is imported anywhere.
os.environ.setdefault("TASKIFY_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TASKIFY_JWT_SECRET", "test-secret-do-not-use-in-production")
os.environ.setdefault("TASKIFY_BCRYPT_ROUNDS", "4")

import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from taskify.db.engine import get_db
from taskify.db.models import Base
from taskify.main import app
from taskify.metrics import metrics

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture()
async def session_factory():
    """Session factory bound to a brand-new in-memory database."""
    engine = create_async_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    finally:
        await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(session_factory):
    """A session for tests that talk to services directly."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(session_factory):
    """HTTP client with the app's get_db overridden for testing."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    metrics.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ═══════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════


def unique_email(prefix: str = "user") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}@example.com"


async def register(client: AsyncClient, email: str, password: str = "password_123") -> str:
    """Register a user and return their bearer token."""
    r = await client.post(
        "/api/auth/register", json={"email": email, "password": password}
    )
    assert r.status_code == 201, r.text
    return r.json()["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_user(client):
    """Factory fixture: await register_user("alice") → (email, auth headers)."""
    async def _register(prefix: str = "user", password: str = "password_123"):
        email = unique_email(prefix)
        token = await register(client, email, password)
        return email, bearer(token)

    return _register
