"""Shared fixtures for Famfit backend tests.

Uses SQLite (aiosqlite) by default, so no PostgreSQL is required.
Set TEST_DATABASE_URL to override (e.g. for CI with real PostgreSQL).
"""

import os
import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")

# Ensure settings can be loaded without .env
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-unit-tests")
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("REDIS_URL", "redis://127.0.0.1:1/0")

from app.database import Base  # noqa: E402

API = "/api/v1"

# ---------------------------------------------------------------------------
# Engine: SQLite in-memory with StaticPool (shared across connections)
# ---------------------------------------------------------------------------

_engine_kwargs = {}
if TEST_DATABASE_URL.startswith("sqlite"):
    _engine_kwargs = {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }

_engine = create_async_engine(TEST_DATABASE_URL, echo=False, **_engine_kwargs)
_TestSession = async_sessionmaker(
    bind=_engine, class_=AsyncSession, expire_on_commit=False,
)


# ---------------------------------------------------------------------------
# Session-scoped: create / drop tables
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(scope="session", autouse=True)
async def _setup_tables():
    import app.models  # noqa: F401  populate Base.metadata

    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await _engine.dispose()


# ---------------------------------------------------------------------------
# Reset rate-limiter counters before every test
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _reset_rate_limits():
    """Clear in-memory rate-limit counters so tests never block each other."""
    from app.core.rate_limit import limiter

    limiter.reset()


# ---------------------------------------------------------------------------
# Per-test session with rollback
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture()
async def db_session():
    async with _TestSession() as session:
        yield session
        await session.rollback()


# ---------------------------------------------------------------------------
# HTTP test client
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture()
async def client(db_session: AsyncSession):
    from app.database import get_db
    from app.main import app

    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def committing_client(monkeypatch):
    """HTTP client running the real ``get_db`` unit of work on the test engine.

    Requests commit for real, so tests must use fresh accounts and names.
    """
    import app.database as database
    from app.main import app

    monkeypatch.setattr(database, "async_session", _TestSession)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def session_factory():
    """Factory for fresh sessions that see only committed data."""
    return _TestSession


# ---------------------------------------------------------------------------
# Convenience: signed-up accounts with tokens
# ---------------------------------------------------------------------------

async def sign_up(client: AsyncClient, full_name: str | None = None) -> dict:
    """Create an account through the API and return a context dict.

    Keys: headers, user_id, email, password, tokens
    """
    from app.core.security import decode_token

    suffix = uuid.uuid4().hex[:8]
    email = f"user-{suffix}@example.com"
    password = "testpassword123"
    resp = await client.post(f"{API}/auth/signup", json={
        "email": email,
        "password": password,
        "full_name": full_name,
    })
    assert resp.status_code == 201, resp.text
    tokens = resp.json()

    payload = decode_token(tokens["access_token"])
    return {
        "headers": {"Authorization": f"Bearer {tokens['access_token']}"},
        "user_id": payload["sub"],
        "email": email,
        "password": password,
        "tokens": tokens,
    }


@pytest_asyncio.fixture()
async def account(client: AsyncClient):
    return await sign_up(client, full_name="Alex Smith")


@pytest_asyncio.fixture()
async def other_account(client: AsyncClient):
    return await sign_up(client, full_name="Blake Jones")


@pytest_asyncio.fixture()
async def family_admin(client: AsyncClient, account: dict):
    """``account`` after creating the family "Smiths"."""
    resp = await client.post(
        f"{API}/families/", headers=account["headers"], json={"name": "Smiths"},
    )
    assert resp.status_code == 201, resp.text
    return {**account, "family_id": resp.json()["id"]}
