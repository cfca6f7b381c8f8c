"""Shared test configuration and fixtures.

API tests run against an in-memory SQLite database (aiosqlite + StaticPool)
created fresh for every test, so each test is fully isolated.
"""

import uuid
from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from staypoint.auth.jwt import create_token_pair
from staypoint.auth.passwords import hash_password
from staypoint.database import Base, get_db
from staypoint.main import app
from staypoint.models.user import User

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory engine with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session bound to the test engine."""
    session = AsyncSession(bind=test_engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to use the test DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience fixtures: users and auth headers
# ---------------------------------------------------------------------------


async def _make_user(db_session: AsyncSession, prefix: str, role: str) -> User:
    unique = uuid.uuid4().hex[:8]
    user = User(
        email=f"{prefix}-{unique}@test.com",
        hashed_password=hash_password("testpass123"),
        name=f"{prefix.title()} User",
        is_active=True,
        role=role,
    )
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


def _headers(user: User) -> dict[str, str]:
    tokens = create_token_pair(str(user.id))
    return {"Authorization": f"Bearer {tokens['access_token']}"}


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """A regular guest account."""
    return await _make_user(db_session, "guest", "guest")


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict[str, str]:
    return _headers(test_user)


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    """An account with the admin role."""
    return await _make_user(db_session, "admin", "admin")


@pytest_asyncio.fixture
async def admin_headers(admin_user: User) -> dict[str, str]:
    return _headers(admin_user)


# ---------------------------------------------------------------------------
# Convenience fixtures: property and booking payloads
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_property(client: AsyncClient, admin_headers: dict) -> dict:
    """Create and return a test property via the API."""
    response = await client.post(
        "/api/v1/properties",
        json={
            "title": "Test Villa",
            "description": "A test villa for automated tests.",
            "location": "East Legon, Accra",
            "property_type": "villa",
            "price_per_night": 150.00,
            "bedrooms": 3,
            "bathrooms": 2,
            "max_guests": 6,
            "amenities": ["pool", "wifi", "ac"],
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, f"Failed to create test property: {response.text}"
    return response.json()
