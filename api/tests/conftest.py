"""
Shared test fixtures for the Bio Optimizer API tests.

Provides database session management, test clients, and user fixtures.
"""

import os

# Point the application engine at SQLite before any app module is imported.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from bio_optimizer.auth.api_key import generate_api_key, get_key_prefix
from bio_optimizer.auth.jwt import create_access_token
from bio_optimizer.config import settings
from bio_optimizer.database import Base, build_engine, build_sessionmaker, get_db
from bio_optimizer.main import app
from bio_optimizer.middleware.rate_limit import reset_limiter

# Import models so they're registered with Base.metadata before table creation
from bio_optimizer.models import APIKey, BioVariant, ProfileSession, User  # noqa: F401

test_engine = build_engine(settings.test_database_url)

TestSessionLocal = build_sessionmaker(test_engine)


# --- Rate Limiter Reset Fixture ---


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Reset rate limiter before each test to ensure test isolation."""
    reset_limiter()
    yield


# --- Database Fixtures ---


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Create tables before each test function, drop after.
    Provides isolated database state per test.
    """
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client configured for testing.
    Overrides database dependency with test session.
    """

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        follow_redirects=True,
    ) as client:
        yield client

    app.dependency_overrides.clear()


# --- Authentication Helper Fixtures ---


@pytest.fixture
def auth_headers():
    """Factory fixture for creating X-API-Key headers."""

    def _auth_headers(api_key: str) -> dict[str, str]:
        return {"X-API-Key": api_key}

    return _auth_headers


@pytest.fixture
def bearer_headers():
    """Factory fixture for creating Authorization: Bearer headers for a user id."""

    def _bearer_headers(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _bearer_headers


# --- User Fixtures ---


async def _create_user(
    db_session: AsyncSession,
    username: str,
    email: str,
) -> dict[str, Any]:
    """Helper to create a user with an API key in the database."""
    user = User(
        username=username,
        email=email.lower(),
        display_name=username.title(),
    )
    db_session.add(user)
    await db_session.flush()

    plaintext_key, key_hash = generate_api_key()
    api_key = APIKey(
        user_id=user.id,
        key_hash=key_hash,
        key_prefix=get_key_prefix(plaintext_key),
        name="Test key",
    )
    db_session.add(api_key)

    await db_session.commit()

    return {
        "user": user,
        "user_id": str(user.id),
        "username": user.username,
        "api_key": plaintext_key,
        "api_key_id": str(api_key.id),
    }


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> dict[str, Any]:
    """
    Create a standard test user with an API key.

    Returns dict with user data and plaintext API key.
    """
    return await _create_user(db_session, username="testuser", email="test@example.com")


@pytest_asyncio.fixture
async def second_user(db_session: AsyncSession) -> dict[str, Any]:
    """Create a second user for testing ownership/authorization scenarios."""
    return await _create_user(db_session, username="seconduser", email="second@example.com")


# --- Data Fixtures ---


@pytest_asyncio.fixture
async def owned_session(
    async_client: AsyncClient, test_user: dict, auth_headers
) -> dict[str, Any]:
    """A profile session created by test_user through the API."""
    response = await async_client.post(
        "/api/v1/profile-sessions",
        json={
            "currentHeadline": "Backend Engineer",
            "currentAbout": "I build APIs.",
            "industry": "Software",
        },
        headers=auth_headers(test_user["api_key"]),
    )
    assert response.status_code == 201
    return response.json()["data"]["session"]
