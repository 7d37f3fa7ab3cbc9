"""Pytest configuration for all tests."""

import os

os.environ.setdefault("STUDYSYNC_ENVIRONMENT", "testing")
os.environ.setdefault("STUDYSYNC_SECRET_KEY", "test-secret-key-for-studysync-test-suite")
os.environ.setdefault("STUDYSYNC_LOG_FORMAT", "console")

from typing import AsyncGenerator, Awaitable, Callable

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from studysync.domain.services import CredentialService
from studysync.infrastructure.persistence import models  # noqa: F401
from studysync.infrastructure.persistence.database import Base
from studysync.infrastructure.persistence.models import UserModel

TEST_PASSWORD = "secret123"


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database dependency."""
    from studysync.infrastructure.api.app import app
    from studysync.infrastructure.persistence.database import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides = {}


@pytest_asyncio.fixture
async def make_user(db_session: AsyncSession) -> Callable[..., Awaitable[UserModel]]:
    """Factory that registers a user directly through the credential service."""

    async def _make_user(username: str, email: str | None = None) -> UserModel:
        service = CredentialService(db_session)
        user = await service.register(
            username=username,
            email=email or f"{username}@example.com",
            password=TEST_PASSWORD,
        )
        await db_session.commit()
        return user

    return _make_user


@pytest_asyncio.fixture
async def register(client: AsyncClient) -> Callable[..., Awaitable[dict]]:
    """Factory that registers a user over the API.

    Returns a dict with ``id``, ``token`` and ``headers`` for the new user.
    """

    async def _register(username: str, email: str | None = None) -> dict:
        res = await client.post(
            "/api/auth/register",
            json={
                "username": username,
                "email": email or f"{username}@example.com",
                "password": TEST_PASSWORD,
            },
        )
        assert res.status_code == 201, res.text
        data = res.json()
        return {
            "id": data["user"]["id"],
            "token": data["token"],
            "headers": {"Authorization": f"Bearer {data['token']}"},
        }

    return _register
