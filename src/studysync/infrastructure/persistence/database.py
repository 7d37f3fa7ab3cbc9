"""Database abstraction layer using SQLAlchemy 2.0 async.

This module provides the database session management and engine
configuration. It supports SQLite (aiosqlite) and PostgreSQL (asyncpg)
drivers, selected by the configured database URL.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from studysync.core.config import get_settings
from studysync.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class DatabaseManager:
    """Database connection and session manager.

    Lazily creates the async engine and session factory and provides a
    context manager for sessions.
    """

    def __init__(self) -> None:
        """Initialize the database manager."""
        self.settings = get_settings()
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        """Get or create the database engine."""
        if self._engine is None:
            self._engine = create_async_engine(
                self.settings.database_url,
                echo=self.settings.db_echo,
                connect_args={"check_same_thread": False}
                if self.settings.database_url.startswith("sqlite")
                else {},
            )
            logger.info(
                "Database engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
            logger.debug("Database session factory created")
        return self._session_factory

    async def create_tables(self) -> None:
        """Create all database tables defined on ``Base``."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created")

    async def drop_tables(self) -> None:
        """Drop all database tables.

        WARNING: This will delete all data.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            logger.warning("Database tables dropped")

    async def disconnect(self) -> None:
        """Close the database engine and all connections."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session that is rolled back on error and always closed.

        Example:
            async with db.session() as session:
                result = await session.execute(select(UserModel))
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def check_connection(self) -> bool:
        """Check if the database connection is working."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error("Database connection check failed", error=str(e))
            return False


_db_manager: DatabaseManager | None = None


def get_db_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a database session for one request."""
    db = get_db_manager()
    async with db.session() as session:
        yield session


def _ensure_sqlite_directory(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    if not database_url.startswith("sqlite") or ":memory:" in database_url:
        return
    db_path = Path(database_url.split(":///")[-1])
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Database directory ensured", path=str(db_path.parent))


async def init_database(create_tables: bool | None = None) -> None:
    """Initialize the database on application startup.

    Tables are created automatically in development; other environments
    run ``studysync init-db`` explicitly.

    Args:
        create_tables: Force table creation on or off. Defaults to
            creating them only in development.
    """
    # Register models with Base.metadata before create_all
    from studysync.infrastructure.persistence import models  # noqa: F401

    settings = get_settings()
    db = get_db_manager()

    _ensure_sqlite_directory(settings.database_url)

    if not await db.check_connection():
        raise RuntimeError("Failed to connect to database")

    if create_tables is None:
        create_tables = settings.is_development

    if create_tables:
        await db.create_tables()
    else:
        logger.info("Skipping table creation", environment=settings.environment)


async def close_database() -> None:
    """Close the database connection on application shutdown."""
    await get_db_manager().disconnect()
