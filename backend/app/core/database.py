"""Database connection and session management using SQLAlchemy with async support."""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)

from .config import get_global_settings


class DatabaseManager:
    """Database connection and session manager."""

    def __init__(self, database_url: Optional[str] = None, **engine_kwargs: Any):
        """Initialize database manager with async engine.

        :param database_url: Override for the configured URL (tests use SQLite)
        :param engine_kwargs: Extra keyword arguments for create_async_engine
        """
        settings = get_global_settings()
        self.database_url = database_url or settings.database_url

        self.engine = create_async_engine(
            self.database_url,
            echo=settings.debug,  # Enable SQL logging in debug mode
            **engine_kwargs,
        )

        self.async_session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get a database session with proper cleanup."""
        async with self.async_session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def close(self) -> None:
        """Close database connections."""
        await self.engine.dispose()


# Global database manager instance
db_manager = DatabaseManager()


# Dependency for FastAPI routes
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Fastapi dependency for getting a database session."""
    async with db_manager.get_session() as session:
        yield session


def dialect_insert(session: AsyncSession, table: Any):
    """Build an INSERT supporting ``on_conflict_do_update`` for the session's backend.

    PostgreSQL in production, SQLite in the test suite.
    """
    if session.bind is not None and session.bind.dialect.name == "sqlite":
        return sqlite.insert(table)
    return postgresql.insert(table)
