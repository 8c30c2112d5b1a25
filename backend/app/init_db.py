"""Database initialization script using SQLAlchemy create_all().

Creates every table registered in ``app.models``.
"""

import asyncio
import sys
from typing import NoReturn

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from app.core.database import db_manager
from app.core.logging import setup_logging
from app.models import Base

logger = structlog.get_logger(__name__)


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Create all tables defined in ``Base.metadata``.

    :param engine: Engine to use; defaults to the application engine
    :raises SQLAlchemyError: If database connection or table creation fails
    """
    engine = engine or db_manager.engine
    try:
        logger.info("Creating database tables")
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info(
            "Database initialization completed successfully",
            tables_created=len(Base.metadata.tables),
            table_names=list(Base.metadata.tables.keys()),
        )
    except SQLAlchemyError as e:
        logger.error(
            "Database initialization failed",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """Drop all tables from the database.

    WARNING: This is destructive and will delete all data!

    :raises SQLAlchemyError: If database connection or table dropping fails
    """
    engine = engine or db_manager.engine
    try:
        logger.warning("Dropping all database tables")
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("All database tables dropped successfully")
    except SQLAlchemyError as e:
        logger.error(
            "Failed to drop database tables",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise


async def reset_db() -> None:
    """Drop and recreate all tables.

    WARNING: This is destructive and will delete all data!
    """
    await drop_all_tables()
    await init_db()
    logger.info("Database reset completed successfully")


async def _run(command: str) -> None:
    try:
        if command == "init":
            await init_db()
        elif command == "drop":
            await drop_all_tables()
        else:
            await reset_db()
    finally:
        await db_manager.close()


def main() -> NoReturn:
    """Run CLI for database initialization commands.

    Usage:
        python -m app.init_db [init|drop|reset]
    """
    setup_logging()
    command = sys.argv[1] if len(sys.argv) > 1 else "init"

    if command not in ("init", "drop", "reset"):
        logger.error("Unknown command", command=command)
        print("Usage: python -m app.init_db [init|drop|reset]")
        sys.exit(1)

    asyncio.run(_run(command))
    sys.exit(0)


if __name__ == "__main__":
    main()
