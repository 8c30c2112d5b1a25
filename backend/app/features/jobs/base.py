"""Base job class for automated background jobs."""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import contextvars as structlog_contextvars

from app.core.database import db_manager

logger = structlog.get_logger(__name__)


class BaseJob(ABC):
    """Abstract base class for scheduled jobs.

    Subclasses implement ``execute``; ``run`` is what the scheduler calls. It
    opens a session, binds the job name to the log context and logs start,
    completion and failure. A failing run is logged and swallowed so the
    scheduler keeps the job on its interval.
    """

    name: str = "job"

    def __init__(self) -> None:
        self.metrics: Dict[str, Any] = {}

    @abstractmethod
    async def execute(self, db: AsyncSession) -> None:
        """Execute the job logic.

        Args:
            db: Database session for job execution.
        """

    @asynccontextmanager
    async def _db_session(self) -> AsyncIterator[AsyncSession]:
        async with db_manager.get_session() as session:
            yield session

    async def run(self) -> None:
        """Execute the job with error handling and structured logging."""
        started_at = datetime.now(timezone.utc)
        self.metrics = {}
        structlog_contextvars.bind_contextvars(job_name=self.name)
        try:
            logger.info("Job execution started")
            async with self._db_session() as db:
                await self.execute(db)
            duration = (datetime.now(timezone.utc) - started_at).total_seconds()
            logger.info(
                "Job execution completed",
                duration_seconds=round(duration, 3),
                **self.metrics,
            )
        except Exception as e:
            logger.error(
                "Job execution failed",
                error=str(e),
                error_type=type(e).__name__,
            )
        finally:
            structlog_contextvars.unbind_contextvars("job_name")
