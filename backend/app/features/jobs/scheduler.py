"""Scheduler module for managing automated background jobs."""

from typing import Optional

import structlog
from apscheduler.executors.asyncio import AsyncIOExecutor
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from app.core import get_global_settings
from .presence_sweeper import StalePresenceSweeperJob

logger = structlog.get_logger(__name__)

# Global scheduler instance
_scheduler: Optional[AsyncIOScheduler] = None


def get_scheduler() -> Optional[AsyncIOScheduler]:
    """Get the global scheduler instance.

    Returns:
        The scheduler instance if initialized, None otherwise.
    """
    return _scheduler


def _schedule_jobs(scheduler: AsyncIOScheduler) -> None:
    settings = get_global_settings()
    sweeper = StalePresenceSweeperJob(settings.stale_presence_threshold_hours)

    scheduler.add_job(
        sweeper.run,
        trigger="interval",
        seconds=settings.presence_sweep_interval_seconds,
        id=f"job_{sweeper.name}",
        name=sweeper.name,
        replace_existing=True,
    )
    logger.info(
        "Scheduled job",
        job_name=sweeper.name,
        interval_seconds=settings.presence_sweep_interval_seconds,
    )


async def start_scheduler() -> Optional[AsyncIOScheduler]:
    """Initialize and start the APScheduler instance.

    Returns:
        The started scheduler, or None when disabled via configuration.

    Raises:
        Exception: If scheduler initialization fails.
    """
    global _scheduler

    settings = get_global_settings()

    if not settings.job_scheduler_enabled:
        logger.info("Job scheduler is disabled via configuration")
        return None

    if _scheduler is not None:
        logger.warning("Scheduler already initialized")
        return _scheduler

    try:
        logger.info("Initializing job scheduler")

        job_defaults = {
            "coalesce": True,  # Combine multiple missed runs into one
            "max_instances": 1,  # Only one instance of each job at a time
            "misfire_grace_time": 60,
        }

        _scheduler = AsyncIOScheduler(
            executors={"default": AsyncIOExecutor()},
            job_defaults=job_defaults,
            timezone="UTC",
        )
        _schedule_jobs(_scheduler)
        _scheduler.start()

        logger.info("Job scheduler started successfully")
        return _scheduler

    except Exception as e:
        logger.error(
            "Failed to start job scheduler",
            error=str(e),
            error_type=type(e).__name__,
        )
        _scheduler = None
        raise


async def shutdown_scheduler() -> None:
    """Gracefully shutdown the scheduler, waiting for running jobs."""
    global _scheduler

    scheduler = get_scheduler()
    if scheduler is None:
        logger.debug("Scheduler not running, nothing to shut down")
        return

    scheduler.shutdown(wait=True)
    _scheduler = None
    logger.info("Job scheduler shut down")
