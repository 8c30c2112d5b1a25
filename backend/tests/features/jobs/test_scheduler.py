from unittest.mock import MagicMock, patch

from app.core.config import Settings
from app.features.jobs.scheduler import (
    get_scheduler,
    shutdown_scheduler,
    start_scheduler,
)


async def test_start_scheduler_registers_sweeper():
    with (
        patch("app.features.jobs.scheduler._scheduler", None),
        patch(
            "app.features.jobs.scheduler.get_global_settings",
            return_value=Settings(presence_sweep_interval_seconds=300),
        ),
        patch("app.features.jobs.scheduler.AsyncIOScheduler") as mock_scheduler_class,
    ):
        mock_scheduler = MagicMock()
        mock_scheduler_class.return_value = mock_scheduler

        scheduler = await start_scheduler()

        assert scheduler is mock_scheduler
        assert get_scheduler() is mock_scheduler
        mock_scheduler.start.assert_called_once()
        kwargs = mock_scheduler.add_job.call_args.kwargs
        assert kwargs["id"] == "job_stale_presence_sweeper"
        assert kwargs["seconds"] == 300
        assert kwargs["trigger"] == "interval"


async def test_start_scheduler_disabled():
    with (
        patch("app.features.jobs.scheduler._scheduler", None),
        patch(
            "app.features.jobs.scheduler.get_global_settings",
            return_value=Settings(job_scheduler_enabled=False),
        ),
        patch("app.features.jobs.scheduler.AsyncIOScheduler") as mock_scheduler_class,
    ):
        assert await start_scheduler() is None
        mock_scheduler_class.assert_not_called()


async def test_shutdown_scheduler():
    mock_scheduler = MagicMock()

    with patch("app.features.jobs.scheduler._scheduler", mock_scheduler):
        await shutdown_scheduler()

        mock_scheduler.shutdown.assert_called_once_with(wait=True)
        assert get_scheduler() is None


async def test_shutdown_without_scheduler_is_noop():
    with patch("app.features.jobs.scheduler._scheduler", None):
        await shutdown_scheduler()
        assert get_scheduler() is None
