from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, patch

from sqlalchemy import func, select

from app.features.jobs.base import BaseJob
from app.features.jobs.presence_sweeper import StalePresenceSweeperJob
from app.features.venues.orm_models import ActivePlayerORM
from app.features.venues.repository import SQLAlchemyPresenceRepository


class FailingJob(BaseJob):
    name = "failing"

    async def execute(self, db) -> None:
        raise ValueError("boom")


def _session_factory(session):
    @asynccontextmanager
    async def _session():
        yield session

    return _session


async def test_sweeper_deletes_stale_records(db_session, seed, hours_ago):
    presence = SQLAlchemyPresenceRepository(db_session)
    await presence.upsert(seed.alice.id, seed.park.id, 48.1962, 16.3551, hours_ago(3))
    await presence.upsert(seed.bob.id, seed.park.id, 48.1962, 16.3551, hours_ago(1))
    await presence.commit()

    job = StalePresenceSweeperJob(threshold_hours=2)
    with patch.object(job, "_db_session", _session_factory(db_session)):
        await job.run()

    assert job.metrics["records_deleted"] == 1
    result = await db_session.execute(select(ActivePlayerORM.player_id))
    assert result.scalars().all() == [seed.bob.id]


async def test_failing_job_is_logged_not_raised():
    job = FailingJob()
    session = AsyncMock()

    with patch.object(job, "_db_session", _session_factory(session)):
        await job.run()

    assert job.metrics == {}


async def test_execute_reports_zero_when_nothing_is_stale(db_session, seed):
    job = StalePresenceSweeperJob(threshold_hours=2)

    await job.execute(db_session)

    assert job.metrics == {"records_deleted": 0}
    count = await db_session.execute(select(func.count()).select_from(ActivePlayerORM))
    assert count.scalar_one() == 0
