"""Evicts presence records that stopped sending heartbeats."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.features.venues.repository import (
    SQLAlchemyPresenceRepository,
    SQLAlchemyReferenceRepository,
)
from app.features.venues.service import PresenceService
from .base import BaseJob


class StalePresenceSweeperJob(BaseJob):
    name = "stale_presence_sweeper"

    def __init__(self, threshold_hours: Optional[float] = None) -> None:
        super().__init__()
        self.threshold_hours = threshold_hours

    async def execute(self, db: AsyncSession) -> None:
        service = PresenceService(
            SQLAlchemyPresenceRepository(db), SQLAlchemyReferenceRepository(db)
        )
        removed = await service.cleanup_stale(self.threshold_hours)
        self.metrics["records_deleted"] = removed
