"""Repository for challenges and the attempt log."""

from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .orm_models import ChallengeAttemptORM, ChallengeORM


class ChallengeRepositoryInterface(ABC):
    @abstractmethod
    async def get_active(self, challenge_id: str) -> Optional[ChallengeORM]:
        pass

    @abstractmethod
    async def add_attempt(self, attempt: ChallengeAttemptORM) -> ChallengeAttemptORM:
        pass

    @abstractmethod
    async def commit(self) -> None:
        pass


class SQLAlchemyChallengeRepository(ChallengeRepositoryInterface):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_active(self, challenge_id: str) -> Optional[ChallengeORM]:
        stmt = select(ChallengeORM).where(
            ChallengeORM.id == challenge_id, ChallengeORM.is_active
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def add_attempt(self, attempt: ChallengeAttemptORM) -> ChallengeAttemptORM:
        self.db.add(attempt)
        await self.db.flush()
        return attempt

    async def commit(self) -> None:
        await self.db.commit()
