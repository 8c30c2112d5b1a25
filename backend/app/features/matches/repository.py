"""Repository for matches.

Every state transition is a single conditional UPDATE whose WHERE clause
re-checks the expected state. The affected row count tells the caller
whether it won the transition, which is what makes completion and
settlement happen exactly once under concurrent requests.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Iterable, List, Optional

import structlog
from sqlalchemy import and_, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import MatchStatus
from .orm_models import MatchORM

logger = structlog.get_logger(__name__)


class MatchRepositoryInterface(ABC):
    """Interface for match persistence. Writes never commit on their own."""

    @abstractmethod
    async def get(self, match_id: str) -> Optional[MatchORM]:
        pass

    @abstractmethod
    async def add(self, match: MatchORM) -> MatchORM:
        pass

    @abstractmethod
    async def has_pending_between(self, player_a: str, player_b: str) -> bool:
        """Whether a pending match exists for the unordered pair."""
        pass

    @abstractmethod
    async def list_for_player(
        self,
        player_id: str,
        statuses: Optional[Iterable[MatchStatus]] = None,
        limit: int = 20,
    ) -> List[MatchORM]:
        pass

    @abstractmethod
    async def set_ready(self, match_id: str, slot: int) -> bool:
        pass

    @abstractmethod
    async def start_if_ready(
        self, match_id: str, require_both: bool, started_at: datetime
    ) -> bool:
        """Flip pending to in_progress once readiness is satisfied."""
        pass

    @abstractmethod
    async def record_score(
        self,
        match_id: str,
        player1_score: int,
        player2_score: int,
        winner_id: Optional[str],
        winner_xp: int,
        winner_rp: int,
        loser_xp: int,
    ) -> bool:
        """Store scores and frozen rewards; resets both agreement flags."""
        pass

    @abstractmethod
    async def set_agreed(self, match_id: str, slot: int) -> bool:
        pass

    @abstractmethod
    async def complete_if_agreed(self, match_id: str, completed_at: datetime) -> bool:
        """The completion transition. True for exactly one caller per match."""
        pass

    @abstractmethod
    async def transition(
        self,
        match_id: str,
        from_statuses: Iterable[MatchStatus],
        to_status: MatchStatus,
        require_no_scores: bool = False,
        **values: Any,
    ) -> bool:
        pass

    @abstractmethod
    async def commit(self) -> None:
        pass


class SQLAlchemyMatchRepository(MatchRepositoryInterface):
    """SQLAlchemy implementation of the match repository."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, match_id: str) -> Optional[MatchORM]:
        stmt = (
            select(MatchORM)
            .where(MatchORM.id == match_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def add(self, match: MatchORM) -> MatchORM:
        self.db.add(match)
        await self.db.flush()
        return match

    async def has_pending_between(self, player_a: str, player_b: str) -> bool:
        stmt = (
            select(MatchORM.id)
            .where(
                MatchORM.status == MatchStatus.PENDING.value,
                or_(
                    and_(MatchORM.player1_id == player_a, MatchORM.player2_id == player_b),
                    and_(MatchORM.player1_id == player_b, MatchORM.player2_id == player_a),
                ),
            )
            .limit(1)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def list_for_player(
        self,
        player_id: str,
        statuses: Optional[Iterable[MatchStatus]] = None,
        limit: int = 20,
    ) -> List[MatchORM]:
        stmt = select(MatchORM).where(
            or_(MatchORM.player1_id == player_id, MatchORM.player2_id == player_id)
        )
        if statuses:
            stmt = stmt.where(MatchORM.status.in_([s.value for s in statuses]))
        stmt = stmt.order_by(MatchORM.created_at.desc()).limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def set_ready(self, match_id: str, slot: int) -> bool:
        column = "player1_ready" if slot == 1 else "player2_ready"
        return await self._conditional_update(
            [MatchORM.id == match_id, MatchORM.status == MatchStatus.PENDING.value],
            {column: True},
        )

    async def start_if_ready(
        self, match_id: str, require_both: bool, started_at: datetime
    ) -> bool:
        readiness = (
            and_(MatchORM.player1_ready, MatchORM.player2_ready)
            if require_both
            else or_(MatchORM.player1_ready, MatchORM.player2_ready)
        )
        return await self._conditional_update(
            [
                MatchORM.id == match_id,
                MatchORM.status == MatchStatus.PENDING.value,
                readiness,
            ],
            {"status": MatchStatus.IN_PROGRESS.value, "started_at": started_at},
        )

    async def record_score(
        self,
        match_id: str,
        player1_score: int,
        player2_score: int,
        winner_id: Optional[str],
        winner_xp: int,
        winner_rp: int,
        loser_xp: int,
    ) -> bool:
        return await self._conditional_update(
            [MatchORM.id == match_id, MatchORM.status == MatchStatus.IN_PROGRESS.value],
            {
                "player1_score": player1_score,
                "player2_score": player2_score,
                "winner_id": winner_id,
                "winner_xp": winner_xp,
                "winner_rp": winner_rp,
                "loser_xp": loser_xp,
                "player1_agreed": False,
                "player2_agreed": False,
            },
        )

    async def set_agreed(self, match_id: str, slot: int) -> bool:
        column = "player1_agreed" if slot == 1 else "player2_agreed"
        return await self._conditional_update(
            [
                MatchORM.id == match_id,
                MatchORM.status == MatchStatus.IN_PROGRESS.value,
                MatchORM.player1_score.is_not(None),
                MatchORM.player2_score.is_not(None),
            ],
            {column: True},
        )

    async def complete_if_agreed(self, match_id: str, completed_at: datetime) -> bool:
        won = await self._conditional_update(
            [
                MatchORM.id == match_id,
                MatchORM.status == MatchStatus.IN_PROGRESS.value,
                MatchORM.player1_agreed,
                MatchORM.player2_agreed,
            ],
            {"status": MatchStatus.COMPLETED.value, "completed_at": completed_at},
        )
        if won:
            logger.debug("Match completion transition won", match_id=match_id)
        return won

    async def transition(
        self,
        match_id: str,
        from_statuses: Iterable[MatchStatus],
        to_status: MatchStatus,
        require_no_scores: bool = False,
        **values: Any,
    ) -> bool:
        conditions = [
            MatchORM.id == match_id,
            MatchORM.status.in_([s.value for s in from_statuses]),
        ]
        if require_no_scores:
            conditions.append(MatchORM.player1_score.is_(None))
        return await self._conditional_update(
            conditions, {"status": to_status.value, **values}
        )

    async def commit(self) -> None:
        await self.db.commit()

    async def _conditional_update(self, conditions: list, values: dict) -> bool:
        stmt = (
            update(MatchORM)
            .where(*conditions)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount == 1
