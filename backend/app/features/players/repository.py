"""Repository pattern implementation for players and the stats ledger.

The stats ledger is credited with single-statement upserts that add deltas to
the stored counters, so concurrent settlements never lose an update.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import dialect_insert
from app.core.models import generate_uuid, utc_now
from .orm_models import PlayerORM, PlayerStatsORM

logger = structlog.get_logger(__name__)

_COUNTER_COLUMNS = (
    "total_xp",
    "total_rp",
    "available_rp",
    "matches_played",
    "matches_won",
    "matches_lost",
    "challenges_completed",
)


@dataclass(frozen=True)
class StatsCredit:
    """Increments applied to one PlayerStats row. RP is credited to both total and available."""

    xp: int = 0
    rp: int = 0
    matches_played: int = 0
    matches_won: int = 0
    matches_lost: int = 0
    challenges_completed: int = 0

    def as_increments(self) -> dict[str, int]:
        return {
            "total_xp": self.xp,
            "total_rp": self.rp,
            "available_rp": self.rp,
            "matches_played": self.matches_played,
            "matches_won": self.matches_won,
            "matches_lost": self.matches_lost,
            "challenges_completed": self.challenges_completed,
        }


class PlayerRepositoryInterface(ABC):
    """Interface for player and stats data access."""

    @abstractmethod
    async def get_by_id(self, player_id: str) -> Optional[PlayerORM]:
        """Get player by id.

        :param player_id: Player's unique identifier
        :returns: PlayerORM if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_stats(self, player_id: str, sport_id: str) -> Optional[PlayerStatsORM]:
        """Get the stats row for a (player, sport) pair, None if never credited."""
        pass

    @abstractmethod
    async def credit_stats(
        self, player_id: str, sport_id: str, credit: StatsCredit
    ) -> None:
        """Atomically add a credit to the stats row, creating it if missing.

        Does not commit; the caller owns the transaction.
        """
        pass


class SQLAlchemyPlayerRepository(PlayerRepositoryInterface):
    """SQLAlchemy implementation of the player repository."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, player_id: str) -> Optional[PlayerORM]:
        result = await self.db.execute(
            select(PlayerORM).where(PlayerORM.id == player_id)
        )
        return result.scalar_one_or_none()

    async def get_stats(self, player_id: str, sport_id: str) -> Optional[PlayerStatsORM]:
        stmt = select(PlayerStatsORM).where(
            PlayerStatsORM.player_id == player_id,
            PlayerStatsORM.sport_id == sport_id,
        ).execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def credit_stats(
        self, player_id: str, sport_id: str, credit: StatsCredit
    ) -> None:
        increments = credit.as_increments()
        now = utc_now()

        insert_stmt = dialect_insert(self.db, PlayerStatsORM).values(
            id=generate_uuid(),
            player_id=player_id,
            sport_id=sport_id,
            updated_at=now,
            **increments,
        )
        table = PlayerStatsORM.__table__
        set_ = {
            column: table.c[column] + insert_stmt.excluded[column]
            for column in _COUNTER_COLUMNS
        }
        set_["updated_at"] = insert_stmt.excluded.updated_at

        await self.db.execute(
            insert_stmt.on_conflict_do_update(
                index_elements=["player_id", "sport_id"], set_=set_
            )
        )

        logger.debug(
            "Player stats credited",
            player_id=player_id,
            sport_id=sport_id,
            **increments,
        )
