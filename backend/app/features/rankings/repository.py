"""Scoped XP queries backing the leaderboards."""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from sqlalchemy import select, union
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import MatchStatus, RankingLevel
from app.features.challenges.orm_models import ChallengeAttemptORM, ChallengeORM
from app.features.matches.orm_models import MatchORM
from app.features.players.orm_models import PlayerORM, PlayerStatsORM
from app.features.venues.orm_models import CityORM

# (player_id, display_name, total_xp)
ScopedXpRow = Tuple[str, str, int]


class RankingRepositoryInterface(ABC):
    @abstractmethod
    async def scoped_xp(
        self,
        level: RankingLevel,
        scope_id: str,
        sport_id: str,
        age_group: Optional[str],
    ) -> List[ScopedXpRow]:
        """Every player in the scope and age group with stats in the sport, unordered.

        Players without an age group only compete with each other.
        """
        pass


class SQLAlchemyRankingRepository(RankingRepositoryInterface):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def scoped_xp(
        self,
        level: RankingLevel,
        scope_id: str,
        sport_id: str,
        age_group: Optional[str],
    ) -> List[ScopedXpRow]:
        same_age_group = (
            PlayerORM.age_group.is_(None)
            if age_group is None
            else PlayerORM.age_group == age_group
        )
        stmt = (
            select(PlayerORM.id, PlayerORM.display_name, PlayerStatsORM.total_xp)
            .join(PlayerStatsORM, PlayerStatsORM.player_id == PlayerORM.id)
            .where(PlayerStatsORM.sport_id == sport_id, same_age_group)
        )

        if level == RankingLevel.CITY:
            stmt = stmt.where(PlayerORM.city_id == scope_id)
        elif level == RankingLevel.COUNTRY:
            stmt = stmt.join(CityORM, CityORM.id == PlayerORM.city_id).where(
                CityORM.country_id == scope_id
            )
        else:
            stmt = stmt.where(
                PlayerORM.id.in_(self._venue_participants(scope_id, sport_id))
            )

        result = await self.db.execute(stmt)
        return [(row[0], row[1], row[2]) for row in result.all()]

    @staticmethod
    def _venue_participants(venue_id: str, sport_id: str):
        """Players with a completed match or a challenge attempt at the venue."""
        completed = (
            MatchORM.venue_id == venue_id,
            MatchORM.sport_id == sport_id,
            MatchORM.status == MatchStatus.COMPLETED.value,
        )
        participants = union(
            select(MatchORM.player1_id).where(*completed),
            select(MatchORM.player2_id).where(*completed),
            select(ChallengeAttemptORM.player_id)
            .join(ChallengeORM, ChallengeORM.id == ChallengeAttemptORM.challenge_id)
            .where(
                ChallengeORM.venue_id == venue_id,
                ChallengeORM.sport_id == sport_id,
            ),
        ).subquery()
        return select(participants.c[0])
