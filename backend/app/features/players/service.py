"""Read access to a player's progression ledger."""

import structlog

from app.core.decorators import service_error_handler
from app.core.exceptions import NotFoundError
from app.features.venues.repository import ReferenceRepositoryInterface
from .repository import PlayerRepositoryInterface
from .schemas import PlayerStatsResponse

logger = structlog.get_logger(__name__)


class PlayerStatsService:
    def __init__(
        self,
        repository: PlayerRepositoryInterface,
        reference_repository: ReferenceRepositoryInterface,
    ):
        self.repository = repository
        self.reference = reference_repository

    @service_error_handler("PlayerStatsService")
    async def get_stats(self, player_id: str, sport_slug: str) -> PlayerStatsResponse:
        """Stats for one sport; a player who never played gets zeros."""
        sport = await self.reference.get_sport_by_slug(sport_slug)
        if sport is None:
            raise NotFoundError("Sport not found", context={"sport": sport_slug})

        stats = await self.repository.get_stats(player_id, sport.id)
        if stats is None:
            return PlayerStatsResponse(
                player_id=player_id, sport_id=sport.id, sport_slug=sport.slug
            )

        return PlayerStatsResponse(
            player_id=player_id,
            sport_id=sport.id,
            sport_slug=sport.slug,
            total_xp=stats.total_xp,
            total_rp=stats.total_rp,
            available_rp=stats.available_rp,
            matches_played=stats.matches_played,
            matches_won=stats.matches_won,
            matches_lost=stats.matches_lost,
            challenges_completed=stats.challenges_completed,
            win_rate=round(stats.win_rate, 4),
        )
