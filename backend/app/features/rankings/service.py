"""Leaderboards with tie-aware competition ranks.

Players are ranked only against their own age group. Ranks are computed
over the whole scope before slicing, so the requester's own entry and the
king are correct even outside the returned top N.
"""

from typing import Optional

import structlog

from app.algorithms.ranking import RankingEntry, assign_ranks
from app.core.config import Settings, get_global_settings
from app.core.decorators import service_error_handler
from app.core.enums import RankingLevel
from app.core.exceptions import NotFoundError, ValidationError
from app.features.players.orm_models import PlayerORM
from app.features.venues.repository import (
    PresenceRepositoryInterface,
    ReferenceRepositoryInterface,
)
from .repository import RankingRepositoryInterface
from .schemas import LocationInfo, RankingEntryResponse, RankingsResponse

logger = structlog.get_logger(__name__)


def _entry_response(entry: RankingEntry) -> RankingEntryResponse:
    return RankingEntryResponse(
        player_id=entry.player_id,
        display_name=entry.display_name,
        xp=entry.xp,
        rank=entry.rank,
        is_king=entry.is_king,
    )


class RankingService:
    def __init__(
        self,
        repository: RankingRepositoryInterface,
        reference_repository: ReferenceRepositoryInterface,
        presence_repository: PresenceRepositoryInterface,
        settings: Optional[Settings] = None,
    ):
        self.repository = repository
        self.reference = reference_repository
        self.presence = presence_repository
        self.settings = settings or get_global_settings()

    def clamp_limit(self, limit: Optional[int]) -> int:
        if limit is None:
            return self.settings.ranking_default_limit
        return max(1, min(limit, self.settings.ranking_max_limit))

    @service_error_handler("RankingService")
    async def get_rankings(
        self,
        player: PlayerORM,
        level: RankingLevel,
        sport_slug: str,
        scope_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> RankingsResponse:
        """
        Build the leaderboard for a scope.

        :param player: Requesting player, used for defaults and ``current_user``
        :param level: venue, city or country
        :param sport_slug: Sport slug, e.g. ``basketball``
        :param scope_id: Venue/city/country id; defaults from the player
        :param limit: Size of the returned slice, clamped to the configured max
        :raises NotFoundError: Unknown sport or scope
        :raises ValidationError: No scope given and none derivable from the player
        """
        sport = await self.reference.get_sport_by_slug(sport_slug)
        if sport is None:
            raise NotFoundError("Sport not found", context={"sport": sport_slug})

        scope_id = scope_id or await self._default_scope(player, level)
        if not scope_id:
            raise ValidationError(
                f"{level.value.capitalize()} ID required for {level.value} rankings",
                field="scope_id",
            )
        location = await self._location_info(level, scope_id)

        rows = await self.repository.scoped_xp(
            level, scope_id, sport.id, player.age_group
        )
        ranked = assign_ranks(
            [
                RankingEntry(player_id=pid, display_name=name, xp=xp)
                for pid, name, xp in rows
            ]
        )

        size = self.clamp_limit(limit)
        king = ranked[0] if ranked else None
        current = next((e for e in ranked if e.player_id == player.id), None)

        logger.info(
            "Rankings fetched",
            level=level.value,
            scope_id=scope_id,
            sport=sport.slug,
            age_group=player.age_group,
            total_players=len(ranked),
        )
        return RankingsResponse(
            level=level,
            sport=sport.slug,
            location=location,
            king=_entry_response(king) if king else None,
            rankings=[_entry_response(e) for e in ranked[:size]],
            current_user=_entry_response(current) if current else None,
            total_players=len(ranked),
        )

    async def _default_scope(
        self, player: PlayerORM, level: RankingLevel
    ) -> Optional[str]:
        if level == RankingLevel.VENUE:
            presence = await self.presence.get_for_player(player.id)
            return presence.venue_id if presence else None
        if not player.city_id:
            return None
        if level == RankingLevel.CITY:
            return player.city_id
        city = await self.reference.get_city(player.city_id)
        return city.country_id if city else None

    async def _location_info(self, level: RankingLevel, scope_id: str) -> LocationInfo:
        if level == RankingLevel.VENUE:
            location = await self.reference.get_venue(scope_id)
        elif level == RankingLevel.CITY:
            location = await self.reference.get_city(scope_id)
        else:
            location = await self.reference.get_country(scope_id)

        if location is None:
            raise NotFoundError(
                f"{level.value.capitalize()} not found", context={"scope_id": scope_id}
            )
        return LocationInfo(id=location.id, name=location.name)
