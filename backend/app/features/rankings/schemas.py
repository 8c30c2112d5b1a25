"""Schemas for leaderboard responses."""

from typing import List, Optional

from app.core.enums import RankingLevel
from app.core.schemas import CamelModel


class LocationInfo(CamelModel):
    id: str
    name: str


class RankingEntryResponse(CamelModel):
    player_id: str
    display_name: str
    xp: int
    rank: int
    is_king: bool


class RankingsResponse(CamelModel):
    """Leaderboard for one scope and sport.

    ``current_user`` is the requester's own entry even when it falls outside
    the returned slice, and null when the requester has no stats in scope.
    """

    level: RankingLevel
    sport: str
    location: Optional[LocationInfo] = None
    king: Optional[RankingEntryResponse] = None
    rankings: List[RankingEntryResponse]
    current_user: Optional[RankingEntryResponse] = None
    total_players: int
