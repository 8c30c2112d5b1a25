from typing import Optional

from fastapi import APIRouter, Query

from app.core.enums import RankingLevel
from app.features.auth import CurrentPlayerDep
from .dependencies import RankingServiceDep
from .schemas import RankingsResponse

router = APIRouter(prefix="/rankings", tags=["rankings"])


@router.get("", response_model=RankingsResponse)
async def get_rankings(
    player: CurrentPlayerDep,
    service: RankingServiceDep,
    level: RankingLevel = Query(default=RankingLevel.CITY),
    sport: str = Query(default="basketball", description="Sport slug"),
    scope_id: Optional[str] = Query(
        default=None,
        alias="scopeId",
        description="Venue, city or country id; defaults to the player's own",
    ),
    limit: Optional[int] = Query(default=None, ge=1),
) -> RankingsResponse:
    """Leaderboard for a venue, city or country"""
    return await service.get_rankings(player, level, sport, scope_id, limit)
