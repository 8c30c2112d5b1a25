from fastapi import APIRouter, Query

from app.features.auth import CurrentPlayerDep
from .dependencies import PlayerStatsServiceDep
from .schemas import PlayerStatsResponse

router = APIRouter(prefix="/players", tags=["players"])


@router.get("/me/stats", response_model=PlayerStatsResponse)
async def get_my_stats(
    player: CurrentPlayerDep,
    service: PlayerStatsServiceDep,
    sport: str = Query(default="basketball", description="Sport slug"),
) -> PlayerStatsResponse:
    """Get the requesting player's progression in a sport"""
    return await service.get_stats(player.id, sport)
