from typing import Optional

from fastapi import APIRouter, Query, Request

from app.core.rate_limiter import limiter
from app.features.auth import CurrentPlayerDep
from .dependencies import PresenceServiceDep
from .schemas import (
    ActivePlayersResponse,
    CheckInRequest,
    CheckInResponse,
    CheckInStatusResponse,
    CheckOutResponse,
    HeartbeatRequest,
    HeartbeatResponse,
)

router = APIRouter(prefix="/venues", tags=["venues"])


@router.get("/{venue_id}/check-in", response_model=CheckInStatusResponse)
async def get_check_in_status(
    venue_id: str, player: CurrentPlayerDep, service: PresenceServiceDep
) -> CheckInStatusResponse:
    """Whether the requesting player is checked in at the venue"""
    return await service.get_status(player.id, venue_id)


@router.post("/{venue_id}/check-in", response_model=CheckInResponse)
@limiter.limit("30/minute")
async def check_in(
    request: Request,
    venue_id: str,
    body: CheckInRequest,
    player: CurrentPlayerDep,
    service: PresenceServiceDep,
) -> CheckInResponse:
    """Check in at a venue; rejected with the distance when outside the geofence"""
    return await service.check_in(player.id, venue_id, body.latitude, body.longitude)


@router.patch("/{venue_id}/check-in", response_model=HeartbeatResponse)
@limiter.limit("120/minute")
async def heartbeat(
    request: Request,
    venue_id: str,
    player: CurrentPlayerDep,
    service: PresenceServiceDep,
    body: Optional[HeartbeatRequest] = None,
) -> HeartbeatResponse:
    """Keep an existing check-in alive"""
    body = body or HeartbeatRequest()
    return await service.heartbeat(player.id, venue_id, body.latitude, body.longitude)


@router.delete("/{venue_id}/check-in", response_model=CheckOutResponse)
async def check_out(
    venue_id: str, player: CurrentPlayerDep, service: PresenceServiceDep
) -> CheckOutResponse:
    """Check out of a venue"""
    return await service.check_out(player.id, venue_id)


@router.get("/{venue_id}/active-players", response_model=ActivePlayersResponse)
async def list_active_players(
    venue_id: str,
    player: CurrentPlayerDep,
    service: PresenceServiceDep,
    latitude: Optional[float] = Query(default=None, ge=-90, le=90),
    longitude: Optional[float] = Query(default=None, ge=-180, le=180),
) -> ActivePlayersResponse:
    """Players currently checked in at the venue, nearest opponents first when a position is given"""
    result = await service.list_active_players(venue_id, player.id, latitude, longitude)
    return result
