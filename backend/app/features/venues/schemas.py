"""Schemas for venue check-in requests and responses."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.core.schemas import CamelModel


class CheckInRequest(CamelModel):
    """Current device position sent with a check-in."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class HeartbeatRequest(CamelModel):
    """Heartbeat body; position is optional, omitted keeps the stored one."""

    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)


class CheckInStatusResponse(CamelModel):
    is_checked_in: bool
    last_seen_at: Optional[datetime] = None


class CheckInResponse(CamelModel):
    success: bool
    message: str
    distance_km: Optional[float] = Field(
        default=None, description="Distance between device and venue when known"
    )


class HeartbeatResponse(CamelModel):
    success: bool


class CheckOutResponse(CamelModel):
    success: bool
    message: str


class ActivePlayerResponse(CamelModel):
    """Opponent currently present at the venue."""

    player_id: str
    display_name: str
    last_seen_at: datetime
    distance_km: Optional[float] = None
    distance_label: Optional[str] = None


class ActivePlayersResponse(CamelModel):
    venue_id: str
    players: List[ActivePlayerResponse]
