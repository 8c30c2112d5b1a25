"""Presence tracking: geofenced check-in, heartbeats and stale eviction.

A player is active at no more than one venue at a time. The store enforces
this with a unique key on the player, so check-in is a single upsert that
either creates the row, refreshes it, or moves it from another venue.
"""

from datetime import timedelta
from typing import Optional

import structlog

from app.core.config import Settings, get_global_settings
from app.core.decorators import service_error_handler
from app.core.exceptions import NotFoundError, ValidationError
from app.core.models import utc_now
from app.utils.geo import format_distance, haversine_km
from .repository import PresenceRepositoryInterface, ReferenceRepositoryInterface
from .schemas import (
    ActivePlayerResponse,
    ActivePlayersResponse,
    CheckInResponse,
    CheckInStatusResponse,
    CheckOutResponse,
    HeartbeatResponse,
)

logger = structlog.get_logger(__name__)


class PresenceService:
    """Service owning the active-at-venue records."""

    def __init__(
        self,
        presence_repository: PresenceRepositoryInterface,
        reference_repository: ReferenceRepositoryInterface,
        settings: Optional[Settings] = None,
    ):
        self.presence = presence_repository
        self.reference = reference_repository
        self.settings = settings or get_global_settings()

    @service_error_handler("PresenceService")
    async def check_in(
        self, player_id: str, venue_id: str, latitude: float, longitude: float
    ) -> CheckInResponse:
        """Check the player in, moving them from any other venue.

        :raises NotFoundError: Venue does not exist or is inactive
        :raises ValidationError: Position is outside the venue geofence
        """
        venue = await self.reference.get_venue(venue_id)
        if venue is None:
            raise NotFoundError("Venue not found", context={"venue_id": venue_id})

        distance_km = venue.distance_km_from(latitude, longitude)
        max_distance_km = self.settings.max_checkin_distance_km
        if distance_km is not None and distance_km > max_distance_km:
            raise ValidationError(
                "Too far from venue to check in",
                # Keys are sent verbatim in the 400 body
                context={
                    "distance": round(distance_km, 3),
                    "distanceLabel": format_distance(distance_km),
                    "maxDistanceKm": max_distance_km,
                },
            )

        now = utc_now()
        # Opportunistic eviction keeps the venue pool fresh between sweeps
        await self.presence.delete_older_than(now - self._stale_after())
        await self.presence.upsert(player_id, venue_id, latitude, longitude, now)
        await self.presence.commit()

        logger.info(
            "Player checked in",
            player_id=player_id,
            venue_id=venue_id,
            distance_km=round(distance_km, 3) if distance_km is not None else None,
        )
        return CheckInResponse(
            success=True,
            message=f"Checked in to {venue.name}",
            distance_km=round(distance_km, 3) if distance_km is not None else None,
        )

    @service_error_handler("PresenceService")
    async def check_out(self, player_id: str, venue_id: str) -> CheckOutResponse:
        """Remove the player's record at the venue. Succeeds when there is none."""
        removed = await self.presence.delete(player_id, venue_id)
        await self.presence.commit()

        logger.info(
            "Player checked out",
            player_id=player_id,
            venue_id=venue_id,
            removed=removed,
        )
        return CheckOutResponse(success=True, message="Checked out successfully")

    async def get_status(self, player_id: str, venue_id: str) -> CheckInStatusResponse:
        row = await self.presence.get_for_player(player_id)
        if row is None or row.venue_id != venue_id:
            return CheckInStatusResponse(is_checked_in=False, last_seen_at=None)
        return CheckInStatusResponse(is_checked_in=True, last_seen_at=row.last_seen_at)

    @service_error_handler("PresenceService")
    async def heartbeat(
        self,
        player_id: str,
        venue_id: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> HeartbeatResponse:
        """Refresh ``last_seen_at`` (and position when given) of an existing record.

        :raises NotFoundError: Player is not checked in at the venue
        """
        refreshed = await self.presence.touch(
            player_id, venue_id, latitude, longitude, utc_now()
        )
        if not refreshed:
            raise NotFoundError(
                "Not checked in at this venue",
                context={"venue_id": venue_id},
            )
        await self.presence.commit()
        return HeartbeatResponse(success=True)

    @service_error_handler("PresenceService")
    async def cleanup_stale(self, threshold_hours: Optional[float] = None) -> int:
        """Delete records not refreshed within the threshold.

        :param threshold_hours: Override of the configured staleness threshold
        :returns: Number of records removed
        """
        cutoff = utc_now() - self._stale_after(threshold_hours)
        removed = await self.presence.delete_older_than(cutoff)
        await self.presence.commit()

        if removed:
            logger.info(
                "Evicted stale presence records",
                removed=removed,
                cutoff=cutoff.isoformat(),
            )
        return removed

    @service_error_handler("PresenceService")
    async def list_active_players(
        self,
        venue_id: str,
        player_id: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> ActivePlayersResponse:
        """Pool of opponents currently at the venue, excluding the requester."""
        venue = await self.reference.get_venue(venue_id)
        if venue is None:
            raise NotFoundError("Venue not found", context={"venue_id": venue_id})

        rows = await self.presence.list_at_venue(
            venue_id, utc_now() - self._stale_after()
        )

        players = []
        for row, display_name in rows:
            if row.player_id == player_id:
                continue
            distance_km = None
            if latitude is not None and longitude is not None:
                distance_km = haversine_km(
                    latitude, longitude, row.latitude, row.longitude
                )
            players.append(
                ActivePlayerResponse(
                    player_id=row.player_id,
                    display_name=display_name,
                    last_seen_at=row.last_seen_at,
                    distance_km=round(distance_km, 3)
                    if distance_km is not None
                    else None,
                    distance_label=format_distance(distance_km)
                    if distance_km is not None
                    else None,
                )
            )

        if latitude is not None and longitude is not None:
            players.sort(key=lambda p: p.distance_km)

        return ActivePlayersResponse(venue_id=venue_id, players=players)

    def _stale_after(self, threshold_hours: Optional[float] = None) -> timedelta:
        hours = (
            threshold_hours
            if threshold_hours is not None
            else self.settings.stale_presence_threshold_hours
        )
        return timedelta(hours=hours)
