"""Client-side auto check-in policy.

Devices auto check in inside a tighter radius than the server accepts and
only auto check out beyond a wider one; between the two radii nothing changes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from app.utils.geo import haversine_km


class PresenceAction(str, Enum):
    """What the client should do after a location update."""

    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"
    HEARTBEAT = "heartbeat"
    NONE = "none"


@dataclass(frozen=True)
class AutoCheckInPolicy:
    auto_checkin_radius_km: float = 0.2
    auto_checkout_radius_km: float = 0.3
    heartbeat_interval_seconds: float = 60.0

    def __post_init__(self) -> None:
        if self.auto_checkout_radius_km < self.auto_checkin_radius_km:
            raise ValueError("auto check-out radius must not be smaller than check-in radius")

    def decide(
        self,
        distance_km: float,
        is_checked_in: bool,
        seconds_since_heartbeat: Optional[float] = None,
    ) -> PresenceAction:
        """
        Decide the client's next presence call.

        Args:
            distance_km: Current distance between device and venue
            is_checked_in: Whether the client is checked in at the venue
            seconds_since_heartbeat: Time since the last check-in or heartbeat

        Returns:
            The action to perform; NONE inside the hysteresis band
        """
        if not is_checked_in:
            if distance_km <= self.auto_checkin_radius_km:
                return PresenceAction.CHECK_IN
            return PresenceAction.NONE

        if distance_km > self.auto_checkout_radius_km:
            return PresenceAction.CHECK_OUT
        if (
            seconds_since_heartbeat is not None
            and seconds_since_heartbeat >= self.heartbeat_interval_seconds
        ):
            return PresenceAction.HEARTBEAT
        return PresenceAction.NONE

    def decide_for_position(
        self,
        latitude: float,
        longitude: float,
        venue_latitude: float,
        venue_longitude: float,
        is_checked_in: bool,
        seconds_since_heartbeat: Optional[float] = None,
    ) -> PresenceAction:
        distance_km = haversine_km(latitude, longitude, venue_latitude, venue_longitude)
        return self.decide(distance_km, is_checked_in, seconds_since_heartbeat)
