"""SQLAlchemy 2.0 ORM models for venues, their geography and live presence."""

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime as SQLDateTime,
    Float,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.core.models import Base, created_at_column, utc_now, uuid_pk
from app.utils.geo import haversine_km


class CountryORM(Base):
    """Country, the widest leaderboard scope."""

    __tablename__ = "countries"

    id: Mapped[str] = uuid_pk()
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    code: Mapped[str] = mapped_column(
        String(2), nullable=False, unique=True, comment="ISO 3166-1 alpha-2 code"
    )


class CityORM(Base):
    """City, belongs to exactly one country."""

    __tablename__ = "cities"

    id: Mapped[str] = uuid_pk()
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    country_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("countries.id"), nullable=False, index=True
    )


class SportORM(Base):
    """Sport a match, challenge or stats row is played in."""

    __tablename__ = "sports"

    id: Mapped[str] = uuid_pk()
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class VenueORM(Base):
    """Physical venue players check in to.

    Coordinates are optional; venues without them accept any check-in position.
    """

    __tablename__ = "venues"

    id: Mapped[str] = uuid_pk()
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    city_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("cities.id"), nullable=False, index=True
    )
    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def distance_km_from(self, latitude: float, longitude: float) -> Optional[float]:
        """Great-circle distance to a position, None when the venue has no coordinates."""
        if not self.has_coordinates:
            return None
        return haversine_km(latitude, longitude, self.latitude, self.longitude)


class ActivePlayerORM(Base):
    """Live presence of a player at a venue.

    At most one row per player: the unique constraint on ``player_id`` lets a
    check-in at a new venue replace the old row in a single upsert.
    """

    __tablename__ = "active_players"
    __table_args__ = (
        UniqueConstraint("player_id", name="uq_active_players_player"),
        Index("idx_active_players_venue_seen", "venue_id", "last_seen_at"),
    )

    id: Mapped[str] = uuid_pk()
    player_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("players.id"), nullable=False
    )
    venue_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("venues.id"), nullable=False
    )
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    last_seen_at: Mapped[datetime] = mapped_column(
        SQLDateTime(timezone=True),
        nullable=False,
        default=utc_now,
        comment="Refreshed by check-in and heartbeat; drives stale eviction",
    )
    created_at: Mapped[datetime] = created_at_column()
