"""SQLAlchemy 2.0 ORM models for players and their per-sport stats ledger."""

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    DateTime as SQLDateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.core.models import Base, created_at_column, utc_now, uuid_pk
from app.utils.statistics import safe_divide


class PlayerORM(Base):
    """Registered player. Profile management lives outside this service."""

    __tablename__ = "players"

    id: Mapped[str] = uuid_pk()
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    city_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("cities.id"),
        nullable=True,
        index=True,
        comment="Home city, drives the default city and country leaderboards",
    )
    age_group: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        index=True,
        comment="Leaderboard bracket, e.g. Under-18, 18-30, 31+",
    )
    created_at: Mapped[datetime] = created_at_column()


class PlayerStatsORM(Base):
    """Aggregate progression for one (player, sport) pair.

    Counters only ever move through atomic increments issued by the
    settlement routines; they are never recomputed from history.
    """

    __tablename__ = "player_stats"
    __table_args__ = (
        UniqueConstraint("player_id", "sport_id", name="uq_player_stats_player_sport"),
    )

    id: Mapped[str] = uuid_pk()
    player_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("players.id"), nullable=False, index=True
    )
    sport_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("sports.id"), nullable=False, index=True
    )

    total_xp: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_rp: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    available_rp: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, comment="RP not yet spent"
    )
    matches_played: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    matches_won: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    matches_lost: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    challenges_completed: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )

    updated_at: Mapped[datetime] = mapped_column(
        SQLDateTime(timezone=True), nullable=False, default=utc_now
    )

    @property
    def win_rate(self) -> float:
        """Won matches over played matches, 0.0 before the first match."""
        return safe_divide(self.matches_won, self.matches_played)
