"""SQLAlchemy 2.0 ORM models for venue skill challenges and their attempts."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime as SQLDateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.core.enums import Difficulty
from app.core.models import Base, utc_now, uuid_pk


class ChallengeORM(Base):
    """A solo skill challenge offered at a venue."""

    __tablename__ = "challenges"

    id: Mapped[str] = uuid_pk()
    venue_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("venues.id"), nullable=False, index=True
    )
    sport_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("sports.id"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    challenge_type: Mapped[str] = mapped_column(
        String(50), nullable=False, comment="e.g. free_throws, three_pointers"
    )
    difficulty: Mapped[str] = mapped_column(
        String(20), nullable=False, default=Difficulty.MEDIUM.value
    )
    xp_reward: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rp_reward: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class ChallengeAttemptORM(Base):
    """Append-only log of challenge attempts and the rewards they granted."""

    __tablename__ = "challenge_attempts"
    __table_args__ = (
        Index("idx_challenge_attempts_player_completed", "player_id", "completed_at"),
    )

    id: Mapped[str] = uuid_pk()
    challenge_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("challenges.id"), nullable=False, index=True
    )
    player_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("players.id"), nullable=False
    )
    score_value: Mapped[float] = mapped_column(Float, nullable=False)
    max_value: Mapped[float] = mapped_column(Float, nullable=False)
    xp_earned: Mapped[int] = mapped_column(Integer, nullable=False)
    rp_earned: Mapped[int] = mapped_column(Integer, nullable=False)
    completed_at: Mapped[datetime] = mapped_column(
        SQLDateTime(timezone=True), nullable=False, default=utc_now
    )
