"""SQLAlchemy 2.0 ORM model for 1-on-1 matches."""

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime as SQLDateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.algorithms.rewards import MatchRewards, match_reward_for
from app.core.enums import MatchStatus
from app.core.models import Base, created_at_column, uuid_pk


class MatchORM(Base):
    """A challenge between two players at a venue.

    Scores are either both null or both set. ``winner_id`` is meaningful only
    once scores exist; null then means a draw. Reward amounts are frozen when
    the score is submitted and paid out once the match completes.
    """

    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint(
            "(player1_score IS NULL) = (player2_score IS NULL)",
            name="ck_matches_scores_together",
        ),
        CheckConstraint("player1_id <> player2_id", name="ck_matches_distinct_players"),
        Index("idx_matches_player1_status", "player1_id", "status"),
        Index("idx_matches_player2_status", "player2_id", "status"),
        Index("idx_matches_venue_status", "venue_id", "status"),
    )

    id: Mapped[str] = uuid_pk()
    venue_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("venues.id"), nullable=False
    )
    sport_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("sports.id"), nullable=False
    )
    player1_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("players.id"), nullable=False, comment="Challenger"
    )
    player2_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("players.id"), nullable=False, comment="Challenged"
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=MatchStatus.PENDING.value
    )

    player1_ready: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    player2_ready: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    player1_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    player2_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    winner_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("players.id"), nullable=True
    )
    player1_agreed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    player2_agreed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    winner_xp: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    winner_rp: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    loser_xp: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    disputed_by: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("players.id"), nullable=True
    )
    dispute_reason: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    dispute_details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    disputed_at: Mapped[Optional[datetime]] = mapped_column(
        SQLDateTime(timezone=True), nullable=True
    )

    created_at: Mapped[datetime] = created_at_column()
    started_at: Mapped[Optional[datetime]] = mapped_column(
        SQLDateTime(timezone=True), nullable=True
    )
    completed_at: Mapped[Optional[datetime]] = mapped_column(
        SQLDateTime(timezone=True), nullable=True
    )

    # ========================================================================
    # DOMAIN BEHAVIOR
    # ========================================================================

    @property
    def match_status(self) -> MatchStatus:
        return MatchStatus(self.status)

    @property
    def has_scores(self) -> bool:
        return self.player1_score is not None and self.player2_score is not None

    @property
    def is_draw(self) -> bool:
        return self.has_scores and self.winner_id is None

    @property
    def both_agreed(self) -> bool:
        return bool(self.player1_agreed and self.player2_agreed)

    def is_participant(self, player_id: str) -> bool:
        return player_id in (self.player1_id, self.player2_id)

    def slot_of(self, player_id: str) -> int:
        """1 for the challenger, 2 for the challenged.

        :raises ValueError: If the player is not a participant
        """
        if player_id == self.player1_id:
            return 1
        if player_id == self.player2_id:
            return 2
        raise ValueError(f"Player {player_id} is not a participant")

    def opponent_of(self, player_id: str) -> str:
        return self.player2_id if self.slot_of(player_id) == 1 else self.player1_id

    def reward_for(self, player_id: str) -> tuple[int, int]:
        """XP and RP the participant earns once this match completes."""
        frozen = MatchRewards(
            winner_xp=self.winner_xp or 0,
            winner_rp=self.winner_rp or 0,
            loser_xp=self.loser_xp or 0,
        )
        return match_reward_for(player_id, self.winner_id, frozen)
