"""Shared enums used across features.

This module provides a single source of truth for enums used in both models and schemas.
"""

from enum import Enum


class MatchStatus(str, Enum):
    """Lifecycle states of a 1-on-1 match."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    DISPUTED = "disputed"
    CANCELLED = "cancelled"
    DECLINED = "declined"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_MATCH_STATUSES


TERMINAL_MATCH_STATUSES = frozenset(
    {
        MatchStatus.COMPLETED,
        MatchStatus.DISPUTED,
        MatchStatus.CANCELLED,
        MatchStatus.DECLINED,
    }
)


class Difficulty(str, Enum):
    """Challenge difficulty tiers."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class RankingLevel(str, Enum):
    """Geographic scope of a leaderboard."""

    VENUE = "venue"
    CITY = "city"
    COUNTRY = "country"
