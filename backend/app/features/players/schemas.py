"""Schemas for player stats responses."""

from pydantic import Field

from app.core.schemas import CamelModel


class PlayerStatsResponse(CamelModel):
    """Progression of one player in one sport."""

    player_id: str
    sport_id: str
    sport_slug: str
    total_xp: int = 0
    total_rp: int = 0
    available_rp: int = 0
    matches_played: int = 0
    matches_won: int = 0
    matches_lost: int = 0
    challenges_completed: int = 0
    win_rate: float = Field(default=0.0, ge=0.0, le=1.0)
