"""Schemas for match requests and responses."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.core.enums import MatchStatus
from app.core.schemas import CamelModel

# Scores are stored as 32-bit signed integers
MAX_SCORE = 2**31 - 1


class CreateMatchRequest(CamelModel):
    """Challenge another player at a venue."""

    opponent_id: str = Field(..., min_length=1, description="Player being challenged")
    venue_id: str = Field(..., min_length=1)
    sport_id: str = Field(..., min_length=1)


class SubmitScoreRequest(CamelModel):
    player1_score: int = Field(..., ge=0, le=MAX_SCORE)
    player2_score: int = Field(..., ge=0, le=MAX_SCORE)


class DisputeRequest(CamelModel):
    reason: Optional[str] = Field(default=None, max_length=100)
    details: Optional[str] = Field(default=None, max_length=2000)


class CreateMatchResponse(CamelModel):
    match_id: str


class ReadyResponse(CamelModel):
    success: bool = True
    started: bool = Field(..., description="Whether the match is now in progress")


class SubmitScoreResponse(CamelModel):
    success: bool = True
    winner_id: Optional[str] = None
    is_draw: bool = False


class AgreeResponse(CamelModel):
    """Outcome of agreeing to a submitted score.

    Reward figures are the acting player's and only present once the match
    is completed.
    """

    success: bool = True
    both_agreed: bool
    message: str
    xp_earned: Optional[int] = None
    rp_earned: Optional[int] = None


class MatchActionResponse(CamelModel):
    success: bool = True
    message: str


class MatchResponse(CamelModel):
    """Match detail as seen by a participant."""

    id: str
    venue_id: str
    sport_id: str
    player1_id: str
    player2_id: str
    status: MatchStatus
    player1_ready: bool
    player2_ready: bool
    player1_score: Optional[int] = None
    player2_score: Optional[int] = None
    winner_id: Optional[str] = None
    is_draw: bool = False
    player1_agreed: bool
    player2_agreed: bool
    winner_xp: Optional[int] = None
    winner_rp: Optional[int] = None
    loser_xp: Optional[int] = None
    dispute_reason: Optional[str] = None
    disputed_by: Optional[str] = None
    created_at: datetime
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class MatchListResponse(CamelModel):
    matches: List[MatchResponse]
