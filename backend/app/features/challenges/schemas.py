"""Schemas for challenge attempt requests and responses."""

from pydantic import Field, model_validator

from app.core.schemas import CamelModel


class ChallengeAttemptRequest(CamelModel):
    """Self-reported result of a challenge attempt."""

    score_value: float = Field(..., ge=0, description="Achieved score")
    max_value: float = Field(..., ge=0, description="Maximum achievable score")

    @model_validator(mode="after")
    def check_score_within_max(self) -> "ChallengeAttemptRequest":
        if self.score_value > self.max_value:
            raise ValueError("scoreValue cannot exceed maxValue")
        return self


class ChallengeAttemptResponse(CamelModel):
    success: bool = True
    attempt_id: str
    xp_earned: int
    rp_earned: int
    accuracy: float
    new_total_xp: int
    new_total_rp: int
    message: str
