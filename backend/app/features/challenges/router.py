from fastapi import APIRouter, status

from app.features.auth import CurrentPlayerDep
from .dependencies import ChallengeServiceDep
from .schemas import ChallengeAttemptRequest, ChallengeAttemptResponse

router = APIRouter(prefix="/challenges", tags=["challenges"])


@router.post(
    "/{challenge_id}/attempts",
    response_model=ChallengeAttemptResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_attempt(
    challenge_id: str,
    body: ChallengeAttemptRequest,
    player: CurrentPlayerDep,
    service: ChallengeServiceDep,
) -> ChallengeAttemptResponse:
    """Record a challenge attempt and credit its rewards"""
    return await service.record_attempt(
        challenge_id, player.id, body.score_value, body.max_value
    )
