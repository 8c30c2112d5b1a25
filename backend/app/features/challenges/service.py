"""Challenge attempt recording.

An attempt is appended to the log and credited to the player's stats for the
challenge's sport in the same transaction.
"""

import structlog

from app.algorithms.rewards import calculate_challenge_rewards, format_challenge_message
from app.core.decorators import service_error_handler
from app.core.exceptions import NotFoundError, ValidationError
from app.core.models import utc_now
from app.features.players.repository import PlayerRepositoryInterface, StatsCredit
from .orm_models import ChallengeAttemptORM
from .repository import ChallengeRepositoryInterface
from .schemas import ChallengeAttemptResponse

logger = structlog.get_logger(__name__)


class ChallengeService:
    def __init__(
        self,
        repository: ChallengeRepositoryInterface,
        player_repository: PlayerRepositoryInterface,
    ):
        self.repository = repository
        self.players = player_repository

    @service_error_handler("ChallengeService")
    async def record_attempt(
        self,
        challenge_id: str,
        player_id: str,
        score_value: float,
        max_value: float,
    ) -> ChallengeAttemptResponse:
        """Score an attempt, log it and credit the rewards.

        :raises ValidationError: Negative values or score above max
        :raises NotFoundError: Unknown or inactive challenge
        """
        if score_value < 0 or max_value < 0:
            raise ValidationError("Values cannot be negative")
        if score_value > max_value:
            raise ValidationError("scoreValue cannot exceed maxValue")

        challenge = await self.repository.get_active(challenge_id)
        if challenge is None:
            raise NotFoundError(
                "Challenge not found", context={"challenge_id": challenge_id}
            )

        reward = calculate_challenge_rewards(
            challenge.xp_reward,
            challenge.rp_reward,
            challenge.difficulty,
            score_value,
            max_value,
        )

        attempt = await self.repository.add_attempt(
            ChallengeAttemptORM(
                challenge_id=challenge.id,
                player_id=player_id,
                score_value=score_value,
                max_value=max_value,
                xp_earned=reward.xp,
                rp_earned=reward.rp,
                completed_at=utc_now(),
            )
        )
        await self.players.credit_stats(
            player_id,
            challenge.sport_id,
            StatsCredit(xp=reward.xp, rp=reward.rp, challenges_completed=1),
        )
        stats = await self.players.get_stats(player_id, challenge.sport_id)
        await self.repository.commit()

        logger.info(
            "Challenge attempt recorded",
            challenge_id=challenge.id,
            player_id=player_id,
            accuracy=round(reward.accuracy, 4),
            xp_earned=reward.xp,
            rp_earned=reward.rp,
        )
        return ChallengeAttemptResponse(
            attempt_id=attempt.id,
            xp_earned=reward.xp,
            rp_earned=reward.rp,
            accuracy=round(reward.accuracy, 4),
            new_total_xp=stats.total_xp if stats else reward.xp,
            new_total_rp=stats.total_rp if stats else reward.rp,
            message=format_challenge_message(reward),
        )
