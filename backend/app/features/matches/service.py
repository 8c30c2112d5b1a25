"""Match lifecycle service.

States: ``pending -> in_progress -> completed`` with ``disputed``,
``cancelled`` and ``declined`` as alternative terminals. Each operation runs
in the request transaction; the final UPDATE of a transition re-checks the
expected state so a concurrent caller can never apply the same transition
twice.
"""

from typing import Iterable, Optional

import structlog

from app.algorithms.rewards import MATCH_REWARDS, MatchRewards, determine_outcome
from app.core.config import Settings, get_global_settings
from app.core.decorators import service_error_handler
from app.core.enums import MatchStatus
from app.core.exceptions import (
    DuplicateResourceError,
    ForbiddenError,
    NotFoundError,
    StateConflictError,
    ValidationError,
)
from app.core.models import utc_now
from app.features.players.repository import PlayerRepositoryInterface, StatsCredit
from app.features.venues.repository import ReferenceRepositoryInterface
from .orm_models import MatchORM
from .repository import MatchRepositoryInterface
from .schemas import (
    MAX_SCORE,
    AgreeResponse,
    CreateMatchResponse,
    MatchActionResponse,
    MatchListResponse,
    MatchResponse,
    ReadyResponse,
    SubmitScoreResponse,
)
from .transformers import match_orm_to_response, matches_to_list_response

logger = structlog.get_logger(__name__)

DISPUTE_MESSAGE = "Match disputed. An admin will review."


class MatchService:
    """Orchestrates the match state machine and its one-time settlement."""

    def __init__(
        self,
        repository: MatchRepositoryInterface,
        reference_repository: ReferenceRepositoryInterface,
        player_repository: PlayerRepositoryInterface,
        settings: Optional[Settings] = None,
        rewards: MatchRewards = MATCH_REWARDS,
    ):
        self.repository = repository
        self.reference = reference_repository
        self.players = player_repository
        self.settings = settings or get_global_settings()
        self.rewards = rewards

    # ------------------------------------------------------------------
    # Creation and queries
    # ------------------------------------------------------------------

    @service_error_handler("MatchService")
    async def create_match(
        self, actor_id: str, opponent_id: str, venue_id: str, sport_id: str
    ) -> CreateMatchResponse:
        """Challenge an opponent. The match starts out ``pending``.

        :raises ValidationError: Actor challenges themselves
        :raises NotFoundError: Unknown opponent, venue or sport
        :raises DuplicateResourceError: A pending match already exists for the pair
        """
        if actor_id == opponent_id:
            raise ValidationError("Cannot challenge yourself", field="opponent_id")

        if await self.players.get_by_id(opponent_id) is None:
            raise NotFoundError("Opponent not found", context={"opponent_id": opponent_id})
        if await self.reference.get_venue(venue_id) is None:
            raise NotFoundError("Venue not found", context={"venue_id": venue_id})
        if await self.reference.get_sport(sport_id) is None:
            raise NotFoundError("Sport not found", context={"sport_id": sport_id})

        if await self.repository.has_pending_between(actor_id, opponent_id):
            raise DuplicateResourceError("Match already pending between these players")

        match = await self.repository.add(
            MatchORM(
                venue_id=venue_id,
                sport_id=sport_id,
                player1_id=actor_id,
                player2_id=opponent_id,
                status=MatchStatus.PENDING.value,
                player1_ready=False,
                player2_ready=False,
                player1_agreed=False,
                player2_agreed=False,
                created_at=utc_now(),
            )
        )
        await self.repository.commit()

        logger.info(
            "Match created",
            match_id=match.id,
            player1_id=actor_id,
            player2_id=opponent_id,
            venue_id=venue_id,
        )
        return CreateMatchResponse(match_id=match.id)

    async def get_match(self, match_id: str, actor_id: str) -> MatchResponse:
        match = await self._load_for_participant(match_id, actor_id)
        return match_orm_to_response(match)

    async def list_matches(
        self,
        actor_id: str,
        statuses: Optional[Iterable[MatchStatus]] = None,
        limit: int = 20,
    ) -> MatchListResponse:
        matches = await self.repository.list_for_player(actor_id, statuses, limit)
        return matches_to_list_response(matches)

    # ------------------------------------------------------------------
    # Lifecycle transitions
    # ------------------------------------------------------------------

    @service_error_handler("MatchService")
    async def mark_ready(self, match_id: str, actor_id: str) -> ReadyResponse:
        """Record the actor's readiness and start the match once satisfied."""
        match = await self._load_for_participant(match_id, actor_id)
        if match.match_status != MatchStatus.PENDING:
            raise StateConflictError("Match is not in pending state")

        if not await self.repository.set_ready(match_id, match.slot_of(actor_id)):
            raise StateConflictError("Match is not in pending state")

        started = await self.repository.start_if_ready(
            match_id,
            require_both=self.settings.match_require_both_ready,
            started_at=utc_now(),
        )
        await self.repository.commit()

        logger.info(
            "Player ready",
            match_id=match_id,
            player_id=actor_id,
            started=started,
        )
        return ReadyResponse(started=started)

    @service_error_handler("MatchService")
    async def submit_score(
        self, match_id: str, actor_id: str, player1_score: int, player2_score: int
    ) -> SubmitScoreResponse:
        """Record final scores. Stats are untouched until both players agree.

        Resubmitting replaces the scores and clears any earlier agreement.
        """
        for value in (player1_score, player2_score):
            if value < 0:
                raise ValidationError("Scores cannot be negative", value=value)
            if value > MAX_SCORE:
                raise ValidationError("Score is too large", value=value)

        match = await self._load_for_participant(match_id, actor_id)
        if match.match_status != MatchStatus.IN_PROGRESS:
            raise StateConflictError("Match is not in progress")

        outcome = determine_outcome(
            match.player1_id, match.player2_id, player1_score, player2_score
        )
        recorded = await self.repository.record_score(
            match_id,
            player1_score,
            player2_score,
            outcome.winner_id,
            winner_xp=self.rewards.winner_xp,
            winner_rp=self.rewards.winner_rp,
            loser_xp=self.rewards.loser_xp,
        )
        if not recorded:
            raise StateConflictError("Match is not in progress")
        await self.repository.commit()

        logger.info(
            "Match score submitted",
            match_id=match_id,
            submitted_by=actor_id,
            player1_score=player1_score,
            player2_score=player2_score,
            winner_id=outcome.winner_id,
        )
        return SubmitScoreResponse(winner_id=outcome.winner_id, is_draw=outcome.is_draw)

    @service_error_handler("MatchService")
    async def agree_to_result(self, match_id: str, actor_id: str) -> AgreeResponse:
        """Agree to the submitted score; the second agreement completes the match.

        Only the caller whose completion UPDATE affects the row settles the
        stats. Agreeing to an already completed match is an idempotent success.
        """
        match = await self._load_for_participant(match_id, actor_id)
        if match.match_status == MatchStatus.COMPLETED:
            return self._completed_response(match, actor_id)
        if match.match_status != MatchStatus.IN_PROGRESS:
            raise StateConflictError("Match is not in progress")
        if not match.has_scores:
            raise StateConflictError("Score not yet submitted")

        if not await self.repository.set_agreed(match_id, match.slot_of(actor_id)):
            return await self._resolve_lost_race(match_id, actor_id)

        completed = await self.repository.complete_if_agreed(match_id, utc_now())
        if completed:
            match = await self.repository.get(match_id)
            await self._settle(match)
            await self.repository.commit()
            logger.info(
                "Match completed",
                match_id=match_id,
                winner_id=match.winner_id,
                is_draw=match.is_draw,
            )
            return self._completed_response(match, actor_id)

        await self.repository.commit()
        return AgreeResponse(both_agreed=False, message="Waiting for opponent to agree")

    @service_error_handler("MatchService")
    async def dispute_result(
        self,
        match_id: str,
        actor_id: str,
        reason: Optional[str] = None,
        details: Optional[str] = None,
    ) -> MatchActionResponse:
        """Flag the result for admin review. Already-credited stats stay as they are."""
        match = await self._load_for_participant(match_id, actor_id)
        if match.match_status == MatchStatus.DISPUTED:
            return MatchActionResponse(message=DISPUTE_MESSAGE)
        if match.match_status not in (MatchStatus.IN_PROGRESS, MatchStatus.COMPLETED):
            raise StateConflictError("Match cannot be disputed in its current state")

        disputed = await self.repository.transition(
            match_id,
            (MatchStatus.IN_PROGRESS, MatchStatus.COMPLETED),
            MatchStatus.DISPUTED,
            disputed_by=actor_id,
            dispute_reason=reason,
            dispute_details=details,
            disputed_at=utc_now(),
        )
        if not disputed:
            current = await self.repository.get(match_id)
            if current is None or current.match_status != MatchStatus.DISPUTED:
                raise StateConflictError("Match cannot be disputed in its current state")
        await self.repository.commit()

        logger.warning(
            "Match disputed",
            match_id=match_id,
            disputed_by=actor_id,
            reason=reason,
            previous_status=match.status,
        )
        return MatchActionResponse(message=DISPUTE_MESSAGE)

    @service_error_handler("MatchService")
    async def decline_match(self, match_id: str, actor_id: str) -> MatchActionResponse:
        """The challenged player turns down a pending match."""
        match = await self._load_for_participant(match_id, actor_id)
        if actor_id != match.player2_id:
            raise ForbiddenError("Only the challenged player can decline")
        if match.match_status != MatchStatus.PENDING:
            raise StateConflictError("Match is not in pending state")

        if not await self.repository.transition(
            match_id, (MatchStatus.PENDING,), MatchStatus.DECLINED
        ):
            raise StateConflictError("Match is not in pending state")
        await self.repository.commit()

        logger.info("Match declined", match_id=match_id, player_id=actor_id)
        return MatchActionResponse(message="Match declined")

    @service_error_handler("MatchService")
    async def cancel_match(self, match_id: str, actor_id: str) -> MatchActionResponse:
        """Either participant calls the match off before a score exists."""
        match = await self._load_for_participant(match_id, actor_id)
        cancellable = match.match_status == MatchStatus.PENDING or (
            match.match_status == MatchStatus.IN_PROGRESS and not match.has_scores
        )
        if not cancellable:
            raise StateConflictError("Match can no longer be cancelled")

        if not await self.repository.transition(
            match_id,
            (MatchStatus.PENDING, MatchStatus.IN_PROGRESS),
            MatchStatus.CANCELLED,
            require_no_scores=True,
        ):
            raise StateConflictError("Match can no longer be cancelled")
        await self.repository.commit()

        logger.info("Match cancelled", match_id=match_id, player_id=actor_id)
        return MatchActionResponse(message="Match cancelled")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _load_for_participant(self, match_id: str, actor_id: str) -> MatchORM:
        match = await self.repository.get(match_id)
        if match is None:
            raise NotFoundError("Match not found", context={"match_id": match_id})
        if not match.is_participant(actor_id):
            raise ForbiddenError("You are not a participant in this match")
        return match

    async def _settle(self, match: MatchORM) -> None:
        """Credit both players' stats for a freshly completed match."""
        if match.is_draw:
            for player_id in (match.player1_id, match.player2_id):
                xp, rp = match.reward_for(player_id)
                await self.players.credit_stats(
                    player_id, match.sport_id, StatsCredit(xp=xp, rp=rp, matches_played=1)
                )
            return

        winner_id = match.winner_id
        loser_id = match.opponent_of(winner_id)
        winner_xp, winner_rp = match.reward_for(winner_id)
        loser_xp, loser_rp = match.reward_for(loser_id)

        await self.players.credit_stats(
            winner_id,
            match.sport_id,
            StatsCredit(xp=winner_xp, rp=winner_rp, matches_played=1, matches_won=1),
        )
        await self.players.credit_stats(
            loser_id,
            match.sport_id,
            StatsCredit(xp=loser_xp, rp=loser_rp, matches_played=1, matches_lost=1),
        )

    async def _resolve_lost_race(self, match_id: str, actor_id: str) -> AgreeResponse:
        """The agreement UPDATE matched nothing: the match moved on under us."""
        current = await self.repository.get(match_id)
        if current is not None and current.match_status == MatchStatus.COMPLETED:
            return self._completed_response(current, actor_id)
        raise StateConflictError("Match is not in progress")

    @staticmethod
    def _completed_response(match: MatchORM, actor_id: str) -> AgreeResponse:
        xp, rp = match.reward_for(actor_id)
        return AgreeResponse(
            both_agreed=True,
            message="Match completed!",
            xp_earned=xp,
            rp_earned=rp,
        )
