"""Transformers between match ORM objects and API schemas."""

from typing import Iterable

from .orm_models import MatchORM
from .schemas import MatchListResponse, MatchResponse


def match_orm_to_response(match: MatchORM) -> MatchResponse:
    return MatchResponse(
        id=match.id,
        venue_id=match.venue_id,
        sport_id=match.sport_id,
        player1_id=match.player1_id,
        player2_id=match.player2_id,
        status=match.match_status,
        player1_ready=match.player1_ready,
        player2_ready=match.player2_ready,
        player1_score=match.player1_score,
        player2_score=match.player2_score,
        winner_id=match.winner_id,
        is_draw=match.is_draw,
        player1_agreed=match.player1_agreed,
        player2_agreed=match.player2_agreed,
        winner_xp=match.winner_xp,
        winner_rp=match.winner_rp,
        loser_xp=match.loser_xp,
        dispute_reason=match.dispute_reason,
        disputed_by=match.disputed_by,
        created_at=match.created_at,
        started_at=match.started_at,
        completed_at=match.completed_at,
    )


def matches_to_list_response(matches: Iterable[MatchORM]) -> MatchListResponse:
    return MatchListResponse(matches=[match_orm_to_response(m) for m in matches])
