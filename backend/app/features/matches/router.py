from typing import List, Optional

from fastapi import APIRouter, Query, status

from app.core.enums import MatchStatus
from app.core.exceptions import ValidationError
from app.features.auth import CurrentPlayerDep
from .dependencies import MatchServiceDep
from .schemas import (
    AgreeResponse,
    CreateMatchRequest,
    CreateMatchResponse,
    DisputeRequest,
    MatchActionResponse,
    MatchListResponse,
    MatchResponse,
    ReadyResponse,
    SubmitScoreRequest,
    SubmitScoreResponse,
)

router = APIRouter(prefix="/matches", tags=["matches"])


def _parse_statuses(raw: Optional[str]) -> Optional[List[MatchStatus]]:
    if not raw:
        return None
    try:
        return [MatchStatus(part.strip()) for part in raw.split(",") if part.strip()]
    except ValueError:
        raise ValidationError(f"Unknown match status in '{raw}'", field="status")


@router.post(
    "", response_model=CreateMatchResponse, status_code=status.HTTP_201_CREATED
)
async def create_match(
    body: CreateMatchRequest, player: CurrentPlayerDep, service: MatchServiceDep
) -> CreateMatchResponse:
    """Challenge another player"""
    return await service.create_match(
        player.id, body.opponent_id, body.venue_id, body.sport_id
    )


@router.get("", response_model=MatchListResponse)
async def list_my_matches(
    player: CurrentPlayerDep,
    service: MatchServiceDep,
    status_filter: Optional[str] = Query(
        default=None, alias="status", description="Comma separated statuses"
    ),
    limit: int = Query(default=20, ge=1, le=100),
) -> MatchListResponse:
    """List the requesting player's matches, newest first"""
    return await service.list_matches(player.id, _parse_statuses(status_filter), limit)


@router.get("/{match_id}", response_model=MatchResponse)
async def get_match(
    match_id: str, player: CurrentPlayerDep, service: MatchServiceDep
) -> MatchResponse:
    return await service.get_match(match_id, player.id)


@router.post("/{match_id}/ready", response_model=ReadyResponse)
async def mark_ready(
    match_id: str, player: CurrentPlayerDep, service: MatchServiceDep
) -> ReadyResponse:
    """Mark the requesting player ready to start"""
    return await service.mark_ready(match_id, player.id)


@router.post("/{match_id}/score", response_model=SubmitScoreResponse)
async def submit_score(
    match_id: str,
    body: SubmitScoreRequest,
    player: CurrentPlayerDep,
    service: MatchServiceDep,
) -> SubmitScoreResponse:
    """Submit the final score of an in-progress match"""
    return await service.submit_score(
        match_id, player.id, body.player1_score, body.player2_score
    )


@router.post("/{match_id}/agree", response_model=AgreeResponse)
async def agree_to_result(
    match_id: str, player: CurrentPlayerDep, service: MatchServiceDep
) -> AgreeResponse:
    """Agree to the submitted score"""
    return await service.agree_to_result(match_id, player.id)


@router.post("/{match_id}/dispute", response_model=MatchActionResponse)
async def dispute_result(
    match_id: str,
    player: CurrentPlayerDep,
    service: MatchServiceDep,
    body: Optional[DisputeRequest] = None,
) -> MatchActionResponse:
    """Dispute the submitted or settled result"""
    body = body or DisputeRequest()
    return await service.dispute_result(match_id, player.id, body.reason, body.details)


@router.post("/{match_id}/decline", response_model=MatchActionResponse)
async def decline_match(
    match_id: str, player: CurrentPlayerDep, service: MatchServiceDep
) -> MatchActionResponse:
    return await service.decline_match(match_id, player.id)


@router.post("/{match_id}/cancel", response_model=MatchActionResponse)
async def cancel_match(
    match_id: str, player: CurrentPlayerDep, service: MatchServiceDep
) -> MatchActionResponse:
    return await service.cancel_match(match_id, player.id)
