from unittest.mock import AsyncMock

import pytest

from app.core.enums import MatchStatus
from app.core.exceptions import ForbiddenError, StateConflictError
from app.features.matches.dependencies import get_match_service
from app.features.matches.schemas import (
    AgreeResponse,
    CreateMatchResponse,
    MatchActionResponse,
    MatchListResponse,
    ReadyResponse,
)


@pytest.fixture
def mock_service(override):
    return override(get_match_service, AsyncMock())


def test_create_match_endpoint(client, mock_service):
    mock_service.create_match.return_value = CreateMatchResponse(match_id="match-1")

    response = client.post(
        "/api/v1/matches",
        json={
            "opponentId": "player-bob",
            "venueId": "venue-park",
            "sportId": "sport-basketball",
        },
    )

    assert response.status_code == 201
    assert response.json() == {"matchId": "match-1"}
    mock_service.create_match.assert_called_once_with(
        "player-alice", "player-bob", "venue-park", "sport-basketball"
    )


def test_create_match_requires_fields(client, mock_service):
    response = client.post("/api/v1/matches", json={"opponentId": "player-bob"})

    assert response.status_code == 422
    mock_service.create_match.assert_not_called()


def test_list_matches_parses_status_filter(client, mock_service):
    mock_service.list_matches.return_value = MatchListResponse(matches=[])

    response = client.get(
        "/api/v1/matches", params={"status": "pending,in_progress", "limit": 5}
    )

    assert response.status_code == 200
    mock_service.list_matches.assert_called_once_with(
        "player-alice", [MatchStatus.PENDING, MatchStatus.IN_PROGRESS], 5
    )


def test_list_matches_rejects_unknown_status(client, mock_service):
    response = client.get("/api/v1/matches", params={"status": "finished"})

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"


def test_ready_endpoint(client, mock_service):
    mock_service.mark_ready.return_value = ReadyResponse(started=True)

    response = client.post("/api/v1/matches/match-1/ready")

    assert response.status_code == 200
    assert response.json() == {"success": True, "started": True}


def test_score_rejects_negative_values(client, mock_service):
    response = client.post(
        "/api/v1/matches/match-1/score",
        json={"player1Score": -1, "player2Score": 3},
    )

    assert response.status_code == 422
    mock_service.submit_score.assert_not_called()


def test_agree_endpoint(client, mock_service):
    mock_service.agree_to_result.return_value = AgreeResponse(
        both_agreed=True, message="Match completed!", xp_earned=100, rp_earned=20
    )

    response = client.post("/api/v1/matches/match-1/agree")

    assert response.status_code == 200
    body = response.json()
    assert body["bothAgreed"] is True
    assert body["xpEarned"] == 100
    assert body["rpEarned"] == 20


def test_state_conflict_maps_to_409(client, mock_service):
    mock_service.agree_to_result.side_effect = StateConflictError(
        "Score not yet submitted"
    )

    response = client.post("/api/v1/matches/match-1/agree")

    assert response.status_code == 409
    assert response.json() == {
        "success": False,
        "error": "invalid_state",
        "message": "Score not yet submitted",
    }


def test_forbidden_maps_to_403(client, mock_service):
    mock_service.get_match.side_effect = ForbiddenError(
        "You are not a participant in this match"
    )

    response = client.get("/api/v1/matches/match-1")

    assert response.status_code == 403


def test_dispute_without_body(client, mock_service):
    mock_service.dispute_result.return_value = MatchActionResponse(
        message="Match disputed. An admin will review."
    )

    response = client.post("/api/v1/matches/match-1/dispute")

    assert response.status_code == 200
    mock_service.dispute_result.assert_called_once_with(
        "match-1", "player-alice", None, None
    )


def test_dispute_with_reason(client, mock_service):
    mock_service.dispute_result.return_value = MatchActionResponse(
        message="Match disputed. An admin will review."
    )

    client.post(
        "/api/v1/matches/match-1/dispute",
        json={"reason": "wrong_score", "details": "It was 21-19"},
    )

    mock_service.dispute_result.assert_called_once_with(
        "match-1", "player-alice", "wrong_score", "It was 21-19"
    )
