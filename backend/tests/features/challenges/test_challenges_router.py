from unittest.mock import AsyncMock

import pytest

from app.core.exceptions import NotFoundError
from app.features.challenges.dependencies import get_challenge_service
from app.features.challenges.schemas import ChallengeAttemptResponse


@pytest.fixture
def mock_service(override):
    return override(get_challenge_service, AsyncMock())


def test_record_attempt_endpoint(client, mock_service):
    mock_service.record_attempt.return_value = ChallengeAttemptResponse(
        attempt_id="attempt-1",
        xp_earned=160,
        rp_earned=10,
        accuracy=0.8,
        new_total_xp=160,
        new_total_rp=10,
        message="80% accuracy! Earned 160 XP and 10 RP",
    )

    response = client.post(
        "/api/v1/challenges/challenge-free-throws/attempts",
        json={"scoreValue": 8, "maxValue": 10},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["xpEarned"] == 160
    assert body["newTotalXp"] == 160
    mock_service.record_attempt.assert_called_once_with(
        "challenge-free-throws", "player-alice", 8, 10
    )


def test_score_above_max_rejected_before_service(client, mock_service):
    response = client.post(
        "/api/v1/challenges/challenge-free-throws/attempts",
        json={"scoreValue": 11, "maxValue": 10},
    )

    assert response.status_code == 422
    mock_service.record_attempt.assert_not_called()


def test_unknown_challenge_is_404(client, mock_service):
    mock_service.record_attempt.side_effect = NotFoundError("Challenge not found")

    response = client.post(
        "/api/v1/challenges/nope/attempts",
        json={"scoreValue": 1, "maxValue": 2},
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Challenge not found"
