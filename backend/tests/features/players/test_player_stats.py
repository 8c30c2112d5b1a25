from unittest.mock import AsyncMock

import pytest

from app.core.exceptions import NotFoundError
from app.features.players.dependencies import get_player_stats_service
from app.features.players.repository import SQLAlchemyPlayerRepository, StatsCredit
from app.features.players.schemas import PlayerStatsResponse
from app.features.players.service import PlayerStatsService
from app.features.venues.repository import SQLAlchemyReferenceRepository


@pytest.fixture
def player_repository(db_session):
    return SQLAlchemyPlayerRepository(db_session)


@pytest.fixture
def service(db_session, player_repository):
    return PlayerStatsService(player_repository, SQLAlchemyReferenceRepository(db_session))


async def test_player_without_history_gets_zeros(service, seed):
    stats = await service.get_stats(seed.alice.id, "basketball")

    assert stats.sport_id == seed.basketball.id
    assert stats.total_xp == 0
    assert stats.matches_played == 0
    assert stats.win_rate == 0.0


async def test_credits_accumulate(service, seed, player_repository, db_session):
    await player_repository.credit_stats(
        seed.alice.id,
        seed.basketball.id,
        StatsCredit(xp=100, rp=20, matches_played=1, matches_won=1),
    )
    await player_repository.credit_stats(
        seed.alice.id,
        seed.basketball.id,
        StatsCredit(xp=25, matches_played=1, matches_lost=1),
    )
    await db_session.commit()

    stats = await service.get_stats(seed.alice.id, "basketball")

    assert stats.total_xp == 125
    assert stats.total_rp == 20
    assert stats.available_rp == 20
    assert (stats.matches_played, stats.matches_won, stats.matches_lost) == (2, 1, 1)
    assert stats.win_rate == 0.5


async def test_unknown_sport(service, seed):
    with pytest.raises(NotFoundError):
        await service.get_stats(seed.alice.id, "curling")


def test_stats_endpoint(client, override):
    mock_service = override(get_player_stats_service, AsyncMock())
    mock_service.get_stats.return_value = PlayerStatsResponse(
        player_id="player-alice",
        sport_id="sport-basketball",
        sport_slug="basketball",
        total_xp=160,
        challenges_completed=1,
    )

    response = client.get("/api/v1/players/me/stats", params={"sport": "basketball"})

    assert response.status_code == 200
    assert response.json()["totalXp"] == 160
    mock_service.get_stats.assert_called_once_with("player-alice", "basketball")
