"""Lost-race paths of the agreement flow, driven through mocked repositories."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.core.enums import MatchStatus
from app.core.exceptions import DatabaseError, StateConflictError
from app.features.matches.orm_models import MatchORM
from app.features.matches.service import MatchService


def _match(status: MatchStatus, **overrides) -> MatchORM:
    values = dict(
        id="match-1",
        venue_id="venue-park",
        sport_id="sport-basketball",
        player1_id="player-alice",
        player2_id="player-bob",
        status=status.value,
        player1_ready=True,
        player2_ready=True,
        player1_score=21,
        player2_score=15,
        winner_id="player-alice",
        winner_xp=100,
        winner_rp=20,
        loser_xp=25,
        player1_agreed=True,
        player2_agreed=False,
    )
    values.update(overrides)
    return MatchORM(**values)


@pytest.fixture
def repository():
    repo = AsyncMock()
    repo.commit = AsyncMock()
    return repo


@pytest.fixture
def players():
    return AsyncMock()


@pytest.fixture
def service(repository, players, settings):
    return MatchService(repository, AsyncMock(), players, settings)


async def test_losing_completion_race_does_not_settle(service, repository, players):
    repository.get.return_value = _match(MatchStatus.IN_PROGRESS)
    repository.set_agreed.return_value = True
    repository.complete_if_agreed.return_value = False

    response = await service.agree_to_result("match-1", "player-bob")

    assert response.both_agreed is False
    players.credit_stats.assert_not_called()


async def test_agreement_after_concurrent_completion_is_success(
    service, repository, players
):
    repository.get.side_effect = [
        _match(MatchStatus.IN_PROGRESS),
        _match(MatchStatus.COMPLETED, player2_agreed=True),
    ]
    repository.set_agreed.return_value = False

    response = await service.agree_to_result("match-1", "player-bob")

    assert response.both_agreed is True
    assert (response.xp_earned, response.rp_earned) == (25, 0)
    repository.complete_if_agreed.assert_not_called()
    players.credit_stats.assert_not_called()


async def test_agreement_after_concurrent_dispute_conflicts(service, repository):
    repository.get.side_effect = [
        _match(MatchStatus.IN_PROGRESS),
        _match(MatchStatus.DISPUTED),
    ]
    repository.set_agreed.return_value = False

    with pytest.raises(StateConflictError):
        await service.agree_to_result("match-1", "player-bob")


async def test_winning_completion_settles_each_player_once(
    service, repository, players
):
    repository.get.side_effect = [
        _match(MatchStatus.IN_PROGRESS),
        _match(MatchStatus.COMPLETED, player2_agreed=True),
    ]
    repository.set_agreed.return_value = True
    repository.complete_if_agreed.return_value = True

    response = await service.agree_to_result("match-1", "player-bob")

    assert response.message == "Match completed!"
    assert players.credit_stats.await_count == 2
    credited = {call.args[0]: call.args[2] for call in players.credit_stats.await_args_list}
    assert credited["player-alice"].xp == 100
    assert credited["player-alice"].matches_won == 1
    assert credited["player-bob"].xp == 25
    assert credited["player-bob"].matches_lost == 1
    repository.commit.assert_awaited_once()


async def test_settlement_failure_surfaces_as_database_error(
    service, repository, players
):
    from sqlalchemy.exc import OperationalError

    repository.get.side_effect = [
        _match(MatchStatus.IN_PROGRESS),
        _match(MatchStatus.COMPLETED, player2_agreed=True),
    ]
    repository.set_agreed.return_value = True
    repository.complete_if_agreed.return_value = True
    players.credit_stats.side_effect = OperationalError("UPDATE", {}, Exception("locked"))

    with pytest.raises(DatabaseError):
        await service.agree_to_result("match-1", "player-bob")
    repository.commit.assert_not_called()
