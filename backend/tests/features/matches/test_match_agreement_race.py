"""Simultaneous agreement from both players against a shared database file."""

import asyncio

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.enums import MatchStatus
from app.features.matches.repository import SQLAlchemyMatchRepository
from app.features.matches.service import MatchService
from app.features.players.repository import SQLAlchemyPlayerRepository
from app.features.venues.repository import SQLAlchemyReferenceRepository
from app.models import Base


@pytest.fixture
async def engine(tmp_path):
    # Separate connections per session, unlike the shared in-memory database
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'arena.db'}",
        connect_args={"timeout": 30},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


def _service(session: AsyncSession, settings) -> MatchService:
    return MatchService(
        SQLAlchemyMatchRepository(session),
        SQLAlchemyReferenceRepository(session),
        SQLAlchemyPlayerRepository(session),
        settings,
    )


@pytest.fixture
async def scored_match(seed, session_factory, settings):
    async with session_factory() as session:
        service = _service(session, settings)
        created = await service.create_match(
            seed.alice.id, seed.bob.id, seed.park.id, seed.basketball.id
        )
        await service.mark_ready(created.match_id, seed.alice.id)
        await service.mark_ready(created.match_id, seed.bob.id)
        await service.submit_score(created.match_id, seed.alice.id, 21, 15)
    return created.match_id


async def test_simultaneous_agreement_settles_once(
    seed, scored_match, session_factory, settings
):
    async def agree(player_id):
        async with session_factory() as session:
            return await _service(session, settings).agree_to_result(
                scored_match, player_id
            )

    responses = await asyncio.gather(agree(seed.alice.id), agree(seed.bob.id))

    assert "Match completed!" in {r.message for r in responses}
    assert all(r.success for r in responses)

    async with session_factory() as session:
        players = SQLAlchemyPlayerRepository(session)
        winner = await players.get_stats(seed.alice.id, seed.basketball.id)
        loser = await players.get_stats(seed.bob.id, seed.basketball.id)
        match = await SQLAlchemyMatchRepository(session).get(scored_match)

    assert match.match_status == MatchStatus.COMPLETED
    assert (winner.total_xp, winner.total_rp, winner.matches_played) == (100, 20, 1)
    assert (winner.matches_won, winner.matches_lost) == (1, 0)
    assert (loser.total_xp, loser.total_rp, loser.matches_played) == (25, 0, 1)
    assert (loser.matches_won, loser.matches_lost) == (0, 1)


async def test_repeated_simultaneous_agreement_is_idempotent(
    seed, scored_match, session_factory, settings
):
    async def agree(player_id):
        async with session_factory() as session:
            return await _service(session, settings).agree_to_result(
                scored_match, player_id
            )

    await asyncio.gather(agree(seed.alice.id), agree(seed.bob.id))
    again = await asyncio.gather(
        agree(seed.alice.id), agree(seed.bob.id), agree(seed.alice.id)
    )

    assert [r.both_agreed for r in again] == [True, True, True]
    async with session_factory() as session:
        stats = await SQLAlchemyPlayerRepository(session).get_stats(
            seed.alice.id, seed.basketball.id
        )
    assert stats.matches_played == 1
    assert stats.total_xp == 100
