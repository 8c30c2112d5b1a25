from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from app.init_db import drop_all_tables, init_db

EXPECTED_TABLES = {
    "active_players",
    "challenge_attempts",
    "challenges",
    "cities",
    "countries",
    "matches",
    "player_stats",
    "players",
    "sports",
    "venues",
}


async def _table_names(engine) -> set:
    async with engine.connect() as conn:
        return set(await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names()))


async def test_init_and_drop_tables():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    try:
        await init_db(engine)
        assert await _table_names(engine) == EXPECTED_TABLES

        await drop_all_tables(engine)
        assert await _table_names(engine) == set()
    finally:
        await engine.dispose()
