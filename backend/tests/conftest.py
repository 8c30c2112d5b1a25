"""Shared fixtures: an in-memory SQLite database seeded with reference data."""

from datetime import timedelta
from types import SimpleNamespace

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.models import utc_now
from app.models import (
    Base,
    ChallengeORM,
    CityORM,
    CountryORM,
    PlayerORM,
    SportORM,
    VenueORM,
)

# Weghuberpark, Vienna
VENUE_LAT = 48.1962
VENUE_LNG = 16.3551


@pytest.fixture
def settings():
    return Settings(job_scheduler_enabled=False)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(engine):
    factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    async with factory() as session:
        yield session


@pytest.fixture
async def seed(db_session):
    """Two countries, three cities, two venues, one sport, four players, one challenge."""
    austria = CountryORM(id="country-at", name="Austria", code="AT")
    germany = CountryORM(id="country-de", name="Germany", code="DE")
    vienna = CityORM(id="city-vienna", name="Vienna", country_id=austria.id)
    graz = CityORM(id="city-graz", name="Graz", country_id=austria.id)
    berlin = CityORM(id="city-berlin", name="Berlin", country_id=germany.id)
    park = VenueORM(
        id="venue-park",
        name="Weghuberpark",
        city_id=vienna.id,
        latitude=VENUE_LAT,
        longitude=VENUE_LNG,
        is_active=True,
    )
    gym = VenueORM(
        id="venue-gym",
        name="Indoor Gym",
        city_id=vienna.id,
        latitude=None,
        longitude=None,
        is_active=True,
    )
    basketball = SportORM(
        id="sport-basketball", name="Basketball", slug="basketball", is_active=True
    )
    alice = PlayerORM(
        id="player-alice", display_name="Alice", city_id=vienna.id, age_group="18-30"
    )
    bob = PlayerORM(
        id="player-bob", display_name="Bob", city_id=vienna.id, age_group="18-30"
    )
    carol = PlayerORM(
        id="player-carol", display_name="Carol", city_id=graz.id, age_group="18-30"
    )
    dave = PlayerORM(
        id="player-dave", display_name="Dave", city_id=berlin.id, age_group="18-30"
    )
    free_throws = ChallengeORM(
        id="challenge-free-throws",
        venue_id=park.id,
        sport_id=basketball.id,
        name="Free throws",
        challenge_type="free_throws",
        difficulty="hard",
        xp_reward=100,
        rp_reward=10,
        is_active=True,
    )

    db_session.add_all([austria, germany])
    await db_session.flush()
    db_session.add_all([vienna, graz, berlin])
    await db_session.flush()
    db_session.add_all([park, gym, basketball, alice, bob, carol, dave])
    await db_session.flush()
    db_session.add(free_throws)
    await db_session.commit()

    return SimpleNamespace(
        austria=austria,
        germany=germany,
        vienna=vienna,
        graz=graz,
        berlin=berlin,
        park=park,
        gym=gym,
        basketball=basketball,
        alice=alice,
        bob=bob,
        carol=carol,
        dave=dave,
        free_throws=free_throws,
    )


@pytest.fixture
def hours_ago():
    def _hours_ago(hours: float):
        return utc_now() - timedelta(hours=hours)

    return _hours_ago
