"""API client fixtures: the acting player is injected, services are mocked per test."""

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.features.auth import get_current_player
from app.main import app


@pytest.fixture
def acting_player():
    return SimpleNamespace(
        id="player-alice",
        display_name="Alice",
        city_id="city-vienna",
        age_group="18-30",
    )


@pytest.fixture
def client(acting_player):
    app.dependency_overrides[get_current_player] = lambda: acting_player
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def override():
    """Register a dependency override returning the given object."""

    def _override(dependency, value):
        app.dependency_overrides[dependency] = lambda: value
        return value

    return _override
