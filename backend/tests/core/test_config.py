import pytest
from pydantic import ValidationError as PydanticValidationError

from app.core.config import Settings


def test_defaults():
    settings = Settings()

    assert settings.max_checkin_distance_km == 0.5
    assert settings.stale_presence_threshold_hours == 2.0
    assert settings.match_require_both_ready is True
    assert settings.ranking_default_limit == 10
    assert settings.ranking_max_limit == 100


def test_database_url_from_parts():
    settings = Settings(
        postgres_user="u",
        postgres_password="p",
        postgres_host="db",
        postgres_port=5433,
        postgres_db="arena",
    )

    assert settings.database_url == "postgresql+asyncpg://u:p@db:5433/arena"


def test_database_url_override():
    settings = Settings(database_url_override="sqlite+aiosqlite://")

    assert settings.database_url == "sqlite+aiosqlite://"


def test_cors_origins_list():
    settings = Settings(cors_origins="http://a.test, http://b.test,")

    assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


def test_weak_jwt_secret_rejected_in_production(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")

    with pytest.raises(PydanticValidationError):
        Settings(jwt_secret_key="dev_secret_key_please_change_in_production")


def test_short_jwt_secret_rejected_in_production(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")

    with pytest.raises(PydanticValidationError):
        Settings(jwt_secret_key="short")


def test_weak_jwt_secret_allowed_in_dev(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "dev")

    settings = Settings(jwt_secret_key="short")

    assert settings.jwt_secret_key == "short"


def test_geofence_must_be_positive():
    with pytest.raises(PydanticValidationError):
        Settings(max_checkin_distance_km=0)
