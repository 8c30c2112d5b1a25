import pytest

from app.utils.geo import format_distance, haversine_km
from app.utils.statistics import round_half_up, safe_divide

VENUE = (48.1962, 16.3551)


@pytest.mark.parametrize(
    "latitude,expected_km",
    [(48.1971, 0.100), (48.1984, 0.245), (48.1993, 0.345), (48.1998, 0.400), (48.2025, 0.700)],
)
def test_haversine_along_meridian(latitude, expected_km):
    assert haversine_km(latitude, VENUE[1], *VENUE) == pytest.approx(expected_km, abs=0.005)


def test_haversine_zero_distance():
    assert haversine_km(*VENUE, *VENUE) == 0.0


def test_haversine_long_distance():
    # Vienna to Berlin, roughly 524 km
    assert haversine_km(48.2082, 16.3738, 52.5200, 13.4050) == pytest.approx(524, abs=5)


def test_format_distance():
    assert format_distance(0.35) == "350m"
    assert format_distance(1.234) == "1.2km"


def test_round_half_up():
    assert round_half_up(112.5) == 113
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4) == 2
    assert round_half_up(-2.5) == -3


def test_safe_divide():
    assert safe_divide(1, 4) == 0.25
    assert safe_divide(1, 0) == 0.0
