import pytest

from app.features.venues.policy import AutoCheckInPolicy, PresenceAction

VENUE = (48.1962, 16.3551)


@pytest.fixture
def policy():
    return AutoCheckInPolicy()


def test_approaching_player_checks_in_only_inside_inner_radius(policy):
    # 400 m away: nothing happens yet
    assert policy.decide_for_position(48.1998, VENUE[1], *VENUE, False) == PresenceAction.NONE
    # within 200 m: auto check-in
    assert (
        policy.decide_for_position(48.1971, VENUE[1], *VENUE, False)
        == PresenceAction.CHECK_IN
    )


def test_hysteresis_band_keeps_player_checked_in(policy):
    # ~245 m: outside check-in radius but inside check-out radius
    assert policy.decide_for_position(48.1984, VENUE[1], *VENUE, True) == PresenceAction.NONE


def test_leaving_outer_radius_checks_out(policy):
    # ~345 m
    assert (
        policy.decide_for_position(48.1993, VENUE[1], *VENUE, True)
        == PresenceAction.CHECK_OUT
    )


def test_heartbeat_due_after_interval(policy):
    assert policy.decide(0.1, True, seconds_since_heartbeat=61) == PresenceAction.HEARTBEAT
    assert policy.decide(0.1, True, seconds_since_heartbeat=30) == PresenceAction.NONE


def test_outer_radius_must_not_be_smaller():
    with pytest.raises(ValueError):
        AutoCheckInPolicy(auto_checkin_radius_km=0.3, auto_checkout_radius_km=0.2)
