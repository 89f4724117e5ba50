import math

from lowtime.boundary import REASON_NAVIGATION, REASON_TIME_JUMP, check_boundary
from lowtime.state import ClockSample, TrackerState


def _sample(seconds, url="https://example.com/game/1"):
    return ClockSample(owner_is_self=True, raw_text=str(seconds), parsed_seconds=seconds, navigation_key=url)


def test_first_sample_sets_navigation_key_without_reset():
    state = TrackerState()
    result = check_boundary(_sample(300.0), state)
    assert not result.reset
    assert state.current_navigation_key == "https://example.com/game/1"
    assert state.min_self_seconds_seen == 300.0


def test_running_minimum_tracks_lowest_sample():
    state = TrackerState()
    for seconds, expected in [(60.0, 60.0), (55.0, 55.0), (58.0, 55.0), (41.5, 41.5), (50.0, 41.5)]:
        result = check_boundary(_sample(seconds), state)
        assert not result.reset
        assert state.min_self_seconds_seen == expected


def test_navigation_change_resets_game_state():
    state = TrackerState()
    check_boundary(_sample(20.0), state)
    state.alerted_this_game = True
    state.last_self_seconds = 20.0
    state.last_alert_at_ms = 1234

    result = check_boundary(_sample(25.0, url="https://example.com/game/2"), state)

    assert result.reset
    assert result.reason == REASON_NAVIGATION
    assert state.current_navigation_key == "https://example.com/game/2"
    assert not state.alerted_this_game
    assert state.last_self_seconds is None
    # the triggering sample is folded into the fresh minimum
    assert state.min_self_seconds_seen == 25.0
    assert state.last_alert_at_ms == 1234


def test_time_jump_resets_and_reseeds_minimum():
    state = TrackerState()
    check_boundary(_sample(10.0), state)
    state.alerted_this_game = True
    state.last_self_seconds = 10.0
    state.last_alert_at_ms = 99

    result = check_boundary(_sample(205.0), state)

    assert result.reset
    assert result.reason == REASON_TIME_JUMP
    assert not state.alerted_this_game
    assert state.last_self_seconds is None
    assert state.min_self_seconds_seen == 205.0
    assert state.current_navigation_key == "https://example.com/game/1"
    assert state.last_alert_at_ms == 99

    follow_up = check_boundary(_sample(204.5), state)
    assert not follow_up.reset


def test_increment_below_jump_limit_keeps_game():
    state = TrackerState()
    check_boundary(_sample(10.0), state)
    result = check_boundary(_sample(190.0), state)
    assert not result.reset
    assert state.min_self_seconds_seen == 10.0


def test_reset_for_new_game_clears_only_game_fields():
    state = TrackerState(
        last_self_seconds=12.0,
        min_self_seconds_seen=12.0,
        alerted_this_game=True,
        last_alert_at_ms=500,
        current_navigation_key="k",
    )
    state.reset_for_new_game()
    assert state.last_self_seconds is None
    assert math.isinf(state.min_self_seconds_seen)
    assert not state.alerted_this_game
    assert state.last_alert_at_ms == 500
    assert state.current_navigation_key == "k"
