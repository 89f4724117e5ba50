from lowtime.engine import evaluate
from lowtime.settings import AlertModes, Settings
from lowtime.state import TrackerState


def test_fires_at_threshold_while_running():
    state = TrackerState()
    settings = Settings(custom_message="Hurry up")
    decision = evaluate(30.0, True, 30.0, 10_000, state, settings)
    assert decision is not None
    assert decision.message == "Hurry up"
    assert decision.at_ms == 10_000
    assert state.alerted_this_game
    assert state.last_alert_at_ms == 10_000


def test_does_not_fire_above_threshold():
    state = TrackerState()
    assert evaluate(30.5, True, 30.0, 10_000, state) is None
    assert not state.alerted_this_game


def test_does_not_fire_when_clock_not_running():
    state = TrackerState()
    assert evaluate(5.0, False, 30.0, 10_000, state) is None
    assert not state.alerted_this_game
    assert state.last_alert_at_ms is None


def test_fires_only_once_per_game():
    state = TrackerState()
    assert evaluate(20.0, True, 30.0, 10_000, state) is not None
    assert evaluate(20.0, True, 30.0, 10_000, state) is None
    assert evaluate(15.0, True, 30.0, 60_000, state) is None


def test_rearm_spacing_blocks_quick_refire_after_reset():
    state = TrackerState()
    assert evaluate(20.0, True, 30.0, 10_000, state) is not None
    state.reset_for_new_game()
    assert evaluate(20.0, True, 30.0, 13_999, state) is None
    assert evaluate(20.0, True, 30.0, 14_000, state) is not None


def test_effects_follow_enabled_modes():
    settings = Settings(alert_modes=AlertModes(voice=False, notification=True, banner=False, sound=True))
    decision = evaluate(1.0, True, 30.0, 0, TrackerState(), settings)
    assert decision.effects == frozenset({"notification", "sound"})


def test_default_message_comes_from_language():
    decision = evaluate(1.0, True, 30.0, 0, TrackerState(), Settings(language="de", custom_message=""))
    assert decision.message == "Deine Zeit wird knapp"
