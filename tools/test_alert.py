import time

from config import load_config, setup_logging
from lowtime.engine import evaluate
from lowtime.settings import ensure_default_settings
from lowtime.state import TrackerState
from lowtime_watch import build_dispatcher


def main():
    config = load_config()
    setup_logging(config.log_level)
    settings = ensure_default_settings(config.settings_path)
    dispatcher = build_dispatcher(config, source_name="test-alert")

    decision = evaluate(0.0, True, settings.threshold_seconds, 0, TrackerState(), settings)
    print(f"Firing test alert: {decision.message!r} effects={sorted(decision.effects)}")
    dispatcher.dispatch(decision, settings)
    dispatcher.coordinator.drain()
    time.sleep(config.banner_hide_ms / 1000.0)


if __name__ == "__main__":
    main()
