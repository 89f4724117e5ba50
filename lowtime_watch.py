import logging
import signal
import time

from audio_io import ToneOutput
from config import Config, load_config, setup_logging
from lowtime.banner import ConsoleBanner
from lowtime.coordinator import get_coordinator
from lowtime.dispatcher import AlertDispatcher
from lowtime.settings import SettingsStore, ensure_default_settings
from lowtime.sounds import LocalSpeaker, TonePlayer
from lowtime.sources import ClockSource, ReplaySource
from lowtime.tracker import ClockTracker, ClockWatcher

logger = logging.getLogger("lowtime")


def graceful_exit(signum, frame) -> None:  # pragma: no cover - signal handler
    logger.info("Shutting down (signal %s)", signum)
    raise KeyboardInterrupt()


def build_dispatcher(config: Config, source_name: str = "") -> AlertDispatcher:
    coordinator = get_coordinator()
    coordinator.title = config.notification_title
    return AlertDispatcher(
        banner=ConsoleBanner(hide_after_ms=config.banner_hide_ms),
        tone_player=TonePlayer(
            frequency_hz=config.tone_frequency_hz,
            duration_ms=config.tone_duration_ms,
            output=ToneOutput(config.output_device_index),
        ),
        speaker=LocalSpeaker(),
        coordinator=coordinator,
        source=source_name,
    )


class WatcherRuntime:
    def __init__(self, config: Config, source: ClockSource, source_name: str = ""):
        self.config = config
        self.settings_store = SettingsStore(config.settings_path)
        self.dispatcher = build_dispatcher(config, source_name)
        self.coordinator = self.dispatcher.coordinator
        self.tracker = ClockTracker(
            on_fire=self.dispatcher.dispatch,
            rearm_spacing_ms=config.rearm_spacing_ms,
            jump_seconds=config.time_jump_seconds,
        )
        self.watcher = ClockWatcher(
            source=source,
            tracker=self.tracker,
            settings_provider=self.settings_store.snapshot,
            interval=config.tick_interval_ms / 1000.0,
        )

    def start(self) -> None:
        self.coordinator.start()
        self.watcher.start()

    def shutdown(self) -> None:
        self.watcher.stop()
        # let a notification posted on the last tick go out
        self.coordinator.drain()
        self.coordinator.shutdown()


def main() -> None:
    config = load_config()
    setup_logging(config.log_level)
    signal.signal(signal.SIGINT, graceful_exit)
    logger.info("Starting low-time watcher")

    settings = ensure_default_settings(config.settings_path)
    logger.info(
        "Threshold %.0fs, language=%s, modes=%s",
        settings.threshold_seconds,
        settings.language,
        ",".join(sorted(settings.alert_modes.enabled())) or "none",
    )

    if not config.replay_path:
        logger.error("REPLAY_PATH is not set; nothing to watch")
        return

    runtime = WatcherRuntime(config, ReplaySource(config.replay_path), source_name=str(config.replay_path))
    runtime.start()
    try:
        while not runtime.watcher.finished:
            time.sleep(0.5)
        # leave time for the last alert's voice and banner
        time.sleep(config.banner_hide_ms / 1000.0)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        runtime.shutdown()


if __name__ == "__main__":
    main()
