from __future__ import annotations

import logging
from threading import Event, Thread
from typing import Callable, Optional

from time_utils import epoch_ms, format_clock

from .boundary import TIME_JUMP_SECONDS, check_boundary
from .engine import REARM_SPACING_MS, FireDecision, evaluate
from .parser import parse_clock_text
from .running import is_running
from .settings import Settings
from .sources import ClockReading, ClockSource
from .state import ClockSample, TrackerState

logger = logging.getLogger(__name__)


class ClockTracker:
    """Per-page pipeline: parse, detect game boundaries, classify, decide, dispatch."""

    def __init__(
        self,
        on_fire: Optional[Callable[[FireDecision, Settings], None]] = None,
        now_fn: Callable[[], int] = epoch_ms,
        rearm_spacing_ms: int = REARM_SPACING_MS,
        jump_seconds: float = TIME_JUMP_SECONDS,
    ):
        self.on_fire = on_fire
        self.now_fn = now_fn
        self.rearm_spacing_ms = rearm_spacing_ms
        self.jump_seconds = jump_seconds
        self.state = TrackerState()

    def tick(self, reading: Optional[ClockReading], settings: Settings) -> Optional[FireDecision]:
        if reading is None or reading.self_text is None or reading.opponent_text is None:
            logger.debug("Clock readings missing, skipping tick")
            return None

        self_sample = ClockSample(True, reading.self_text, parse_clock_text(reading.self_text), reading.navigation_key)
        opponent_sample = ClockSample(
            False, reading.opponent_text, parse_clock_text(reading.opponent_text), reading.navigation_key
        )
        if self_sample.parsed_seconds is None or opponent_sample.parsed_seconds is None:
            logger.debug("Unparseable clock text %r / %r, skipping tick", reading.self_text, reading.opponent_text)
            return None

        state = self.state
        boundary = check_boundary(self_sample, state, self.jump_seconds)
        if boundary.reset:
            logger.info("New game (%s), self clock at %s", boundary.reason, format_clock(self_sample.parsed_seconds))

        seconds = self_sample.parsed_seconds
        running = is_running(reading.self_active, seconds, state.last_self_seconds)
        decision = evaluate(
            seconds,
            running,
            settings.threshold_seconds,
            self.now_fn(),
            state,
            settings,
            self.rearm_spacing_ms,
        )
        state.last_self_seconds = seconds

        if decision and self.on_fire:
            try:
                self.on_fire(decision, settings)
            except Exception:
                logger.error("Alert dispatch failed", exc_info=True)
        return decision


class ClockWatcher:
    """Samples a clock source on a fixed interval and feeds the tracker."""

    def __init__(
        self,
        source: ClockSource,
        tracker: ClockTracker,
        settings_provider: Callable[[], Settings],
        interval: float = 0.5,
    ):
        self.source = source
        self.tracker = tracker
        self.settings_provider = settings_provider
        self.interval = max(0.05, interval)
        self._stop_event = Event()
        self._thread: Optional[Thread] = None

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = Thread(target=self._loop, name="clock-watcher", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=2)
        self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def finished(self) -> bool:
        return bool(getattr(self.source, "exhausted", False))

    def wait(self, timeout: Optional[float] = None) -> None:
        if self._thread:
            self._thread.join(timeout)

    def run_once(self) -> Optional[FireDecision]:
        settings = self.settings_provider()
        return self.tracker.tick(self.source.read(), settings)

    def _loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.run_once()
            except Exception:
                logger.exception("Watcher tick error")
            if self.finished:
                logger.info("Clock source exhausted, stopping watcher")
                return
            self._stop_event.wait(self.interval)
