from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Optional

from .settings import Settings
from .state import TrackerState

logger = logging.getLogger(__name__)

REARM_SPACING_MS = 4000


@dataclass(frozen=True)
class FireDecision:
    message: str
    effects: FrozenSet[str]
    at_ms: int


def evaluate(
    self_seconds: float,
    running: bool,
    threshold: float,
    now_ms: int,
    state: TrackerState,
    settings: Optional[Settings] = None,
    rearm_spacing_ms: int = REARM_SPACING_MS,
) -> Optional[FireDecision]:
    """Decide whether the low-time alert fires on this tick.

    The alert fires at most once per game: only while the self clock is
    running, at or below ``threshold``, and at least ``rearm_spacing_ms``
    after the previous alert. The state is marked as alerted on the decision
    itself, whether or not the side effects later succeed.
    """

    if not running:
        return None
    if state.alerted_this_game:
        return None
    if self_seconds > threshold:
        return None
    if state.last_alert_at_ms is not None and now_ms - state.last_alert_at_ms < rearm_spacing_ms:
        logger.debug("Alert suppressed, last one fired %sms ago", now_ms - state.last_alert_at_ms)
        return None

    settings = settings or Settings()
    state.alerted_this_game = True
    state.last_alert_at_ms = now_ms
    logger.info("Low time alert at %.1fs (threshold %.1fs)", self_seconds, threshold)
    return FireDecision(message=settings.message, effects=settings.alert_modes.enabled(), at_ms=now_ms)
