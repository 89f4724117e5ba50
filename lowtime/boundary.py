from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .state import ClockSample, TrackerState

logger = logging.getLogger(__name__)

TIME_JUMP_SECONDS = 180.0

REASON_NAVIGATION = "navigation"
REASON_TIME_JUMP = "time_jump"


@dataclass(frozen=True)
class BoundaryResult:
    reset: bool
    reason: Optional[str] = None


def check_boundary(
    sample: ClockSample,
    state: TrackerState,
    jump_seconds: float = TIME_JUMP_SECONDS,
) -> BoundaryResult:
    """Reset ``state`` when ``sample`` looks like it belongs to a new game.

    A changed navigation key resets the tracker outright. Otherwise a self
    clock that sits more than ``jump_seconds`` above the lowest value seen this
    game means the full time budget came back, which is a new game rather than
    an increment.
    """

    reason: Optional[str] = None

    previous_key = state.current_navigation_key
    state.current_navigation_key = sample.navigation_key
    if previous_key is not None and sample.navigation_key != previous_key:
        logger.info("Navigation changed (%s -> %s), resetting for new game", previous_key, sample.navigation_key)
        state.reset_for_new_game()
        reason = REASON_NAVIGATION

    seconds = sample.parsed_seconds
    if seconds is None:
        return BoundaryResult(reset=reason is not None, reason=reason)

    if seconds < state.min_self_seconds_seen:
        state.min_self_seconds_seen = seconds

    if math.isfinite(state.min_self_seconds_seen) and seconds - state.min_self_seconds_seen > jump_seconds:
        logger.info(
            "Self clock jumped from %.1fs to %.1fs, resetting for new game",
            state.min_self_seconds_seen,
            seconds,
        )
        state.reset_for_new_game()
        state.min_self_seconds_seen = seconds
        reason = REASON_TIME_JUMP

    return BoundaryResult(reset=reason is not None, reason=reason)
