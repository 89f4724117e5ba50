from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ClockSample:
    owner_is_self: bool
    raw_text: str
    parsed_seconds: Optional[float]
    navigation_key: str


@dataclass
class TrackerState:
    """Per-page alert bookkeeping, owned by a single tick loop."""

    last_self_seconds: Optional[float] = None
    min_self_seconds_seen: float = math.inf
    alerted_this_game: bool = False
    last_alert_at_ms: Optional[int] = None
    current_navigation_key: Optional[str] = None

    def reset_for_new_game(self) -> None:
        self.alerted_this_game = False
        self.last_self_seconds = None
        self.min_self_seconds_seen = math.inf
