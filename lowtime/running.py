from __future__ import annotations

from typing import Optional


def is_running(self_active: bool, self_seconds: float, previous_self_seconds: Optional[float]) -> bool:
    """True when the page marks the self clock active or its value went down since the last tick."""

    decreasing = previous_self_seconds is not None and self_seconds < previous_self_seconds
    return bool(self_active) or decreasing
