from __future__ import annotations

import math
import time
from typing import Optional


def epoch_ms() -> int:
    return int(time.time() * 1000)


def format_clock(seconds: Optional[float]) -> str:
    """Render seconds the way a game clock shows them: ``1:02:03``, ``2:09`` or ``0:09.8`` under 10s."""

    if seconds is None or not math.isfinite(seconds):
        return "--:--"
    sign = "-" if seconds < 0 else ""
    seconds = abs(seconds)
    if seconds < 10:
        tenths = int(seconds * 10)
        return f"{sign}0:{tenths // 10:02d}.{tenths % 10}"
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{sign}{hours}:{minutes:02d}:{secs:02d}"
    return f"{sign}{minutes}:{secs:02d}"
