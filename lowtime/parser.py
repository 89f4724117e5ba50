from __future__ import annotations

import math
import re
from typing import Optional

_NON_DIGITS = re.compile(r"[^0-9]")
_NON_DECIMAL = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"\d*\.?\d+|\d+")


def parse_clock_text(text: Optional[str]) -> Optional[float]:
    """Convert clock text such as ``1:02:03.5``, ``2:09.8`` or ``45`` to seconds.

    Fields are read most-significant first. Junk characters inside a field are
    stripped, and a field with nothing numeric left counts as zero, so ``"::"``
    reads as ``0.0``. Only blank input, more than three fields or a non-finite
    total give ``None``.
    """

    raw = (text or "").strip()
    if not raw:
        return None
    parts = raw.split(":")
    if len(parts) > 3:
        return None

    *leading, last = parts
    seconds = _parse_float_field(last)
    for power, field in enumerate(reversed(leading), start=1):
        seconds += _parse_int_field(field) * 60**power

    return seconds if math.isfinite(seconds) else None


def _parse_int_field(value: str) -> float:
    cleaned = _NON_DIGITS.sub("", value)
    if not cleaned:
        return 0.0
    try:
        return float(int(cleaned))
    except (OverflowError, ValueError):
        # digit runs too long for a float count as an empty field
        return 0.0


def _parse_float_field(value: str) -> float:
    # "09.8" -> 9.8; stray dots ("1.2.3") keep the first decimal number only
    cleaned = _NON_DECIMAL.sub("", value)
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return 0.0
    number = float(match.group(0))
    return number if math.isfinite(number) else 0.0
