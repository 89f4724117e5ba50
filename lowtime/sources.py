from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Protocol, Sequence, Tuple

logger = logging.getLogger(__name__)

ACTIVE_CLASS_NAMES = ("clock-player-turn", "clock--active", "clock-running", "active")


@dataclass(frozen=True)
class ClockReading:
    self_text: Optional[str]
    opponent_text: Optional[str]
    self_active: bool
    navigation_key: str


@dataclass(frozen=True)
class ClockNode:
    """Snapshot of one clock-like element on the page."""

    text: str
    classes: Tuple[str, ...] = ()
    attributes: Dict[str, str] = field(default_factory=dict)
    top: float = math.nan
    width: float = 0.0
    height: float = 0.0

    @property
    def area(self) -> float:
        return self.width * self.height

    @classmethod
    def from_dict(cls, data: dict) -> "ClockNode":
        classes = data.get("classes") or ()
        if isinstance(classes, str):
            classes = classes.split()
        return cls(
            text=str(data.get("text") or ""),
            classes=tuple(classes),
            attributes={str(k): str(v) for k, v in (data.get("attributes") or {}).items()},
            top=float(data["top"]) if data.get("top") is not None else math.nan,
            width=float(data.get("width") or 0.0),
            height=float(data.get("height") or 0.0),
        )


class ClockSource(Protocol):
    def read(self) -> Optional[ClockReading]:
        ...


def is_active_node(node: Optional[ClockNode]) -> bool:
    if node is None:
        return False
    return any(c in node.classes for c in ACTIVE_CLASS_NAMES) or node.attributes.get("data-active") == "true"


def self_active_signal(self_node: Optional[ClockNode], opponent_node: Optional[ClockNode]) -> bool:
    return is_active_node(self_node) and not is_active_node(opponent_node)


def pick_clock_pair(nodes: Sequence[ClockNode]) -> Tuple[Optional[ClockNode], Optional[ClockNode]]:
    """Pick ``(self, opponent)`` by screen position: bottom clock is ours, top is theirs."""

    usable = [n for n in nodes if math.isfinite(n.top) and n.width > 0 and n.height > 0]
    if len(usable) < 2:
        return None, None
    # Nested .time inside .clock: the smaller element is the more specific one
    usable.sort(key=lambda n: n.area)
    usable.sort(key=lambda n: n.top)
    return usable[-1], usable[0]


def reading_from_nodes(nodes: Sequence[ClockNode], navigation_key: str) -> ClockReading:
    self_node, opponent_node = pick_clock_pair(nodes)
    return ClockReading(
        self_text=self_node.text if self_node else None,
        opponent_text=opponent_node.text if opponent_node else None,
        self_active=self_active_signal(self_node, opponent_node),
        navigation_key=navigation_key,
    )


def reading_from_record(record: dict) -> ClockReading:
    navigation_key = str(record.get("url") or "")
    if "nodes" in record:
        nodes = [ClockNode.from_dict(item) for item in record.get("nodes") or []]
        return reading_from_nodes(nodes, navigation_key)
    return ClockReading(
        self_text=record.get("self"),
        opponent_text=record.get("opponent"),
        self_active=bool(record.get("active", False)),
        navigation_key=navigation_key,
    )


class ReplaySource:
    """Replays recorded ticks from a JSON-lines file, one reading per line."""

    def __init__(self, path: Path):
        self.path = path
        self._readings: Optional[Iterator[ClockReading]] = None
        self.exhausted = False

    def read(self) -> Optional[ClockReading]:
        if self._readings is None:
            self._readings = iter(self._load())
        reading = next(self._readings, None)
        if reading is None:
            self.exhausted = True
        return reading

    def _load(self) -> List[ClockReading]:
        readings: List[ClockReading] = []
        with self.path.open("r", encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    readings.append(reading_from_record(json.loads(line)))
                except Exception as exc:
                    logger.warning("Skipping replay line %s due to parse error: %s", lineno, exc)
        logger.info("Loaded %s recorded ticks from %s", len(readings), self.path)
        return readings
