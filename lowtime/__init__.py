"""Low-time alert engine for countdown clocks."""

from .dispatcher import AlertDispatcher
from .engine import FireDecision, evaluate
from .parser import parse_clock_text
from .settings import Settings, SettingsStore
from .tracker import ClockTracker, ClockWatcher
