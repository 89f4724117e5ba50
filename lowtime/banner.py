from __future__ import annotations

import logging
from threading import Lock, Timer
from typing import Optional

logger = logging.getLogger(__name__)

BANNER_HIDE_MS = 3500


class ConsoleBanner:
    """Transient banner shown as a log line; hidden again after ``hide_after_ms``."""

    def __init__(self, hide_after_ms: int = BANNER_HIDE_MS):
        self.hide_after_ms = hide_after_ms
        self._lock = Lock()
        self._text: Optional[str] = None
        self._timer: Optional[Timer] = None

    @property
    def visible_text(self) -> Optional[str]:
        with self._lock:
            return self._text

    def show(self, text: str) -> None:
        with self._lock:
            if self._timer:
                self._timer.cancel()
            self._text = text
            self._timer = Timer(self.hide_after_ms / 1000.0, self.hide)
            self._timer.daemon = True
            self._timer.start()
        logger.warning("*** %s ***", text)

    def hide(self) -> None:
        with self._lock:
            if self._timer:
                self._timer.cancel()
            self._timer = None
            self._text = None
