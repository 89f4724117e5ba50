from __future__ import annotations

import logging
from dataclasses import dataclass
from queue import Empty, Queue
from threading import Event, Lock, Thread
from typing import Callable, Optional

from plyer import notification

from .settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Chess.com Alert"


@dataclass(frozen=True)
class AlertRequest:
    settings: Settings
    message: str
    source: str = ""


def plyer_notify(title: str, message: str) -> None:
    notification.notify(title=title, message=message, app_name="lowtime", timeout=5)


class NotificationCoordinator:
    """Single owner of OS notifications for every watched page in the process.

    Trackers post an :class:`AlertRequest` and return immediately; a worker
    thread shows the notification when the request's settings enable it.
    """

    def __init__(
        self,
        notify_fn: Callable[[str, str], None] = plyer_notify,
        title: str = DEFAULT_TITLE,
    ):
        self.notify_fn = notify_fn
        self.title = title
        self._queue: "Queue[AlertRequest]" = Queue()
        self._stop_event = Event()
        self._thread: Optional[Thread] = None

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = Thread(target=self._loop, name="notification-coordinator", daemon=True)
        self._thread.start()

    def shutdown(self) -> None:
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=2)
        self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def post(self, request: AlertRequest) -> None:
        self._queue.put(request)

    def drain(self) -> int:
        """Deliver everything queued on the calling thread; returns the count handled."""

        handled = 0
        while True:
            try:
                request = self._queue.get_nowait()
            except Empty:
                return handled
            self._deliver(request)
            handled += 1

    def _loop(self) -> None:
        while not self._stop_event.is_set():
            try:
                request = self._queue.get(timeout=0.2)
            except Empty:
                continue
            self._deliver(request)

    def _deliver(self, request: AlertRequest) -> None:
        if not request.settings.alert_modes.notification:
            return
        try:
            self.notify_fn(self.title, request.message)
            logger.info("Notification shown for %s", request.source or "page")
        except Exception:
            logger.error("Notification backend failure", exc_info=True)


_coordinator: Optional[NotificationCoordinator] = None
_coordinator_lock = Lock()


def get_coordinator() -> NotificationCoordinator:
    global _coordinator
    with _coordinator_lock:
        if _coordinator is None:
            _coordinator = NotificationCoordinator()
        return _coordinator
