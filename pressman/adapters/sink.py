"""
Sink adapters -- where notifications and toasts are handed off.

LoggingSink is the default: a web deployment reads the feed through the API,
so the sink only has to leave a trace. BufferedSink keeps everything in
memory for tests and for callers that poll.
"""

import logging
import threading

logger = logging.getLogger(__name__)


class LoggingSink:
    """Writes notifications and toasts to the `pressman.sink` logger."""

    def notify(self, notification) -> None:
        logger.info(
            f"[{notification.type}] {notification.title}: {notification.message}",
            extra={
                "notification_id": notification.id,
                "target": notification.target_user_id,
            },
        )

    def toast(self, message: str, level: str = "info") -> None:
        log = logger.warning if level == "error" else logger.info
        log(message, extra={"level": level})


class BufferedSink:
    """
    Collects everything it receives.

    Usage:
        sink = BufferedSink()
        ...
        assert sink.toasts[-1] == ("O.R Arquivada!", "success")
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.notifications = []
        self.toasts = []

    def notify(self, notification) -> None:
        with self._lock:
            self.notifications.append(notification)

    def toast(self, message: str, level: str = "info") -> None:
        with self._lock:
            self.toasts.append((message, level))

    def clear(self) -> None:
        with self._lock:
            self.notifications.clear()
            self.toasts.clear()
