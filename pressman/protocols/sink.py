"""
Sink Protocol.

Where generated notifications and toast messages are handed off. Display is
the caller's business; the sink only receives.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Sink(Protocol):
    def notify(self, notification) -> None:
        """Receive one new Notification."""
        ...

    def toast(self, message: str, level: str = "info") -> None:
        """Receive one transient message (level: success, info or error)."""
        ...
