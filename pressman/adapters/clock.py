"""
Clock adapters.

Configuration:
    PRESSMAN = {
        "CLOCK": "pressman.adapters.clock.FrozenClock",
    }
"""

from datetime import datetime, timedelta
from datetime import timezone as dt_timezone

from django.utils import timezone


class SystemClock:
    """Wall clock in the project's timezone (TIME_ZONE / USE_TZ)."""

    def now(self) -> datetime:
        return timezone.now()

    def today(self) -> str:
        return timezone.localdate().isoformat()


class FrozenClock:
    """
    Fixed clock for tests and demos.

    Usage:
        clock = FrozenClock("2025-06-10T09:00:00+00:00")
        clock.advance(days=1)
    """

    DEFAULT = "2025-06-10T09:00:00+00:00"

    def __init__(self, at: datetime | str = None):
        self.set(at or self.DEFAULT)

    def set(self, at: datetime | str) -> None:
        if isinstance(at, str):
            at = datetime.fromisoformat(at)
        if timezone.is_naive(at):
            at = timezone.make_aware(at, dt_timezone.utc)
        self._now = at

    def advance(self, **delta) -> datetime:
        """Move forward by a timedelta given as keywords (days=1, hours=2...)."""
        self._now = self._now + timedelta(**delta)
        return self._now

    def now(self) -> datetime:
        return self._now

    def today(self) -> str:
        return self._now.date().isoformat()
