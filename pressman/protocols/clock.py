"""
Clock Protocol.

Every timestamp and every "today" in Pressman comes from a Clock, so
deadline logic can be tested with a fixed date.
"""

from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    def now(self) -> datetime:
        """Current timezone-aware datetime."""
        ...

    def today(self) -> str:
        """Current local date as ISO string (YYYY-MM-DD)."""
        ...
