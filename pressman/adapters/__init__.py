"""
Pressman Adapters.

Implementations of protocols for stores, clocks and sinks.
Select them by dotted path in settings (see pressman.conf).
"""

from pressman.adapters.clock import FrozenClock, SystemClock
from pressman.adapters.memory import MemoryStore
from pressman.adapters.sink import BufferedSink, LoggingSink

__all__ = [
    # Stores
    "MemoryStore",
    # Clocks
    "SystemClock",
    "FrozenClock",
    # Sinks
    "LoggingSink",
    "BufferedSink",
]
