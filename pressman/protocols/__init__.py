"""
Pressman Protocols.

Defines interfaces for external collaborators.
"""

from pressman.protocols.clock import Clock
from pressman.protocols.sink import Sink
from pressman.protocols.store import Snapshot, StoreBackend

__all__ = [
    # Store Protocol
    "StoreBackend",
    "Snapshot",
    # Clock Protocol
    "Clock",
    # Sink Protocol
    "Sink",
]
