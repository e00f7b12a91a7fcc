"""
Store Backend Protocol.

Defines the interface Pressman uses to load and persist its data. The store
is a black box: it may be a database, a remote document store or memory.

Vocabulary:
    load()          →  full snapshot (orders, users, settings, logs)
    upsert_order()  →  create or replace one order payload
    delete_order()  →  remove one order
    append_log()    →  persist one global audit entry
    subscribe()     →  push-based refresh on remote change
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, runtime_checkable


# ══════════════════════════════════════════════════════════════
# DATA TYPES
# ══════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Snapshot:
    """
    Estado completo carregado do store.

    `offline=True` means the store answered from a degraded source (cache,
    seed data); commands still work, writes may not reach the remote.
    """

    orders: list = field(default_factory=list)
    users: list = field(default_factory=list)
    settings: dict[str, Any] = field(default_factory=dict)
    logs: list = field(default_factory=list)
    offline: bool = False


# ══════════════════════════════════════════════════════════════
# PROTOCOL
# ══════════════════════════════════════════════════════════════


@runtime_checkable
class StoreBackend(Protocol):
    """
    Protocol for order persistence.

    Implementations raise on I/O failure; callers decide whether to
    swallow (fire-and-forget writes) or propagate (initial load).
    """

    def load(self) -> Snapshot:
        """Return the full current snapshot."""
        ...

    def upsert_order(self, order) -> None:
        """Create or replace `order` (an Order entity)."""
        ...

    def delete_order(self, order_id: str) -> None:
        """Delete one order. Unknown ids are ignored."""
        ...

    def append_log(self, entry) -> None:
        """Persist one LogEntry."""
        ...

    def subscribe(self, on_change: Callable[[], None]) -> Callable[[], None]:
        """
        Register `on_change` to be called after remote changes.

        Returns:
            Callable that cancels the subscription.
        """
        ...
