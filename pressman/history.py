"""
History log: append-only audit trail per order.
"""

from __future__ import annotations

from pressman.conf import system_actor_id, system_actor_name
from pressman.entities import Actor, HistoryEntry, Order


def record(order: Order, actor: Actor | None, status: str, sector: str, now: str) -> HistoryEntry:
    """Append one entry to `order.history`. Without an actor, the system sentinel is used."""
    entry = HistoryEntry(
        user_id=actor.id if actor else system_actor_id(),
        user_name=actor.name if actor else system_actor_name(),
        timestamp=now,
        status=str(status),
        sector=str(sector),
    )
    order.history.append(entry)
    return entry


def entries_for(order: Order, sector: str) -> list[HistoryEntry]:
    return [entry for entry in order.history if entry.sector == sector]


def last_change(order: Order) -> HistoryEntry | None:
    return order.history[-1] if order.history else None
