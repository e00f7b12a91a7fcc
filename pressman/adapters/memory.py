"""
Memory Store -- in-process StoreBackend.

Keeps payload dicts (the same shape a remote document store would hold), so
what comes back from `load()` is always a fresh copy.

Configuration:
    PRESSMAN = {
        "STORE_BACKEND": "pressman.adapters.memory.MemoryStore",
    }
"""

import copy
import logging
import threading

from pressman.conf import get_setting
from pressman.entities import Actor, LogEntry, Order
from pressman.exceptions import PressError
from pressman.protocols.store import Snapshot

logger = logging.getLogger(__name__)


class MemoryStore:
    """
    Implementação do StoreBackend em memória.

    Exemplo de uso:
        store = MemoryStore(users=[Actor(id="u1", name="Ana")])
        store.upsert_order(order)
        snapshot = store.load()

    `offline=True` makes load() report degraded mode; `fail_writes=True` makes
    every write raise STORE_UNAVAILABLE.
    """

    def __init__(self, orders=(), users=(), settings=None, offline=False, fail_writes=False):
        self._lock = threading.RLock()
        self._orders: dict[str, dict] = {order.id: order.to_dict() for order in orders}
        self._users: list[Actor] = list(users)
        self._logs: list[LogEntry] = []
        self._settings = settings if settings is not None else dict(get_setting("SHOP"))
        self._subscribers = []
        self.offline = offline
        self.fail_writes = fail_writes

    def load(self) -> Snapshot:
        with self._lock:
            return Snapshot(
                orders=[Order.from_dict(copy.deepcopy(data)) for data in self._orders.values()],
                users=list(self._users),
                settings=dict(self._settings),
                logs=list(self._logs),
                offline=self.offline,
            )

    def upsert_order(self, order) -> None:
        self._check_writable()
        with self._lock:
            self._orders[order.id] = order.to_dict()
        self._notify()

    def delete_order(self, order_id: str) -> None:
        self._check_writable()
        with self._lock:
            removed = self._orders.pop(order_id, None)
        if removed is not None:
            self._notify()

    def append_log(self, entry) -> None:
        self._check_writable()
        with self._lock:
            self._logs.insert(0, entry)

    def add_user(self, user: Actor) -> None:
        with self._lock:
            self._users.append(user)

    def subscribe(self, on_change):
        with self._lock:
            self._subscribers.append(on_change)

        def unsubscribe():
            with self._lock:
                if on_change in self._subscribers:
                    self._subscribers.remove(on_change)

        return unsubscribe

    # ── internals ──

    def _check_writable(self):
        if self.fail_writes:
            raise PressError("STORE_UNAVAILABLE", backend="memory")

    def _notify(self):
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback()
