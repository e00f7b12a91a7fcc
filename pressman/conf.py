"""
Pressman Settings.

Supports two formats (dict takes priority):

    # Option 1: Dict
    PRESSMAN = {
        "STORE_BACKEND": "pressman.adapters.memory.MemoryStore",
        "NOTIFICATION_LIMIT": 50,
    }

    # Option 2: Flat
    PRESSMAN_STORE_BACKEND = "pressman.adapters.memory.MemoryStore"
    PRESSMAN_NOTIFICATION_LIMIT = 50

All settings have defaults, so no configuration is required.
"""

import threading

from django.conf import settings
from django.utils.module_loading import import_string


# ── Defaults ──

DEFAULTS = {
    "STORE_BACKEND": "pressman.adapters.django_store.DjangoStore",
    "CLOCK": "pressman.adapters.clock.SystemClock",
    "SINK": "pressman.adapters.sink.LoggingSink",
    "NOTIFICATION_LIMIT": 50,
    "MANUAL_NOTIFICATION_LIMIT": 200,
    "SCAN_INTERVAL_SECONDS": 60,
    "SYSTEM_ACTOR_ID": "sys",
    "SYSTEM_ACTOR_NAME": "Sistema",
    "BROADCAST_TARGET": "ALL",
    "GENERAL_SECTOR": "Geral",
    "DEFAULT_RESET_PASSWORD": "1234",
    "SHOP": {
        "name": "NEWCOM CONTROL",
        "address": "",
        "contact": "",
        "reminderEnabled": False,
    },
}


# ── Accessors ──

_sentinel = object()


def get_setting(name, default=_sentinel):
    """
    Get a pressman setting.

    Looks up in order:
    1. PRESSMAN dict (e.g. PRESSMAN = {"STORE_BACKEND": "..."})
    2. Flat setting (e.g. PRESSMAN_STORE_BACKEND = "...")
    3. DEFAULTS
    """
    pressman_dict = getattr(settings, "PRESSMAN", {})
    if name in pressman_dict:
        return pressman_dict[name]

    flat_value = getattr(settings, f"PRESSMAN_{name}", _sentinel)
    if flat_value is not _sentinel:
        return flat_value

    if default is not _sentinel:
        return default

    return DEFAULTS.get(name)


def broadcast_target() -> str:
    return get_setting("BROADCAST_TARGET")


def general_sector() -> str:
    return get_setting("GENERAL_SECTOR")


def system_actor_id() -> str:
    return get_setting("SYSTEM_ACTOR_ID")


def system_actor_name() -> str:
    return get_setting("SYSTEM_ACTOR_NAME")


# ── Backends ──

_backend_lock = threading.Lock()
_backend_instances: dict = {}


def _get_backend(name: str):
    """Instantiate the backend configured under `name`, once per process."""
    instance = _backend_instances.get(name)
    if instance is None:
        with _backend_lock:
            instance = _backend_instances.get(name)
            if instance is None:  # double-checked
                instance = import_string(get_setting(name))()
                _backend_instances[name] = instance
    return instance


def get_store_backend():
    """
    Return the configured store backend instance.

    The store loads full snapshots and accepts order upserts/deletes.
    """
    return _get_backend("STORE_BACKEND")


def get_clock():
    """Return the configured clock (now/today provider)."""
    return _get_backend("CLOCK")


def get_sink():
    """Return the configured notification/toast sink."""
    return _get_backend("SINK")


def reset_backends() -> None:
    """Reset singletons (for tests)."""
    with _backend_lock:
        _backend_instances.clear()
