"""
Pressman Signals.

Sent by the Press service after each successful command, so other apps can
react without the core knowing about them.

Signals:
    order_created: New order entered the pipeline
    order_status_changed: One stage changed status
    order_assigned: Stage assignment set or removed
    order_archived: Order archived (explicitly or by finishing expedição)
    order_reactivated: Archived order back on the board
    orders_deleted: Orders removed from the set
"""

from django.dispatch import Signal

# Args: order, actor
order_created = Signal()

# Args: order, stage, status, actor
order_status_changed = Signal()

# Args: order, stage, assignment (None on removal), previous_user_id, actor
order_assigned = Signal()

# Args: order, actor
order_archived = Signal()

# Args: order, actor
order_reactivated = Signal()

# Args: entries (list of LogEntry), actor
orders_deleted = Signal()

__all__ = [
    "order_created",
    "order_status_changed",
    "order_assigned",
    "order_archived",
    "order_reactivated",
    "orders_deleted",
]
