"""
Pressman Signal Handlers.

Audit lines for the Django log: who finished, archived or deleted what.

This module is imported in apps.py to register handlers.
"""

import logging

from django.dispatch import receiver

from pressman.signals import order_archived, order_reactivated, orders_deleted

logger = logging.getLogger(__name__)


def _actor_name(actor) -> str:
    return actor.name if actor is not None else "Sistema"


@receiver(order_archived)
def log_order_archived(sender, order, actor=None, **kwargs):
    logger.info(
        f"O.R #{order.order_number} archived by {_actor_name(actor)}",
        extra={"order_id": order.id, "archived_at": order.archived_at},
    )


@receiver(order_reactivated)
def log_order_reactivated(sender, order, actor=None, **kwargs):
    logger.info(
        f"O.R #{order.order_number} reactivated by {_actor_name(actor)}",
        extra={"order_id": order.id},
    )


@receiver(orders_deleted)
def log_orders_deleted(sender, entries, actor=None, **kwargs):
    """One warning per deleted order; the entries themselves are persisted by the store."""
    for entry in entries:
        logger.warning(
            f"{entry.action_type}: {entry.target_info} by {entry.user_name}",
            extra={"log_id": entry.id, "user_id": entry.user_id},
        )
