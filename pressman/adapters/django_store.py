"""
Django Store -- StoreBackend on the ORM.

Orders live in ProductionOrder (with django-simple-history keeping every row
version), the roster in TeamMember, deletions in AuditLogEntry. The shop
settings come from PRESSMAN["SHOP"].

Vocabulary mapping:
    Pressman            →  ORM
    ─────────────────────────────────
    load()              →  ProductionOrder / TeamMember / AuditLogEntry .all()
    upsert_order()      →  ProductionOrder.objects.update_or_create()
    delete_order()      →  ProductionOrder.objects.filter().delete()
    append_log()        →  AuditLogEntry.objects.create()
    subscribe()         →  post_save / post_delete on ProductionOrder
"""

import logging
import uuid

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.utils.dateparse import parse_datetime

from pressman.conf import get_setting
from pressman.protocols.store import Snapshot

logger = logging.getLogger(__name__)


class DjangoStore:
    """
    Implementação do StoreBackend usando o ORM do Django.

    Exemplo de uso:
        from pressman.conf import get_store_backend

        store = get_store_backend()
        snapshot = store.load()
    """

    def load(self) -> Snapshot:
        from pressman.models import AuditLogEntry, ProductionOrder, TeamMember

        return Snapshot(
            orders=[row.to_entity() for row in ProductionOrder.objects.all()],
            users=[member.to_actor() for member in TeamMember.objects.filter(is_active=True)],
            settings=dict(get_setting("SHOP")),
            logs=[entry.to_entity() for entry in AuditLogEntry.objects.all()],
        )

    @transaction.atomic
    def upsert_order(self, order) -> None:
        from pressman.models import ProductionOrder

        ProductionOrder.objects.update_or_create(
            id=order.id,
            defaults=ProductionOrder.fields_from_entity(order),
        )
        logger.debug(f"Persisted O.R #{order.order_number}", extra={"order_id": order.id})

    def delete_order(self, order_id: str) -> None:
        from pressman.models import ProductionOrder

        deleted, _ = ProductionOrder.objects.filter(id=order_id).delete()
        if deleted:
            logger.debug(f"Deleted order {order_id}", extra={"order_id": order_id})

    def append_log(self, entry) -> None:
        from pressman.models import AuditLogEntry

        fields = {
            "action_type": entry.action_type,
            "user_id": entry.user_id,
            "user_name": entry.user_name,
            "target_info": entry.target_info,
        }
        timestamp = parse_datetime(entry.timestamp) if entry.timestamp else None
        if timestamp is not None:
            fields["timestamp"] = timestamp
        AuditLogEntry.objects.create(**fields)

    def subscribe(self, on_change):
        """
        Call `on_change()` after any ProductionOrder save/delete in this process.

        Returns:
            Callable that disconnects both receivers.
        """
        from pressman.models import ProductionOrder

        uid = f"pressman-store-{uuid.uuid4().hex}"

        def receiver(sender, **kwargs):
            on_change()

        post_save.connect(receiver, sender=ProductionOrder, weak=False, dispatch_uid=uid)
        post_delete.connect(receiver, sender=ProductionOrder, weak=False, dispatch_uid=uid)

        def unsubscribe():
            post_save.disconnect(sender=ProductionOrder, dispatch_uid=uid)
            post_delete.disconnect(sender=ProductionOrder, dispatch_uid=uid)

        return unsubscribe
