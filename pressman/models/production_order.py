"""
ProductionOrder model.

Row form of the Order entity. Pipeline state, assignments, audit trail and
network paths are JSON columns in the same camelCase shape the entity
serializes to, so a row converts to an entity and back without loss.
"""

from django.db import models
from django.utils.dateparse import parse_datetime
from django.utils.translation import gettext_lazy as _
from simple_history.models import HistoricalRecords

from pressman.entities import Order
from pressman.steps import STAGES, Priority, StepStatus


def _default_statuses():
    return {str(stage): str(StepStatus.PENDING) for stage in STAGES}


def _parse(value):
    if not value:
        return None
    return parse_datetime(value) if isinstance(value, str) else value


class ProductionOrder(models.Model):
    """
    Ordem de produção (uma linha de item).

    Several rows may share `order_number` (sibling line items).

    Statuses structure:
        {'preImpressao': 'Concluído', 'impressao': 'Em Produção', ...}
    """

    id = models.CharField(
        primary_key=True,
        max_length=64,
        verbose_name=_("ID"),
    )
    order_number = models.CharField(
        max_length=50,
        db_index=True,
        verbose_name=_("O.R"),
    )
    item_ref = models.CharField(
        max_length=50,
        blank=True,
        verbose_name=_("Nº do Item"),
    )
    client = models.CharField(max_length=200, verbose_name=_("Cliente"))
    salesperson = models.CharField(max_length=100, verbose_name=_("Vendedor"))
    item = models.CharField(max_length=255, verbose_name=_("Item"))
    quantity = models.CharField(
        max_length=50,
        blank=True,
        verbose_name=_("Quantidade"),
    )
    due_date = models.DateField(
        db_index=True,
        verbose_name=_("Data de Entrega"),
    )
    priority = models.CharField(
        max_length=10,
        choices=Priority.choices,
        default=Priority.MEDIUM,
        verbose_name=_("Prioridade"),
    )
    notes = models.TextField(blank=True, verbose_name=_("Observação"))
    is_remake = models.BooleanField(default=False, verbose_name=_("Refação"))

    # Pipeline
    statuses = models.JSONField(
        default=_default_statuses,
        verbose_name=_("Status por Etapa"),
    )
    assignments = models.JSONField(
        default=dict,
        blank=True,
        verbose_name=_("Atribuições"),
    )
    audit_trail = models.JSONField(
        default=list,
        blank=True,
        verbose_name=_("Histórico"),
    )
    file_paths = models.JSONField(
        default=list,
        blank=True,
        verbose_name=_("Caminhos de Rede"),
    )
    extra = models.JSONField(
        default=dict,
        blank=True,
        verbose_name=_("Dados Extras"),
    )

    # Archival
    is_archived = models.BooleanField(
        default=False,
        db_index=True,
        verbose_name=_("Arquivada"),
    )
    archived_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_("Arquivada em"),
    )

    created_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_("Criada em"),
    )
    created_by = models.CharField(
        max_length=100,
        blank=True,
        verbose_name=_("Criada por"),
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name=_("Atualizada em"),
    )

    history = HistoricalRecords()

    class Meta:
        db_table = "pressman_production_order"
        verbose_name = _("Ordem de Produção")
        verbose_name_plural = _("Ordens de Produção")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        if self.item_ref:
            return f"O.R #{self.order_number}/{self.item_ref} - {self.client}"
        return f"O.R #{self.order_number} - {self.client}"

    # ══════════════════════════════════════════════════════════════
    # ENTITY MAPPING
    # ══════════════════════════════════════════════════════════════

    def to_entity(self) -> Order:
        payload = dict(self.extra or {})
        payload.update(
            {
                "id": self.id,
                "or": self.order_number,
                "cliente": self.client,
                "vendedor": self.salesperson,
                "item": self.item,
                "dataEntrega": self.due_date.isoformat() if self.due_date else "",
                "prioridade": self.priority,
                "isRemake": self.is_remake,
                "assignments": self.assignments or {},
                "history": self.audit_trail or [],
                "filePaths": self.file_paths or [],
                "isArchived": self.is_archived,
            }
        )
        payload.update(self.statuses or {})
        if self.item_ref:
            payload["numeroItem"] = self.item_ref
        if self.quantity:
            payload["quantidade"] = self.quantity
        if self.notes:
            payload["observacao"] = self.notes
        if self.archived_at:
            payload["archivedAt"] = self.archived_at.isoformat()
        if self.created_at:
            payload["createdAt"] = self.created_at.isoformat()
        if self.created_by:
            payload["createdBy"] = self.created_by
        return Order.from_dict(payload)

    @staticmethod
    def fields_from_entity(order: Order) -> dict:
        """Column values for `order` (used with update_or_create)."""
        payload = order.to_dict()
        return {
            "order_number": order.order_number,
            "item_ref": order.item_ref or "",
            "client": order.client,
            "salesperson": order.salesperson,
            "item": order.item,
            "quantity": str(order.quantity) if order.quantity is not None else "",
            "due_date": order.due_date,
            "priority": order.priority,
            "notes": order.notes or "",
            "is_remake": order.is_remake,
            "statuses": {str(stage): str(order.status_of(stage)) for stage in STAGES},
            "assignments": payload["assignments"],
            "audit_trail": payload["history"],
            "file_paths": payload["filePaths"],
            "extra": dict(order.extra),
            "is_archived": order.is_archived,
            "archived_at": _parse(order.archived_at),
            "created_at": _parse(order.created_at),
            "created_by": order.created_by or "",
        }
