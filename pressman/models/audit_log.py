"""
AuditLogEntry model.

Global log for things that no longer exist (deleted orders, deleted users),
where the per-order trail cannot hold the record.
"""

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from pressman.entities import LogEntry


class AuditAction(models.TextChoices):
    DELETE_ORDER = "DELETE_ORDER", _("Exclusão de O.R")
    DELETE_USER = "DELETE_USER", _("Exclusão de Colaborador")


class AuditLogEntry(models.Model):
    """Registro de auditoria global."""

    action_type = models.CharField(
        max_length=20,
        choices=AuditAction.choices,
        db_index=True,
        verbose_name=_("Ação"),
    )
    user_id = models.CharField(max_length=64, verbose_name=_("ID do Usuário"))
    user_name = models.CharField(max_length=100, verbose_name=_("Usuário"))
    target_info = models.CharField(max_length=255, verbose_name=_("Alvo"))
    timestamp = models.DateTimeField(
        default=timezone.now,
        db_index=True,
        verbose_name=_("Data/Hora"),
    )

    class Meta:
        db_table = "pressman_audit_log"
        verbose_name = _("Registro de Auditoria")
        verbose_name_plural = _("Registros de Auditoria")
        ordering = ["-timestamp"]

    def __str__(self) -> str:
        return f"{self.action_type}: {self.target_info}"

    def to_entity(self) -> LogEntry:
        return LogEntry(
            id=str(self.pk),
            user_id=self.user_id,
            user_name=self.user_name,
            timestamp=self.timestamp.isoformat(),
            action_type=self.action_type,
            target_info=self.target_info,
        )
