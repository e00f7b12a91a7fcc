"""
Pipeline stages and per-stage status.

Five fixed, ordered stages. Every order carries one status per stage:

    preImpressao → impressao → producao → instalacao → expedicao

Dates are ISO strings (YYYY-MM-DD); comparing them as strings is intentional
and avoids timezone drift between server and shop floor.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import models
from django.utils.translation import gettext_lazy as _

from pressman.exceptions import PressError

if TYPE_CHECKING:
    from pressman.entities import Order


class Stage(models.TextChoices):
    """Production stage (also used as department key)."""

    PRE_IMPRESSAO = "preImpressao", _("Design & Pré-Imp")
    IMPRESSAO = "impressao", _("Impressão Digital")
    PRODUCAO = "producao", _("Acabamento & Serralheria")
    INSTALACAO = "instalacao", _("Equipe de Campo")
    EXPEDICAO = "expedicao", _("Logística & Expedição")


class StepStatus(models.TextChoices):
    """Status of one stage of one order."""

    PENDING = "Pendente", _("Pendente")
    IN_PROGRESS = "Em Produção", _("Em Produção")
    DONE = "Concluído", _("Concluído")


class Priority(models.TextChoices):
    HIGH = "Alta", _("Alta")
    MEDIUM = "Média", _("Média")
    LOW = "Baixa", _("Baixa")


class Role(models.TextChoices):
    ADMIN = "Admin", _("Administrador")
    OPERATOR = "Operador", _("Operador")


STAGES: tuple[Stage, ...] = (
    Stage.PRE_IMPRESSAO,
    Stage.IMPRESSAO,
    Stage.PRODUCAO,
    Stage.INSTALACAO,
    Stage.EXPEDICAO,
)

FINAL_STAGE = Stage.EXPEDICAO

# Terminal marker returned by current_stage() when every stage is done
DONE = "done"

_NEXT_STATUS = {
    StepStatus.PENDING: StepStatus.IN_PROGRESS,
    StepStatus.IN_PROGRESS: StepStatus.DONE,
    StepStatus.DONE: StepStatus.PENDING,
}


def validate_stage(stage) -> Stage:
    """Return `stage` as a Stage or raise INVALID_STAGE."""
    try:
        return Stage(stage)
    except ValueError:
        raise PressError("INVALID_STAGE", stage=stage) from None


def validate_status(status) -> StepStatus:
    try:
        return StepStatus(status)
    except ValueError:
        raise PressError("INVALID_STATUS", status=status) from None


def validate_priority(priority) -> Priority:
    try:
        return Priority(priority)
    except ValueError:
        raise PressError("INVALID_PRIORITY", priority=priority) from None


def stage_label(stage) -> str:
    """Human label of a stage (department name)."""
    return str(validate_stage(stage).label)


def current_stage(order: Order) -> str:
    """First stage whose status is not Concluído, or DONE."""
    for stage in STAGES:
        if order.status_of(stage) != StepStatus.DONE:
            return stage
    return DONE


def is_done(order: Order) -> bool:
    return current_stage(order) == DONE


def is_late(order: Order, today: str) -> bool:
    """Not archived and due before `today` (ISO date string)."""
    return bool(order.due_date) and not order.is_archived and order.due_date < today


def is_due_today(order: Order, today: str) -> bool:
    return order.due_date == today


def is_in_production(order: Order) -> bool:
    """Any stage currently Em Produção."""
    return any(order.status_of(stage) == StepStatus.IN_PROGRESS for stage in STAGES)


def next_status(current) -> StepStatus:
    """
    One-click cycle used by step buttons.

    Pendente → Em Produção → Concluído → Pendente
    """
    return _NEXT_STATUS[validate_status(current)]
