"""
Tests for the stage/status model (pressman.steps).
"""

import pytest

from pressman.entities import Order
from pressman.exceptions import PressError
from pressman.steps import (
    DONE,
    STAGES,
    Stage,
    StepStatus,
    current_stage,
    is_done,
    is_due_today,
    is_in_production,
    is_late,
    next_status,
    stage_label,
    validate_priority,
    validate_stage,
)


def make_order(due_date="2025-06-10", **statuses):
    order = Order(
        id="o1",
        order_number="5001",
        client="Padaria Central",
        salesperson="Carla",
        item="Fachada ACM",
        due_date=due_date,
    )
    order.statuses.update(statuses)
    return order


class TestCurrentStage:
    def test_new_order_starts_at_first_stage(self):
        assert current_stage(make_order()) == Stage.PRE_IMPRESSAO

    def test_first_stage_not_done_wins(self):
        order = make_order(preImpressao="Concluído", impressao="Em Produção")
        assert current_stage(order) == Stage.IMPRESSAO

    def test_gaps_are_not_skipped(self):
        """A later stage done does not move the order past an earlier open one."""
        order = make_order(preImpressao="Concluído", producao="Concluído")
        assert current_stage(order) == Stage.IMPRESSAO

    def test_all_done_returns_marker(self):
        order = make_order(**{stage: StepStatus.DONE for stage in STAGES})
        assert current_stage(order) == DONE
        assert is_done(order)

    def test_repeated_calls_agree(self):
        order = make_order(preImpressao="Concluído")
        assert current_stage(order) == current_stage(order)


class TestDeadlines:
    def test_late_when_due_before_today(self):
        assert is_late(make_order(due_date="2025-06-09"), "2025-06-10")

    def test_not_late_on_due_date(self):
        order = make_order(due_date="2025-06-10")
        assert not is_late(order, "2025-06-10")
        assert is_due_today(order, "2025-06-10")

    def test_archived_never_late(self):
        order = make_order(due_date="2025-06-01")
        order.is_archived = True
        assert not is_late(order, "2025-06-10")

    def test_in_production_when_any_stage_started(self):
        assert not is_in_production(make_order())
        assert is_in_production(make_order(instalacao="Em Produção"))


class TestNextStatus:
    def test_cycle(self):
        assert next_status("Pendente") == StepStatus.IN_PROGRESS
        assert next_status("Em Produção") == StepStatus.DONE
        assert next_status("Concluído") == StepStatus.PENDING

    def test_unknown_status_raises(self):
        with pytest.raises(PressError) as exc:
            next_status("Pausado")
        assert exc.value.code == "INVALID_STATUS"


class TestValidation:
    def test_unknown_stage_raises(self):
        with pytest.raises(PressError) as exc:
            validate_stage("acabamento")
        assert exc.value.code == "INVALID_STAGE"
        assert exc.value.as_dict() == {"code": "INVALID_STAGE", "stage": "acabamento"}

    def test_unknown_priority_raises(self):
        with pytest.raises(PressError) as exc:
            validate_priority("Urgente")
        assert exc.value.code == "INVALID_PRIORITY"

    def test_stage_label(self):
        assert stage_label("impressao") == "Impressão Digital"
