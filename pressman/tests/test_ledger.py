"""
Tests for the assignment ledger and the history log.
"""

from pressman import history, ledger
from pressman.entities import Actor, Order


def make_order():
    return Order(
        id="o1",
        order_number="5001",
        client="Padaria Central",
        salesperson="Carla",
        item="Fachada ACM",
        due_date="2025-06-10",
    )


class TestSetAssignment:
    def test_insert(self):
        order = make_order()
        previous = ledger.set_assignment(order, "producao", "u2", "Rui", "Ana", "ACM branco", "t1")

        assert previous is None
        assignment = order.assignments["producao"]
        assert assignment.user_id == "u2"
        assert assignment.assigned_by == "Ana"
        assert assignment.assigned_at == "t1"
        assert assignment.note == "ACM branco"

    def test_empty_user_removes_key(self):
        order = make_order()
        ledger.set_assignment(order, "producao", "u2", "Rui", "Ana", None, "t1")

        previous = ledger.set_assignment(order, "producao", "", "", "Ana", None, "t2")

        assert previous.user_id == "u2"
        assert "producao" not in order.assignments
        assert order.assignment_for("producao") is None

    def test_same_user_keeps_timestamps(self):
        order = make_order()
        ledger.set_assignment(order, "producao", "u2", "Rui", "Ana", None, "t1")
        ledger.touch_started(order, "producao", "t2")
        ledger.touch_completed(order, "producao", "t3")

        ledger.set_assignment(order, "producao", "u2", "Rui", "Ana", "nova nota", "t4")

        assignment = order.assignments["producao"]
        assert assignment.started_at == "t2"
        assert assignment.completed_at == "t3"
        assert assignment.assigned_at == "t4"
        assert assignment.note == "nova nota"

    def test_other_user_resets_timestamps(self):
        order = make_order()
        ledger.set_assignment(order, "producao", "u2", "Rui", "Ana", None, "t1")
        ledger.touch_started(order, "producao", "t2")

        ledger.set_assignment(order, "producao", "u3", "Lia", "Ana", None, "t3")

        assignment = order.assignments["producao"]
        assert assignment.user_id == "u3"
        assert assignment.started_at is None
        assert assignment.completed_at is None

    def test_status_untouched(self):
        order = make_order()
        order.statuses["producao"] = "Em Produção"
        ledger.set_assignment(order, "producao", "", "", "Ana", None, "t1")
        assert order.status_of("producao") == "Em Produção"


class TestTouch:
    def test_started_is_stamped_once(self):
        order = make_order()
        ledger.set_assignment(order, "impressao", "u2", "Rui", "Ana", None, "t1")

        assert ledger.touch_started(order, "impressao", "t2") is True
        assert ledger.touch_started(order, "impressao", "t3") is False
        assert order.assignments["impressao"].started_at == "t2"

    def test_completed_is_stamped_once(self):
        order = make_order()
        ledger.set_assignment(order, "impressao", "u2", "Rui", "Ana", None, "t1")

        assert ledger.touch_completed(order, "impressao", "t2") is True
        assert ledger.touch_completed(order, "impressao", "t3") is False
        assert order.assignments["impressao"].completed_at == "t2"

    def test_without_assignment_is_noop(self):
        order = make_order()
        assert ledger.touch_started(order, "impressao", "t1") is False
        assert order.assignments == {}


class TestHistory:
    def test_record_appends_actor(self):
        order = make_order()
        actor = Actor(id="u1", name="Ana")

        entry = history.record(order, actor, "Concluído", "preImpressao", "t1")

        assert order.history == [entry]
        assert entry.user_name == "Ana"
        assert entry.status == "Concluído"
        assert entry.sector == "preImpressao"

    def test_record_without_actor_uses_system(self):
        order = make_order()
        entry = history.record(order, None, "Pendente", "Geral", "t1")
        assert (entry.user_id, entry.user_name) == ("sys", "Sistema")

    def test_entries_for_sector(self):
        order = make_order()
        history.record(order, None, "Pendente", "Geral", "t1")
        history.record(order, None, "Concluído", "preImpressao", "t2")

        assert [e.timestamp for e in history.entries_for(order, "preImpressao")] == ["t2"]
        assert history.last_change(order).timestamp == "t2"
