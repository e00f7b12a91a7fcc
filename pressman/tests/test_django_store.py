"""
Tests for DjangoStore (ORM-backed StoreBackend).
"""

import pytest

from pressman.adapters.django_store import DjangoStore
from pressman.entities import Assignment, HistoryEntry, LogEntry, NetworkPath, Order
from pressman.models import AuditLogEntry, ProductionOrder, TeamMember


@pytest.fixture
def store():
    return DjangoStore()


@pytest.fixture
def order():
    order = Order(
        id="o1",
        order_number="5001",
        item_ref="2",
        client="Padaria Central",
        salesperson="Carla",
        item="Fachada ACM",
        due_date="2025-06-12",
        priority="Alta",
        quantity="3",
        created_at="2025-06-09T10:00:00+00:00",
        created_by="Ana",
        extra={"lote": "L-12"},
    )
    order.statuses["preImpressao"] = "Concluído"
    order.assignments["impressao"] = Assignment(
        user_id="7",
        user_name="Rui",
        assigned_by="Ana",
        assigned_at="2025-06-09T11:00:00+00:00",
        started_at="2025-06-10T08:00:00+00:00",
    )
    order.history.append(
        HistoryEntry("1", "Ana", "2025-06-09T12:00:00+00:00", "Concluído", "preImpressao")
    )
    order.file_paths.append(NetworkPath("Principal", r"\\srv\arte\5001"))
    return order


@pytest.mark.django_db
class TestOrders:
    def test_round_trip(self, store, order):
        store.upsert_order(order)

        (loaded,) = store.load().orders

        assert loaded.to_dict() == order.to_dict()

    def test_upsert_replaces_and_keeps_history(self, store, order):
        store.upsert_order(order)
        updated = order.copy()
        updated.statuses["impressao"] = "Em Produção"
        store.upsert_order(updated)

        assert ProductionOrder.objects.count() == 1
        row = ProductionOrder.objects.get(pk="o1")
        assert row.statuses["impressao"] == "Em Produção"
        assert row.history.count() == 2

    def test_delete(self, store, order):
        store.upsert_order(order)
        store.delete_order("o1")
        store.delete_order("missing")

        assert store.load().orders == []

    def test_archived_timestamp(self, store, order):
        order.is_archived = True
        order.archived_at = "2025-06-10T09:00:00+00:00"
        store.upsert_order(order)

        (loaded,) = store.load().orders
        assert loaded.is_archived is True
        assert loaded.archived_at == "2025-06-10T09:00:00+00:00"


@pytest.mark.django_db
class TestRosterAndLog:
    def test_only_active_members(self, store):
        rui = TeamMember.objects.create(
            name="Rui", email="rui@newcom.com.br", department="impressao", is_leader=True
        )
        TeamMember.objects.create(name="Ex", email="ex@newcom.com.br", is_active=False)

        (actor,) = store.load().users

        assert actor.id == str(rui.pk)
        assert actor.department == "impressao"
        assert actor.is_leader is True

    def test_append_log(self, store):
        entry = LogEntry(
            id="x",
            user_id="1",
            user_name="Ana",
            timestamp="2025-06-10T09:00:00+00:00",
            action_type="DELETE_ORDER",
            target_info="O.R #5001 - Padaria Central",
        )
        store.append_log(entry)

        row = AuditLogEntry.objects.get()
        assert row.user_name == "Ana"
        (loaded,) = store.load().logs
        assert loaded.target_info == "O.R #5001 - Padaria Central"
        assert loaded.timestamp == "2025-06-10T09:00:00+00:00"

    def test_shop_settings(self, store):
        assert store.load().settings["name"] == "NEWCOM CONTROL"


@pytest.mark.django_db
class TestSubscribe:
    def test_callback_on_save_and_delete(self, store, order):
        calls = []
        unsubscribe = store.subscribe(lambda: calls.append(1))

        store.upsert_order(order)
        store.delete_order("o1")
        assert len(calls) == 2

        unsubscribe()
        store.upsert_order(order)
        assert len(calls) == 2
