"""
Tests for the notification feed (pressman.notifications).
"""

import pytest

from pressman.adapters.clock import FrozenClock
from pressman.adapters.sink import BufferedSink
from pressman.entities import Actor, Order
from pressman.notifications import NotificationFeed


# ═══════════════════════════════════════════════════════════════════
# Fixtures
# ═══════════════════════════════════════════════════════════════════


@pytest.fixture
def clock():
    return FrozenClock("2025-06-10T09:00:00+00:00")


@pytest.fixture
def sink():
    return BufferedSink()


@pytest.fixture
def feed(clock, sink):
    return NotificationFeed(clock, sink)


def make_order(order_id, due_date, order_number=None, archived=False):
    return Order(
        id=order_id,
        order_number=order_number or order_id,
        client="Cliente",
        salesperson="Carla",
        item="Banner",
        due_date=due_date,
        is_archived=archived,
    )


# ═══════════════════════════════════════════════════════════════════
# Automated scan
# ═══════════════════════════════════════════════════════════════════


class TestDeadlineScan:
    def test_due_today_and_overdue(self, feed):
        added = feed.scan(
            [
                make_order("a", "2025-06-10", "5001"),
                make_order("b", "2025-06-09", "5002"),
                make_order("c", "2025-06-11", "5003"),
            ]
        )

        by_id = {n.id: n for n in added}
        assert set(by_id) == {"today-a-2025-06-10", "delay-b-2025-06-10"}

        today = by_id["today-a-2025-06-10"]
        assert today.type == "warning"
        assert today.title == "ATENÇÃO: PRAZO HOJE"
        assert today.message == "O.R #5001 vence hoje. Prioridade máxima."
        assert today.target_user_id == "ALL"
        assert today.target_sector == "Geral"
        assert today.reference_date == "2025-06-10"

        late = by_id["delay-b-2025-06-10"]
        assert late.type == "urgent"
        assert late.message == "O.R #5002 está atrasada!"

    def test_same_day_rescan_adds_nothing(self, feed):
        orders = [make_order("a", "2025-06-10"), make_order("b", "2025-06-01")]
        feed.scan(orders)

        assert feed.scan(orders) == []
        ids = [n.id for n in feed.all()]
        assert len(ids) == len(set(ids)) == 2

    def test_next_day_produces_new_keys(self, feed, clock):
        orders = [make_order("b", "2025-06-01")]
        feed.scan(orders)
        clock.advance(days=1)

        added = feed.scan(orders)

        assert [n.id for n in added] == ["delay-b-2025-06-11"]
        assert len(feed.all()) == 2

    def test_archived_orders_skipped(self, feed):
        assert feed.scan([make_order("a", "2025-06-01", archived=True)]) == []

    def test_retention_limit(self, clock):
        feed = NotificationFeed(clock, limit=3)
        feed.scan([make_order(f"o{i}", "2025-06-01") for i in range(5)])
        assert len(feed.all()) == 3

    def test_many_late_orders_keep_assignment_notices(self, clock, sink):
        feed = NotificationFeed(clock, sink, limit=3)
        order = make_order("x", "2025-06-20", "7001")
        notice = feed.notify_assignment(order, "impressao", "rui", "Ana")

        feed.scan([make_order(f"o{i}", "2025-06-01") for i in range(5)])

        assert notice in feed.visible_for("rui")
        assert len(feed.all()) == 4

    def test_trimmed_keys_not_re_added_same_day(self, clock, sink):
        feed = NotificationFeed(clock, sink, limit=3)
        orders = [make_order(f"o{i}", "2025-06-01") for i in range(5)]

        assert len(feed.scan(orders)) == 5
        feed.mark_all_read("rui")
        delivered = len(sink.notifications)

        assert feed.scan(orders) == []
        assert len(sink.notifications) == delivered
        assert feed.visible_for("rui") == []

    def test_hands_off_to_sink(self, feed, sink):
        feed.scan([make_order("a", "2025-06-10")])
        assert [n.id for n in sink.notifications] == ["today-a-2025-06-10"]


# ═══════════════════════════════════════════════════════════════════
# Direct emission
# ═══════════════════════════════════════════════════════════════════


class TestEmit:
    def test_duplicate_is_suppressed(self, feed):
        first = feed.emit("NOVA ORDEM CRIADA", "O.R #1 - X")
        second = feed.emit("NOVA ORDEM CRIADA", "O.R #1 - X")

        assert first is not None
        assert second is None
        assert len(feed.all()) == 1

    def test_same_text_other_target_is_kept(self, feed):
        feed.emit("AVISO", "texto", target_user_id="u1")
        feed.emit("AVISO", "texto", target_user_id="u2")
        assert len(feed.all()) == 2

    def test_manual_alert(self, feed):
        sender = Actor(id="u1", name="Ana")
        alert = feed.create_alert(sender, "u2", "Reunião às 14h", "Sala 2", "warning", "2025-06-11")

        assert alert.id.startswith("manual-")
        assert alert.title == "REUNIÃO ÀS 14H"
        assert alert.sender_name == "Ana"
        assert alert.reference_date == "2025-06-11"
        assert feed.visible_for("u2") == [alert]
        assert feed.visible_for("u3") == []

    def test_password_reset_broadcast(self, feed):
        user = Actor(id="u2", name="Rui", email="rui@newcom.local")
        notice = feed.notify_password_reset(user, "RUI@newcom.local")

        assert notice.type == "urgent"
        assert notice.message == "O usuário Rui solicitou reset de senha."
        assert notice.metadata == {"type": "RESET_PASSWORD", "targetUserLogin": "RUI@newcom.local"}
        assert notice.action_label == "RESETAR AGORA"


# ═══════════════════════════════════════════════════════════════════
# Visibility
# ═══════════════════════════════════════════════════════════════════


class TestVisibility:
    def test_severity_order(self, feed):
        feed.emit("INFO", "i", "info")
        feed.emit("OK", "s", "success")
        feed.emit("URG", "u", "urgent")
        feed.emit("WARN", "w", "warning")

        assert [n.type for n in feed.visible_for("u1")] == ["urgent", "warning", "success", "info"]

    def test_ties_keep_feed_order(self, feed):
        feed.emit("A", "a", "info")
        feed.emit("B", "b", "info")
        assert [n.title for n in feed.visible_for("u1")] == ["B", "A"]

    def test_mark_read_is_per_user(self, feed):
        notice = feed.emit("AVISO GERAL", "texto")

        assert feed.mark_read(notice.id, "u1") is True

        assert feed.visible_for("u1") == []
        assert feed.visible_for("u2") == [notice]
        assert feed.get(notice.id) is not None

    def test_mark_read_unknown(self, feed):
        assert feed.mark_read("nope", "u1") is False

    def test_mark_all_read(self, feed):
        feed.emit("A", "a")
        feed.emit("B", "b", target_user_id="u1")
        feed.emit("C", "c", target_user_id="u2")

        assert feed.mark_all_read("u1") == 2
        assert feed.unread_count("u1") == 0
        assert feed.unread_count("u2") == 2


class TestRetraction:
    def test_only_unread_assignment_notices_for_pair(self, feed):
        order = make_order("o1", "2025-06-20", "5001")
        feed.notify_assignment(order, "impressao", "u2", "Ana")
        other = feed.notify_assignment(make_order("o2", "2025-06-20", "5002"), "impressao", "u2", "Ana")

        assert feed.retract_assignment("o1", "u2") == 1
        assert feed.visible_for("u2") == [other]
