"""
Tests for the board projection (pressman.board).
"""

import pytest

from pressman.board import BACKLOG, DONE, IN_PROGRESS, PENDING, natural_key, project
from pressman.entities import Actor, Assignment, Order
from pressman.exceptions import PressError
from pressman.steps import STAGES


def make_order(order_id, order_number="5001", due_date="2025-06-12", **kwargs):
    statuses = kwargs.pop("statuses", {})
    assignments = kwargs.pop("assignments", {})
    order = Order(
        id=order_id,
        order_number=order_number,
        client=kwargs.pop("client", "Padaria Central"),
        salesperson=kwargs.pop("salesperson", "Carla"),
        item=kwargs.pop("item", "Fachada ACM"),
        due_date=due_date,
        **kwargs,
    )
    order.statuses.update(statuses)
    for stage, (user_id, started_at) in assignments.items():
        order.assignments[stage] = Assignment(
            user_id=user_id,
            user_name=user_id.title(),
            assigned_by="Boss",
            assigned_at="2025-06-09T10:00:00+00:00",
            started_at=started_at,
        )
    return order


def column(columns, column_id):
    (found,) = [c for c in columns if c.id == column_id]
    return found


def order_ids(col):
    return [card.order.id for group in col.groups for card in group.cards]


# ═══════════════════════════════════════════════════════════════════
# Stage board
# ═══════════════════════════════════════════════════════════════════


class TestStageBoard:
    def test_columns(self):
        columns = project([], "stages")
        assert [c.id for c in columns] == [*[str(s) for s in STAGES], DONE]

    def test_sibling_items_follow_their_own_stage(self):
        a = make_order("a", statuses={"preImpressao": "Concluído", "impressao": "Pendente"})
        b = make_order("b", statuses={"preImpressao": "Pendente"})

        columns = project([a, b], "stages")

        assert order_ids(column(columns, "impressao")) == ["a"]
        assert order_ids(column(columns, "preImpressao")) == ["b"]

    def test_finished_order_in_done_column(self):
        done = make_order("a", statuses={stage: "Concluído" for stage in STAGES})
        columns = project([done], "stages")

        assert order_ids(column(columns, DONE)) == ["a"]
        assert column(columns, DONE).groups[0].cards[0].stage is None

    def test_archived_excluded(self):
        columns = project([make_order("a", is_archived=True)], "stages")
        assert sum(c.count for c in columns) == 0

    def test_same_input_same_output(self):
        orders = [
            make_order("a", "5001", priority="Alta"),
            make_order("b", "5002", statuses={"preImpressao": "Concluído"}),
            make_order("c", "5001", item_ref="2"),
        ]
        first = [c.to_dict() for c in project(orders, "stages", search="padaria")]
        second = [c.to_dict() for c in project(orders, "stages", search="padaria")]
        assert first == second


class TestFilters:
    def test_search_fields(self):
        orders = [
            make_order("a", "5001", client="Padaria Central"),
            make_order("b", "7002", client="Clínica Vida", item="Placa PVC", due_date="2025-07-01"),
        ]

        def found(term):
            return sorted(
                card.order.id
                for col in project(orders, "stages", search=term)
                for group in col.groups
                for card in group.cards
            )

        assert found("PADARIA") == ["a"]
        assert found("7002") == ["b"]
        assert found("pvc") == ["b"]
        assert found("01/07/2025") == ["b"]
        assert found("carla") == ["a", "b"]
        assert found("nada") == []

    def test_priority_filter(self):
        orders = [make_order("a", priority="Alta"), make_order("b", "5002", priority="Baixa")]

        assert sum(c.count for c in project(orders, "stages", priority="Alta")) == 1
        assert sum(c.count for c in project(orders, "stages", priority="all")) == 2

    def test_archive_view_only_archived(self):
        orders = [make_order("a", is_archived=True), make_order("b", "5002")]
        (archive,) = project(orders, "archive")
        assert order_ids(archive) == ["a"]

    def test_invalid_view_mode(self):
        with pytest.raises(PressError) as exc:
            project([], "calendar")
        assert exc.value.code == "INVALID_VIEW_MODE"

    def test_invalid_sector(self):
        with pytest.raises(PressError) as exc:
            project([], "team", sector="acabamento")
        assert exc.value.code == "INVALID_STAGE"


class TestGrouping:
    def test_groups_by_order_number(self):
        orders = [
            make_order("a", "5001", item_ref="10"),
            make_order("b", "5001", item_ref="2"),
            make_order("c", "5002"),
        ]
        col = column(project(orders, "stages"), "preImpressao")

        assert [g.order_number for g in col.groups] == ["5001", "5002"]
        assert col.groups[0].is_stack
        assert not col.groups[1].is_stack
        assert [o.id for o in col.groups[0].items] == ["b", "a"]

    def test_group_sort_priority_then_due_date(self):
        orders = [
            make_order("a", "1", due_date="2025-06-11", priority="Média"),
            make_order("b", "2", due_date="2025-06-20", priority="Alta"),
            make_order("c", "3", due_date="2025-06-05", priority="Baixa"),
            make_order("d", "4", due_date="2025-06-15", priority="Alta"),
        ]
        col = column(project(orders, "stages"), "preImpressao")
        assert [g.order_number for g in col.groups] == ["4", "2", "3", "1"]

    def test_natural_key(self):
        refs = ["10", "2", "1", "1b", None]
        assert sorted(refs, key=natural_key) == [None, "1", "1b", "2", "10"]


# ═══════════════════════════════════════════════════════════════════
# My tasks
# ═══════════════════════════════════════════════════════════════════


class TestMyTasks:
    def test_columns_by_progress(self):
        lia = Actor(id="lia", name="Lia", department="impressao")
        orders = [
            make_order("pending", "1", assignments={"impressao": ("lia", None)}),
            make_order(
                "running",
                "2",
                statuses={"impressao": "Em Produção"},
                assignments={"impressao": ("lia", None)},
            ),
            make_order(
                "started",
                "3",
                assignments={"producao": ("lia", "2025-06-10T08:00:00+00:00")},
            ),
            make_order(
                "finished",
                "4",
                statuses={"impressao": "Concluído"},
                assignments={"impressao": ("lia", None)},
            ),
            make_order("someone-else", "5", assignments={"impressao": ("rui", None)}),
        ]

        columns = project(orders, "my_tasks", actor=lia)

        assert order_ids(column(columns, PENDING)) == ["pending"]
        assert sorted(order_ids(column(columns, IN_PROGRESS))) == ["running", "started"]

    def test_one_card_per_assigned_stage(self):
        lia = Actor(id="lia", name="Lia")
        order = make_order(
            "a", assignments={"impressao": ("lia", None), "instalacao": ("lia", None)}
        )

        (group,) = column(project([order], "my_tasks", actor=lia), PENDING).groups

        assert [str(card.stage) for card in group.cards] == ["impressao", "instalacao"]

    def test_without_actor_empty(self):
        order = make_order("a", assignments={"impressao": ("lia", None)})
        assert sum(c.count for c in project([order], "my_tasks")) == 0


# ═══════════════════════════════════════════════════════════════════
# Team board
# ═══════════════════════════════════════════════════════════════════


@pytest.fixture
def team():
    return {
        "boss": Actor(id="boss", name="Zé Chefe", role="Admin"),
        "ana": Actor(id="ana", name="Ana", role="Admin"),
        "eva": Actor(id="eva", name="Eva", role="Admin"),
        "rui": Actor(id="rui", name="Rui", department="impressao", is_leader=True),
        "lia": Actor(id="lia", name="Lia", department="impressao"),
        "max": Actor(id="max", name="Max", department="producao"),
        "gil": Actor(id="gil", name="Gil"),
    }


@pytest.fixture
def team_orders():
    return [
        make_order("A", "1", assignments={"impressao": ("ana", None)}),
        make_order("B", "2", assignments={"impressao": ("lia", None)}),
        make_order("C", "3"),
        make_order("D", "4", statuses={"impressao": "Concluído"}),
        make_order("E", "5", assignments={"impressao": ("boss", None)}),
        make_order("F", "6", assignments={"producao": ("max", None)}),
    ]


class TestTeamBoard:
    def test_sector_columns(self, team, team_orders):
        columns = project(
            team_orders, "team", actor=team["boss"], users=team.values(), sector="impressao"
        )

        assert [c.id for c in columns] == [BACKLOG, "ana", "gil", "lia", "rui"]
        assert order_ids(column(columns, "ana")) == ["A"]
        assert order_ids(column(columns, "lia")) == ["B"]
        assert order_ids(column(columns, "rui")) == []
        assert column(columns, "lia").user == team["lia"]

    def test_backlog_only_unassigned_open_work(self, team, team_orders):
        columns = project(
            team_orders, "team", actor=team["boss"], users=team.values(), sector="impressao"
        )
        assert order_ids(column(columns, BACKLOG)) == ["C", "F"]

    def test_all_sectors_has_no_backlog(self, team, team_orders):
        columns = project(team_orders, "team", actor=team["boss"], users=team.values())

        ids = [c.id for c in columns]
        assert BACKLOG not in ids
        assert "boss" not in ids
        assert "eva" not in ids
        assert order_ids(column(columns, "max")) == ["F"]

    def test_card_once_per_user(self, team):
        order = make_order("A", assignments={"impressao": ("lia", None), "producao": ("lia", None)})
        columns = project([order], "team", actor=team["boss"], users=team.values())
        assert order_ids(column(columns, "lia")) == ["A"]
