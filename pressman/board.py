"""
Board projection.

One pure function, `project()`, turns the order set into the columns of a
board view. Every board (stages, my tasks, team, archive) goes through it,
so filtering, grouping by O.R and sorting are the same everywhere.

Filters, applied in order:
1. search (client, O.R, salesperson, item, item ref, due date as DD/MM/YYYY)
2. priority (exact, unless "all")
3. archival (only the archive view shows archived orders)

Cards inside a column are grouped by O.R number; groups put Alta first and
then the earliest due date; cards inside a group follow the item ref in
natural order ("2" before "10").
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from django.db import models
from django.utils.translation import gettext_lazy as _

from pressman.conf import general_sector
from pressman.entities import Actor, Order
from pressman.exceptions import PressError
from pressman.steps import DONE, STAGES, Priority, StepStatus, current_stage, validate_stage


class ViewMode(models.TextChoices):
    STAGES = "stages", _("Produção")
    MY_TASKS = "my_tasks", _("Meus Trabalhos")
    TEAM = "team", _("Equipe")
    ARCHIVE = "archive", _("Arquivo")


ALL = "all"
BACKLOG = "backlog"
PENDING = "pending"
IN_PROGRESS = "in_progress"
ARCHIVE = "archive"


@dataclass(frozen=True)
class Card:
    """One order on the board, and the stage it stands for (None when not stage-scoped)."""

    order: Order
    stage: str | None = None

    def to_dict(self) -> dict:
        return {"stage": str(self.stage) if self.stage else None, "order": self.order.to_dict()}


@dataclass
class Group:
    """Cards sharing one O.R number. A single card renders plain, more render as a stack."""

    order_number: str
    client: str
    cards: list[Card] = field(default_factory=list)

    @property
    def items(self) -> list[Order]:
        return [card.order for card in self.cards]

    @property
    def is_stack(self) -> bool:
        return len(self.cards) > 1

    def to_dict(self) -> dict:
        return {
            "orderNumber": self.order_number,
            "client": self.client,
            "items": [card.to_dict() for card in self.cards],
        }


@dataclass
class Column:
    id: str
    label: str
    groups: list[Group] = field(default_factory=list)
    user: Actor | None = None

    @property
    def count(self) -> int:
        return sum(len(group.cards) for group in self.groups)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "label": self.label,
            "count": self.count,
            "groups": [group.to_dict() for group in self.groups],
        }
        if self.user is not None:
            data["user"] = self.user.to_dict()
        return data


# ══════════════════════════════════════════════════════════════
# FILTERS & SORTING
# ══════════════════════════════════════════════════════════════


def display_date(iso_date: str) -> str:
    """'2025-06-10' -> '10/06/2025'."""
    return "/".join(reversed(iso_date.split("-"))) if iso_date else ""


def matches_search(order: Order, term: str) -> bool:
    if not term:
        return True
    term = term.lower()
    haystack = (
        order.client,
        order.order_number,
        order.salesperson,
        order.item,
        order.item_ref,
        display_date(order.due_date),
    )
    return any(term in str(value).lower() for value in haystack if value)


def matches_priority(order: Order, priority: str | None) -> bool:
    return not priority or priority == ALL or order.priority == priority


def natural_key(value: str | None) -> list:
    """Split digits from text so '2' < '10'. Even slots are text, odd slots ints."""
    parts = re.split(r"(\d+)", str(value or ""))
    return [int(part) if index % 2 else part.lower() for index, part in enumerate(parts)]


def _group_key(group: Group):
    first = group.cards[0].order
    return (first.priority != Priority.HIGH, first.due_date or "9999-99-99")


def group_cards(cards: list[Card]) -> list[Group]:
    groups: dict[str, Group] = {}
    for card in cards:
        number = card.order.order_number
        group = groups.get(number)
        if group is None:
            group = groups[number] = Group(order_number=number, client=card.order.client)
        group.cards.append(card)

    for group in groups.values():
        group.cards.sort(key=lambda card: natural_key(card.order.item_ref))
    return sorted(groups.values(), key=_group_key)


# ══════════════════════════════════════════════════════════════
# PROJECTION
# ══════════════════════════════════════════════════════════════


def project(
    orders,
    view_mode=ViewMode.STAGES,
    actor: Actor = None,
    users=(),
    sector: str = None,
    search: str = "",
    priority: str = None,
) -> list[Column]:
    """
    Project orders into board columns.

    Args:
        orders: Iterable of Order
        view_mode: stages | my_tasks | team | archive
        actor: Acting user (my_tasks needs it; team hides the actor's own column)
        users: Team roster (team mode)
        sector: Stage id, or None/"all" for every sector
        search: Free-text search
        priority: Alta | Média | Baixa | "all"

    Returns:
        List of Column. Same input always gives equal output.
    """
    try:
        view_mode = ViewMode(view_mode)
    except ValueError:
        raise PressError("INVALID_VIEW_MODE", view_mode=view_mode) from None
    if sector in (None, "", ALL):
        sector = None
    else:
        sector = validate_stage(sector)

    archived = view_mode == ViewMode.ARCHIVE
    visible = [
        order
        for order in orders
        if matches_search(order, search)
        and matches_priority(order, priority)
        and order.is_archived == archived
    ]

    if view_mode == ViewMode.STAGES:
        return _stage_board(visible)
    if view_mode == ViewMode.MY_TASKS:
        return _my_tasks(visible, actor, sector)
    if view_mode == ViewMode.TEAM:
        return _team_board(visible, actor, users, sector)
    return [Column(ARCHIVE, str(ViewMode.ARCHIVE.label), group_cards([Card(o) for o in visible]))]


def _stage_board(orders) -> list[Column]:
    buckets: dict[str, list[Card]] = {stage: [] for stage in STAGES}
    buckets[DONE] = []
    for order in orders:
        stage = current_stage(order)
        buckets[stage].append(Card(order, None if stage == DONE else stage))

    columns = [Column(str(stage), str(stage.label), group_cards(buckets[stage])) for stage in STAGES]
    columns.append(Column(DONE, "Finalizado", group_cards(buckets[DONE])))
    return columns


def _my_tasks(orders, actor: Actor | None, sector: str | None) -> list[Column]:
    pending, in_progress = [], []
    if actor is not None:
        stages = [sector] if sector else STAGES
        for order in orders:
            for stage in stages:
                assignment = order.assignment_for(stage)
                if assignment is None or assignment.user_id != actor.id:
                    continue
                status = order.status_of(stage)
                if status == StepStatus.DONE:
                    continue
                if status == StepStatus.IN_PROGRESS or assignment.started_at:
                    in_progress.append(Card(order, stage))
                else:
                    pending.append(Card(order, stage))

    return [
        Column(PENDING, "A Fazer", group_cards(pending)),
        Column(IN_PROGRESS, "Em Andamento", group_cards(in_progress)),
    ]


def team_members(users, actor: Actor | None, sector: str | None) -> list[Actor]:
    """Roster eligible for team columns (before the admin-with-work rule)."""
    general = general_sector()
    members = []
    for user in users:
        if actor is not None and user.id == actor.id:
            continue
        if sector and not (user.department in (sector, general) or user.is_admin):
            continue
        members.append(user)
    return members


def _team_board(orders, actor: Actor | None, users, sector: str | None) -> list[Column]:
    members = team_members(users, actor, sector)
    member_ids = {member.id for member in members}
    stages = [sector] if sector else STAGES

    by_user: dict[str, list[Card]] = {member.id: [] for member in members}
    seen: dict[str, set] = {member.id: set() for member in members}
    backlog: list[Card] = []

    for order in orders:
        for stage in stages:
            assignment = order.assignment_for(stage)
            if assignment is not None and assignment.user_id in member_ids:
                if order.id not in seen[assignment.user_id]:
                    seen[assignment.user_id].add(order.id)
                    by_user[assignment.user_id].append(Card(order, stage))
            elif sector and assignment is None and order.status_of(stage) != StepStatus.DONE:
                backlog.append(Card(order, stage))

    shown = [member for member in members if not member.is_admin or by_user[member.id]]
    shown.sort(key=lambda member: (not member.is_admin, member.name.lower()))

    columns = []
    if sector:
        columns.append(Column(BACKLOG, "Backlog", group_cards(backlog)))
    for member in shown:
        columns.append(Column(member.id, member.name, group_cards(by_user[member.id]), user=member))
    return columns
