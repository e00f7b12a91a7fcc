"""
Order transition engine.

The single mutator of order state. Every command:
1. validates its input (invalid stage/status/field raises PressError);
2. copies the current order, mutates the copy, swaps it into the set;
3. returns a CommandResult (unknown order ids give a failed result).

Side effects on the notification feed (assignment notices, retraction,
new-order broadcast) happen here so every caller gets them.
"""

import logging
import threading
import uuid

from pressman import history, ledger
from pressman.conf import general_sector, system_actor_id, system_actor_name
from pressman.entities import EDITABLE_FIELDS, Actor, LogEntry, NetworkPath, Order
from pressman.exceptions import PressError
from pressman.results import CommandResult
from pressman.steps import (
    FINAL_STAGE,
    STAGES,
    StepStatus,
    validate_priority,
    validate_stage,
    validate_status,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("or", "cliente", "vendedor", "item", "dataEntrega")


class OrderWorkflow:
    """
    Holds the in-memory order set and applies commands to it.

    Usage:
        workflow = OrderWorkflow(clock, feed)
        workflow.replace_all(snapshot.orders)
        result = workflow.advance_status(order_id, "impressao", "Em Produção", actor)
    """

    def __init__(self, clock, feed=None):
        self.clock = clock
        self.feed = feed
        self._orders: dict[str, Order] = {}
        self._lock = threading.RLock()

    # ══════════════════════════════════════════════════════════════
    # ORDER SET
    # ══════════════════════════════════════════════════════════════

    def replace_all(self, orders) -> None:
        """Replace the whole set (inbound snapshot wins over local edits)."""
        with self._lock:
            self._orders = {order.id: order for order in orders}

    def orders(self) -> list[Order]:
        with self._lock:
            return list(self._orders.values())

    def get(self, order_id: str) -> Order | None:
        with self._lock:
            return self._orders.get(order_id)

    def put(self, order: Order) -> None:
        with self._lock:
            self._orders[order.id] = order

    def discard(self, order_id: str) -> Order | None:
        with self._lock:
            return self._orders.pop(order_id, None)

    def _now(self) -> str:
        return self.clock.now().isoformat()

    @staticmethod
    def _not_found(order_id: str) -> CommandResult:
        return CommandResult.fail("ORDER_NOT_FOUND", f"O.R não encontrada: {order_id}")

    # ══════════════════════════════════════════════════════════════
    # CORE COMMANDS
    # ══════════════════════════════════════════════════════════════

    def advance_status(self, order_id: str, stage, next_status, actor: Actor = None) -> CommandResult:
        """
        Set the status of one stage.

        No ordering between stages is enforced: any status can be set on any
        stage at any time. Completing the final stage archives the order;
        moving it back does not un-archive (see `reactivate`).
        """
        stage = validate_stage(stage)
        status = validate_status(next_status)

        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                return self._not_found(order_id)

            now = self._now()
            updated = order.copy()
            updated.statuses[stage] = status
            history.record(updated, actor, status, stage, now)

            assignment = updated.assignment_for(stage)
            if assignment is not None:
                if status == StepStatus.IN_PROGRESS:
                    if ledger.touch_started(updated, stage, now) and self.feed is not None:
                        self.feed.retract_assignment(updated.id, assignment.user_id)
                elif status == StepStatus.DONE:
                    ledger.touch_completed(updated, stage, now)

            message = f"{stage.label}: {status}"
            if stage == FINAL_STAGE and status == StepStatus.DONE:
                updated.is_archived = True
                updated.archived_at = now
                message = "FINALIZADO E ARQUIVADO"

            self._orders[order_id] = updated

        logger.info(
            f"O.R #{updated.order_number} {stage} -> {status}",
            extra={"order_id": order_id, "stage": str(stage), "status": str(status)},
        )
        return CommandResult.ok(updated, message)

    def assign_user(
        self,
        order_id: str,
        stage,
        user_id: str | None,
        user_name: str = "",
        assigner_name: str = None,
        note: str = None,
        actor: Actor = None,
    ) -> CommandResult:
        """
        Assign (or, with an empty user_id, unassign) a user to a stage.

        Status is never changed. Assigning notifies the assignee; removing
        retracts the previous assignee's unread notice.
        """
        stage = validate_stage(stage)
        if assigner_name is None:
            assigner_name = actor.name if actor else ""

        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                return self._not_found(order_id)

            now = self._now()
            updated = order.copy()
            previous = ledger.set_assignment(
                updated, stage, user_id, user_name, assigner_name, note, now
            )
            history.record(updated, actor, updated.status_of(stage), stage, now)
            self._orders[order_id] = updated

        if self.feed is not None:
            if user_id:
                self.feed.notify_assignment(updated, stage, user_id, assigner_name)
            elif previous is not None:
                self.feed.retract_assignment(updated.id, previous.user_id)

        logger.info(
            f"O.R #{updated.order_number} {stage} assigned to {user_id or '-'}",
            extra={"order_id": order_id, "stage": str(stage), "user_id": user_id},
        )
        if user_id:
            return CommandResult.ok(updated, f"Tarefa atribuída a {user_name}")
        return CommandResult.ok(updated, "Atribuição removida.", level="info")

    def set_network_paths(self, order_id: str, paths) -> CommandResult:
        """Replace filePaths. Not audited."""
        file_paths = [
            path if isinstance(path, NetworkPath) else NetworkPath.from_dict(path)
            for path in paths
        ]
        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                return self._not_found(order_id)
            updated = order.copy()
            updated.file_paths = file_paths
            self._orders[order_id] = updated
        return CommandResult.ok(updated, "Caminhos de rede atualizados.")

    # ══════════════════════════════════════════════════════════════
    # ORDER LIFECYCLE
    # ══════════════════════════════════════════════════════════════

    def create_order(self, data: dict, actor: Actor = None) -> CommandResult:
        """
        Create an order from a payload.

        Required: or, cliente, vendedor, item, dataEntrega.
        Optional: numeroItem, quantidade, prioridade, observacao, isRemake,
        filePath (stored as the 'Principal' network path), id.

        Raises:
            PressError: MISSING_FIELDS, INVALID_PRIORITY, or DUPLICATE_ID when
                `id` is already in the set
        """
        missing = [key for key in REQUIRED_FIELDS if not data.get(key)]
        if missing:
            raise PressError("MISSING_FIELDS", fields=missing)
        priority = validate_priority(data.get("prioridade") or "Média")

        now = self._now()
        order = Order(
            id=str(data.get("id") or uuid.uuid4().hex),
            order_number=str(data["or"]),
            client=data["cliente"],
            salesperson=data["vendedor"],
            item=data["item"],
            due_date=data["dataEntrega"],
            item_ref=data.get("numeroItem") or None,
            quantity=data.get("quantidade") or None,
            priority=priority,
            notes=data.get("observacao") or None,
            is_remake=bool(data.get("isRemake", False)),
            statuses={stage: StepStatus.PENDING for stage in STAGES},
            created_at=now,
            created_by=actor.name if actor else None,
        )
        if data.get("filePath"):
            order.file_paths = [NetworkPath("Principal", data["filePath"])]
        history.record(order, actor, StepStatus.PENDING, general_sector(), now)

        with self._lock:
            if order.id in self._orders:
                raise PressError("DUPLICATE_ID", order_id=order.id)
            self._orders = {order.id: order, **self._orders}

        if self.feed is not None:
            self.feed.notify_order_created(order)

        logger.info(
            f"O.R #{order.order_number} created",
            extra={"order_id": order.id, "client": order.client},
        )
        return CommandResult.ok(order, "Salvo com sucesso!")

    def update_order(self, order_id: str, changes: dict) -> CommandResult:
        """Merge descriptive fields. Pipeline, assignment and archival fields are rejected."""
        rejected = sorted(set(changes) - EDITABLE_FIELDS)
        if rejected:
            raise PressError("INVALID_FIELD", fields=rejected)
        if "prioridade" in changes:
            changes = {**changes, "prioridade": validate_priority(changes["prioridade"])}

        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                return self._not_found(order_id)
            payload = order.to_dict()
            payload.update(changes)
            updated = Order.from_dict(payload)
            self._orders[order_id] = updated
        return CommandResult.ok(updated, "Salvo com sucesso!")

    def archive(self, order_id: str) -> CommandResult:
        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                return self._not_found(order_id)
            updated = order.copy()
            updated.is_archived = True
            updated.archived_at = self._now()
            self._orders[order_id] = updated
        logger.info(f"O.R #{updated.order_number} archived", extra={"order_id": order_id})
        return CommandResult.ok(updated, "O.R Arquivada!")

    def reactivate(self, order_id: str) -> CommandResult:
        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                return self._not_found(order_id)
            updated = order.copy()
            updated.is_archived = False
            updated.archived_at = None
            self._orders[order_id] = updated
        logger.info(f"O.R #{updated.order_number} reactivated", extra={"order_id": order_id})
        return CommandResult.ok(updated, "O.R Reativada!")

    def delete_orders(self, order_ids, actor: Actor = None) -> list[LogEntry]:
        """
        Remove orders from the set.

        Returns one DELETE_ORDER log entry per order actually removed;
        unknown ids are skipped.
        """
        now = self._now()
        entries = []
        with self._lock:
            for order_id in order_ids:
                order = self._orders.pop(order_id, None)
                if order is None:
                    continue
                entries.append(
                    LogEntry(
                        id=uuid.uuid4().hex,
                        user_id=actor.id if actor else system_actor_id(),
                        user_name=actor.name if actor else system_actor_name(),
                        timestamp=now,
                        action_type="DELETE_ORDER",
                        target_info=f"O.R #{order.order_number} - {order.client}",
                    )
                )
        if entries:
            logger.info(
                f"Deleted {len(entries)} orders",
                extra={"order_ids": list(order_ids), "deleted": len(entries)},
            )
        return entries
