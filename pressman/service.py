"""
Pressman Service - the board as one object.

Press owns the in-memory snapshot (orders, roster, shop settings, global
log), the transition engine and the notification feed. Each command:

1. applies the engine mutation (optimistic, in memory);
2. writes the order to the store, fire-and-forget (a failing store is
   logged and reported as `persisted=False`, the local change stands);
3. sends the matching Django signal;
4. re-runs the deadline scan over the changed order set;
5. hands the result message to the sink as a toast.

Reading notifications also re-scans once the date has rolled over since the
last scan, so a long-running process picks up new overdue orders.

An inbound snapshot (`refresh()`) replaces local state wholesale: last
write wins, there is no merge.

Usage:
    from pressman import get_press

    press = get_press()
    result = press.advance_status(order_id, "impressao", "Em Produção", actor)
    columns = press.board("my_tasks", actor)
"""

import logging
import threading

from pressman import signals
from pressman.analytics import BoardAnalytics
from pressman.board import project
from pressman.conf import get_clock, get_setting, get_sink, get_store_backend
from pressman.engine import OrderWorkflow
from pressman.entities import Actor
from pressman.exceptions import PressError
from pressman.notifications import ASSIGNMENT, RESET_PASSWORD, NotificationFeed
from pressman.results import CommandResult
from pressman.steps import next_status, validate_stage

logger = logging.getLogger(__name__)


class Press:
    """
    Main API for Pressman.

    Collaborators default to the ones configured in settings
    (STORE_BACKEND, CLOCK, SINK) and can be injected for tests.
    """

    def __init__(self, store=None, clock=None, sink=None):
        self.store = store if store is not None else get_store_backend()
        self.clock = clock if clock is not None else get_clock()
        self.sink = sink if sink is not None else get_sink()
        self.feed = NotificationFeed(self.clock, self.sink)
        self.workflow = OrderWorkflow(self.clock, self.feed)
        self.users: list[Actor] = []
        self.settings: dict = {}
        self.logs: list = []
        self.offline = False
        self._unsubscribe = None
        self._scanned_on: str | None = None

    # ══════════════════════════════════════════════════════════════
    # SNAPSHOT
    # ══════════════════════════════════════════════════════════════

    def load(self) -> "Press":
        """
        Load the full snapshot from the store and run the deadline scan.

        Raises:
            PressError: STORE_UNAVAILABLE if the store cannot be read
        """
        try:
            snapshot = self.store.load()
        except Exception as exc:
            logger.exception("Store load failed")
            raise PressError("STORE_UNAVAILABLE", reason=str(exc)) from exc
        self._apply(snapshot)
        return self

    def refresh(self) -> bool:
        """Re-load after a remote change. On failure keeps the current state."""
        try:
            snapshot = self.store.load()
        except Exception:
            logger.warning("Store refresh failed, keeping local snapshot", exc_info=True)
            return False
        self._apply(snapshot)
        return True

    def subscribe(self) -> None:
        """Refresh on every change the store reports."""
        if self._unsubscribe is None:
            self._unsubscribe = self.store.subscribe(self.refresh)

    def unsubscribe(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _apply(self, snapshot) -> None:
        self.workflow.replace_all(snapshot.orders)
        self.users = list(snapshot.users)
        self.settings = dict(snapshot.settings)
        self.logs = list(snapshot.logs)
        self.offline = snapshot.offline
        if self.offline:
            logger.warning("Store is offline, working on a degraded snapshot")
        self.scan()

    # ══════════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════════

    @property
    def orders(self):
        return self.workflow.orders()

    def active_orders(self):
        return [order for order in self.orders if not order.is_archived]

    def archived_orders(self):
        return [order for order in self.orders if order.is_archived]

    def get_order(self, order_id: str):
        return self.workflow.get(order_id)

    def find_user(self, user_id: str) -> Actor | None:
        for user in self.users:
            if user.id == user_id:
                return user
        return None

    def find_user_by_login(self, login: str) -> Actor | None:
        """Case-insensitive match on e-mail."""
        login = (login or "").strip().lower()
        if not login:
            return None
        for user in self.users:
            if user.email and user.email.lower() == login:
                return user
        return None

    def board(self, view_mode="stages", actor: Actor = None, sector=None, search="", priority=None):
        return project(
            self.orders,
            view_mode,
            actor=actor,
            users=self.users,
            sector=sector,
            search=search,
            priority=priority,
        )

    def stats(self) -> dict:
        return BoardAnalytics.stats(self.orders, self.clock.today())

    def analytics(self) -> dict:
        return BoardAnalytics.summary(self.orders, self.clock.today())

    # ══════════════════════════════════════════════════════════════
    # ORDER COMMANDS
    # ══════════════════════════════════════════════════════════════

    def advance_status(self, order_id, stage, status, actor: Actor = None) -> CommandResult:
        before = self.workflow.get(order_id)
        result = self.workflow.advance_status(order_id, stage, status, actor)
        self._finish(result, signals.order_status_changed, actor, stage=str(stage), status=str(status))
        if result.success and not (before and before.is_archived) and result.order.is_archived:
            signals.order_archived.send(sender=self.__class__, order=result.order, actor=actor)
        return result

    def cycle_status(self, order_id, stage, actor: Actor = None) -> CommandResult:
        """One-click step button: Pendente → Em Produção → Concluído → Pendente."""
        order = self.workflow.get(order_id)
        if order is None:
            return self._report(
                CommandResult.fail("ORDER_NOT_FOUND", f"O.R não encontrada: {order_id}")
            )
        stage = validate_stage(stage)
        return self.advance_status(order_id, stage, next_status(order.status_of(stage)), actor)

    def assign_user(
        self,
        order_id,
        stage,
        user_id: str | None,
        note: str = None,
        actor: Actor = None,
        assigner_name: str = None,
    ) -> CommandResult:
        user_name = ""
        if user_id:
            user = self.find_user(user_id)
            user_name = user.name if user else "Desconhecido"

        before = self.workflow.get(order_id)
        previous = before.assignment_for(stage) if before else None
        result = self.workflow.assign_user(
            order_id, stage, user_id, user_name, assigner_name, note, actor
        )
        self._finish(
            result,
            signals.order_assigned,
            actor,
            stage=str(stage),
            assignment=result.order.assignment_for(stage) if result.success else None,
            previous_user_id=previous.user_id if previous else None,
        )
        return result

    def set_network_paths(self, order_id, paths, actor: Actor = None) -> CommandResult:
        result = self.workflow.set_network_paths(order_id, paths)
        self._finish(result, None, actor)
        return result

    def create_order(self, data: dict, actor: Actor = None) -> CommandResult:
        result = self.workflow.create_order(data, actor)
        self._finish(result, signals.order_created, actor)
        return result

    def update_order(self, order_id, changes: dict, actor: Actor = None) -> CommandResult:
        result = self.workflow.update_order(order_id, changes)
        self._finish(result, None, actor)
        return result

    def archive(self, order_id, actor: Actor = None) -> CommandResult:
        result = self.workflow.archive(order_id)
        self._finish(result, signals.order_archived, actor)
        return result

    def reactivate(self, order_id, actor: Actor = None) -> CommandResult:
        result = self.workflow.reactivate(order_id)
        self._finish(result, signals.order_reactivated, actor)
        return result

    def delete_orders(self, order_ids, actor: Actor = None) -> list:
        """Delete orders; one DELETE_ORDER entry per order goes to the global log."""
        entries = self.workflow.delete_orders(order_ids, actor)
        for entry in entries:
            try:
                self.store.append_log(entry)
            except Exception:
                logger.warning("Store failed to persist audit entry", exc_info=True)
        for order_id in order_ids:
            try:
                self.store.delete_order(order_id)
            except Exception:
                logger.warning(
                    f"Store failed to delete order {order_id}",
                    exc_info=True,
                    extra={"order_id": order_id},
                )
        self.logs = [*entries, *self.logs]
        if entries:
            signals.orders_deleted.send(sender=self.__class__, entries=entries, actor=actor)
            self.sink.toast(f"{len(entries)} O.R(s) excluída(s).", "success")
            self.scan()
        return entries

    # ══════════════════════════════════════════════════════════════
    # NOTIFICATIONS
    # ══════════════════════════════════════════════════════════════

    def scan(self) -> list:
        """Automated due/overdue scan (timer, snapshot and order-set changes)."""
        self._scanned_on = self.clock.today()
        return self.feed.scan(self.active_orders())

    def scan_if_stale(self) -> list:
        """Scan again when the date rolled over since the last scan."""
        if self._scanned_on != self.clock.today():
            return self.scan()
        return []

    def notifications_for(self, actor: Actor) -> list:
        self.scan_if_stale()
        return self.feed.visible_for(actor.id)

    def mark_read(self, notification_id: str, actor: Actor) -> None:
        if not self.feed.mark_read(notification_id, actor.id):
            raise PressError("NOTIFICATION_NOT_FOUND", notification_id=notification_id)

    def mark_all_read(self, actor: Actor) -> int:
        self.scan_if_stale()
        return self.feed.mark_all_read(actor.id)

    def send_alert(
        self,
        actor: Actor,
        title: str,
        message: str,
        target_user_id: str = None,
        type: str = "info",
        reference_date: str = None,
    ):
        notification = self.feed.create_alert(
            actor, target_user_id, title, message, type, reference_date
        )
        self.sink.toast("Alerta enviado!", "success")
        return notification

    def request_password_reset(self, login: str):
        """
        Broadcast an urgent reset request for the member with this login.

        Raises:
            PressError: USER_NOT_FOUND
        """
        user = self.find_user_by_login(login)
        if user is None:
            raise PressError("USER_NOT_FOUND", login=login)
        logger.info(f"Password reset requested for {user.name}", extra={"user_id": user.id})
        return self.feed.notify_password_reset(user, login)

    def act_on_notification(self, notification_id: str, actor: Actor) -> dict:
        """
        Run the follow-up action of a notification and mark it read.

        Returns:
            {'action': 'open_my_tasks', 'orderId': '...'}
            {'action': 'password_reset', 'userId': '...', 'password': '1234'}
            {'action': 'read'}

        Raises:
            PressError: NOTIFICATION_NOT_FOUND, USER_NOT_FOUND, or PERMISSION_DENIED
                when a non-admin tries to resolve a password reset
        """
        notification = self.feed.get(notification_id)
        if notification is None:
            raise PressError("NOTIFICATION_NOT_FOUND", notification_id=notification_id)

        if notification.kind == RESET_PASSWORD:
            if not actor.is_admin:
                self.sink.toast("Apenas administradores podem resetar senhas.", "error")
                raise PressError("PERMISSION_DENIED", notification_id=notification_id)
            login = notification.metadata.get("targetUserLogin")
            user = self.find_user_by_login(login)
            if user is None:
                self.sink.toast("Erro: Usuário não encontrado.", "error")
                raise PressError("USER_NOT_FOUND", login=login)
            password = get_setting("DEFAULT_RESET_PASSWORD")
            self.feed.mark_read(notification_id, actor.id)
            self.sink.toast(f'Senha de "{user.name}" resetada para {password}', "success")
            return {"action": "password_reset", "userId": user.id, "password": password}

        self.feed.mark_read(notification_id, actor.id)
        if notification.kind == ASSIGNMENT:
            self.sink.toast("Filtrando suas tarefas atribuídas.", "info")
            return {"action": "open_my_tasks", "orderId": notification.metadata.get("orderId")}
        return {"action": "read"}

    # ══════════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════════

    def _persist(self, order) -> bool:
        try:
            self.store.upsert_order(order)
        except Exception:
            logger.warning(
                f"Store write failed for O.R #{order.order_number}, keeping local change",
                exc_info=True,
                extra={"order_id": order.id},
            )
            return False
        return True

    def _finish(self, result: CommandResult, signal, actor, **kwargs) -> None:
        if result.success:
            result.persisted = self._persist(result.order)
            if signal is not None:
                signal.send(sender=self.__class__, order=result.order, actor=actor, **kwargs)
            self.scan()
        self._report(result)

    def _report(self, result: CommandResult) -> CommandResult:
        if result.message:
            self.sink.toast(result.message, result.level)
        return result


# ══════════════════════════════════════════════════════════════
# PROCESS-WIDE INSTANCE
# ══════════════════════════════════════════════════════════════

_press_lock = threading.Lock()
_press: Press | None = None


def get_press() -> Press:
    """Return the process-wide Press, loaded from the configured store."""
    global _press

    if _press is None:
        with _press_lock:
            if _press is None:  # double-checked
                _press = Press().load()
    return _press


def reset_press() -> None:
    """Reset the process-wide instance (for tests)."""
    global _press

    with _press_lock:
        if _press is not None:
            _press.unsubscribe()
        _press = None
