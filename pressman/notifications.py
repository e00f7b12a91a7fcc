"""
Notification feed.

Two producers share one feed:
- the automated deadline scan (due today / overdue), idempotent per day,
  keyed `today-{order}-{date}` / `delay-{order}-{date}`;
- direct emission from command side effects (assignment, new order,
  password reset), de-duplicated by (title, message, target).

Each producer keeps its own list (manual alerts a third one), trimmed to
its retention limit; a scan key trimmed away is not re-added the same day.

Visibility is per user: broadcast or targeted, and not yet in `read_by`.
Reading never deletes.

The scan runs from a timer while users issue commands, so every access goes
through one lock.
"""

import logging
import threading
import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _

from pressman.conf import broadcast_target, general_sector, get_setting
from pressman.entities import Actor, Notification
from pressman.steps import is_due_today, is_late, stage_label

logger = logging.getLogger(__name__)


class NotificationType(models.TextChoices):
    URGENT = "urgent", _("Urgente")
    WARNING = "warning", _("Aviso")
    SUCCESS = "success", _("Sucesso")
    INFO = "info", _("Informação")


SEVERITY = {
    NotificationType.URGENT: 3,
    NotificationType.WARNING: 2,
    NotificationType.SUCCESS: 1,
    NotificationType.INFO: 0,
}

ASSIGNMENT = "ASSIGNMENT"
RESET_PASSWORD = "RESET_PASSWORD"


class NotificationFeed:
    """
    In-memory notification feed for one running board.

    Usage:
        feed = NotificationFeed(clock)
        feed.scan(orders)
        for n in feed.visible_for(user.id):
            ...
        feed.mark_read(n.id, user.id)
    """

    def __init__(self, clock, sink=None, limit: int = None, manual_limit: int = None):
        self.clock = clock
        self.sink = sink
        self.limit = limit or get_setting("NOTIFICATION_LIMIT")
        self.manual_limit = manual_limit or get_setting("MANUAL_NOTIFICATION_LIMIT")
        self._deadlines: list[Notification] = []
        self._system: list[Notification] = []
        self._manual: list[Notification] = []
        # Scan keys already emitted today, kept even after retention trims them
        self._scan_date: str | None = None
        self._scan_keys: set[str] = set()
        self._lock = threading.RLock()

    # ══════════════════════════════════════════════════════════════
    # PRODUCERS
    # ══════════════════════════════════════════════════════════════

    def scan(self, orders) -> list[Notification]:
        """
        Automated deadline scan over active orders.

        Re-running on the same day adds nothing for keys already present.
        Returns the notifications added by this run.
        """
        today = self.clock.today()
        timestamp = self.clock.now().isoformat()
        candidates = []

        for order in orders:
            if order.is_archived:
                continue
            if is_due_today(order, today):
                candidates.append(
                    self._build(
                        f"today-{order.id}-{today}",
                        "ATENÇÃO: PRAZO HOJE",
                        f"O.R #{order.order_number} vence hoje. Prioridade máxima.",
                        NotificationType.WARNING,
                        timestamp,
                        reference_date=order.due_date,
                    )
                )
            if is_late(order, today):
                candidates.append(
                    self._build(
                        f"delay-{order.id}-{today}",
                        "URGENTE: ATRASADO",
                        f"O.R #{order.order_number} está atrasada!",
                        NotificationType.URGENT,
                        timestamp,
                        reference_date=order.due_date,
                    )
                )

        with self._lock:
            if self._scan_date != today:
                self._scan_date = today
                self._scan_keys = set()
            added = [n for n in candidates if n.id not in self._scan_keys]
            if added:
                self._scan_keys.update(n.id for n in added)
                self._deadlines = (added + self._deadlines)[: self.limit]

        if added:
            logger.info(
                f"Deadline scan added {len(added)} notifications",
                extra={"date": today, "added": len(added)},
            )
            self._hand_off(added)
        return added

    def emit(
        self,
        title: str,
        message: str,
        type: str = NotificationType.INFO,
        target_user_id: str = None,
        sector: str = None,
        action_label: str = None,
        metadata: dict = None,
        reference_date: str = None,
    ) -> Notification | None:
        """
        Emit a notification from a command side effect.

        Returns None when an identical (title, message, target) entry exists.
        """
        target = target_user_id or broadcast_target()
        with self._lock:
            for existing in self._system:
                if (
                    existing.title == title
                    and existing.message == message
                    and existing.target_user_id == target
                ):
                    return None
            notification = self._build(
                uuid.uuid4().hex,
                title,
                message,
                type,
                self.clock.now().isoformat(),
                target_user_id=target,
                sector=sector,
                action_label=action_label,
                metadata=metadata,
                reference_date=reference_date,
            )
            self._system = [notification, *self._system][: self.limit]

        self._hand_off([notification])
        return notification

    def notify_assignment(self, order, stage: str, user_id: str, assigner_name: str):
        return self.emit(
            "NOVA TAREFA DESIGNADA",
            f"Você foi designado para a O.R #{order.order_number} por {assigner_name}.",
            NotificationType.INFO,
            target_user_id=user_id,
            sector=stage_label(stage),
            action_label="VER MEUS TRABALHOS",
            metadata={"type": ASSIGNMENT, "orderId": order.id},
        )

    def notify_order_created(self, order):
        return self.emit(
            "NOVA ORDEM CRIADA",
            f"O.R #{order.order_number} - {order.client}",
            NotificationType.INFO,
            sector=stage_label("preImpressao"),
            action_label="VER DETALHES",
            metadata={"type": "ORDER_CREATED", "orderId": order.id},
        )

    def notify_password_reset(self, user: Actor, login: str):
        return self.emit(
            "SOLICITAÇÃO DE RESET DE SENHA",
            f"O usuário {user.name} solicitou reset de senha.",
            NotificationType.URGENT,
            action_label="RESETAR AGORA",
            metadata={"type": RESET_PASSWORD, "targetUserLogin": login},
        )

    def create_alert(
        self,
        sender: Actor,
        target_user_id: str,
        title: str,
        message: str,
        type: str = NotificationType.INFO,
        reference_date: str = None,
    ) -> Notification:
        """Manual alert written by a user (kept apart from system notifications)."""
        notification = self._build(
            f"manual-{uuid.uuid4().hex}",
            title.upper(),
            message,
            NotificationType(type),
            self.clock.now().isoformat(),
            target_user_id=target_user_id or broadcast_target(),
            reference_date=reference_date,
            sender_name=sender.name if sender else None,
        )
        with self._lock:
            self._manual = [notification, *self._manual][: self.manual_limit]
        self._hand_off([notification])
        return notification

    # ══════════════════════════════════════════════════════════════
    # CONSUMERS
    # ══════════════════════════════════════════════════════════════

    def retract_assignment(self, order_id: str, user_id: str) -> int:
        """Drop assignment notices for (order, user) the user has not read yet."""
        with self._lock:
            kept = [
                n
                for n in self._system
                if not (
                    n.kind == ASSIGNMENT
                    and n.metadata.get("orderId") == order_id
                    and n.target_user_id == user_id
                    and not n.is_read_by(user_id)
                )
            ]
            removed = len(self._system) - len(kept)
            self._system = kept
        if removed:
            logger.debug(
                f"Retracted {removed} assignment notifications",
                extra={"order_id": order_id, "user_id": user_id},
            )
        return removed

    def visible_for(self, user_id: str) -> list[Notification]:
        """Unread notifications for `user_id`, most severe first (stable)."""
        broadcast = broadcast_target()
        with self._lock:
            notifications = [*self._manual, *self._system, *self._deadlines]
        visible = [
            n for n in notifications if n.is_for(user_id, broadcast) and not n.is_read_by(user_id)
        ]
        return sorted(visible, key=lambda n: -SEVERITY.get(n.type, 0))

    def unread_count(self, user_id: str) -> int:
        return len(self.visible_for(user_id))

    def get(self, notification_id: str) -> Notification | None:
        with self._lock:
            for notification in (*self._manual, *self._system, *self._deadlines):
                if notification.id == notification_id:
                    return notification
        return None

    def mark_read(self, notification_id: str, user_id: str) -> bool:
        with self._lock:
            notification = self.get(notification_id)
            if notification is None:
                return False
            if not notification.is_read_by(user_id):
                notification.read_by.append(user_id)
            return True

    def mark_all_read(self, user_id: str) -> int:
        broadcast = broadcast_target()
        marked = 0
        with self._lock:
            for notification in (*self._manual, *self._system, *self._deadlines):
                if notification.is_for(user_id, broadcast) and not notification.is_read_by(user_id):
                    notification.read_by.append(user_id)
                    marked += 1
        return marked

    def all(self) -> list[Notification]:
        with self._lock:
            return [*self._manual, *self._system, *self._deadlines]

    # ══════════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════════

    def _build(
        self,
        notification_id,
        title,
        message,
        type,
        timestamp,
        target_user_id=None,
        sector=None,
        action_label=None,
        metadata=None,
        reference_date=None,
        sender_name=None,
    ) -> Notification:
        return Notification(
            id=notification_id,
            title=title,
            message=message,
            type=str(type),
            timestamp=timestamp,
            target_user_id=target_user_id or broadcast_target(),
            target_sector=sector or general_sector(),
            action_label=action_label,
            metadata=metadata,
            reference_date=reference_date,
            sender_name=sender_name,
        )

    def _hand_off(self, notifications):
        if self.sink is None:
            return
        for notification in notifications:
            self.sink.notify(notification)
