"""
Pressman API ViewSets.

Every endpoint works on the process-wide Press (see pressman.service); the
acting user comes from the authenticated Django user.
"""

import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from pressman.entities import Actor
from pressman.exceptions import PressError
from pressman.service import get_press
from pressman.steps import Role
from .serializers import (
    AdvanceSerializer,
    AlertSerializer,
    AssignSerializer,
    BulkDeleteSerializer,
    NetworkPathsSerializer,
    OrderSerializer,
    PasswordResetSerializer,
)

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {"ORDER_NOT_FOUND", "NOTIFICATION_NOT_FOUND", "USER_NOT_FOUND"}
FORBIDDEN_CODES = {"PERMISSION_DENIED"}


def get_actor(request) -> Actor:
    """TeamMember linked to the user, else an actor built from the auth user."""
    user = request.user
    member = getattr(user, "team_member", None)
    if member is not None:
        return member.to_actor()
    return Actor(
        id=f"auth-{user.pk}",
        name=user.get_full_name() or user.get_username(),
        role=Role.ADMIN if user.is_staff else Role.OPERATOR,
        email=user.email or "",
    )


def error_response(code: str, message: str = None, **details) -> Response:
    if code in NOT_FOUND_CODES:
        http_status = status.HTTP_404_NOT_FOUND
    elif code in FORBIDDEN_CODES:
        http_status = status.HTTP_403_FORBIDDEN
    else:
        http_status = status.HTTP_400_BAD_REQUEST
    return Response({"error": code, "message": message, **details}, status=http_status)


def press_error_response(error: PressError) -> Response:
    return error_response(error.code, str(error), details=error.details)


def command_response(result, http_status=status.HTTP_200_OK) -> Response:
    if result.failed:
        return error_response(result.error, result.message)
    return Response(
        {
            "order": result.order.to_dict(),
            "message": result.message,
            "persisted": result.persisted,
        },
        status=http_status,
    )


class OrderViewSet(viewsets.ViewSet):
    """
    ViewSet for production orders.

    list: Active orders (?archived=1 for the archive)
    create: Create a new order
    retrieve: Get one order
    partial_update: Change descriptive fields
    destroy: Delete one order
    advance: Set (or cycle) the status of one stage
    assign: Assign or unassign a user to one stage
    paths: Replace network paths
    archive / reactivate: Explicit archival toggle
    bulk_delete: Delete several orders
    """

    permission_classes = [IsAuthenticated]

    def list(self, request):
        press = get_press()
        if request.query_params.get("archived") in ("1", "true"):
            orders = press.archived_orders()
        else:
            orders = press.active_orders()
        return Response([order.to_dict() for order in orders])

    def retrieve(self, request, pk=None):
        order = get_press().get_order(pk)
        if order is None:
            return error_response("ORDER_NOT_FOUND", order_id=pk)
        return Response(order.to_dict())

    def create(self, request):
        """
        Create an order.

        POST /api/pressman/orders/
        {
            "or": "5001",
            "cliente": "Padaria Central",
            "vendedor": "Carla",
            "item": "Fachada ACM",
            "dataEntrega": "2025-06-12"
        }
        """
        serializer = OrderSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            result = get_press().create_order(serializer.validated_data, get_actor(request))
        except PressError as e:
            return press_error_response(e)
        return command_response(result, status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        serializer = OrderSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            result = get_press().update_order(pk, dict(serializer.validated_data), get_actor(request))
        except PressError as e:
            return press_error_response(e)
        return command_response(result)

    def destroy(self, request, pk=None):
        entries = get_press().delete_orders([pk], get_actor(request))
        if not entries:
            return error_response("ORDER_NOT_FOUND", order_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["post"], url_path="bulk-delete")
    def bulk_delete(self, request):
        """
        Delete several orders.

        POST /api/pressman/orders/bulk-delete/
        {"ids": ["a1", "b2"]}
        """
        serializer = BulkDeleteSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        entries = get_press().delete_orders(serializer.validated_data["ids"], get_actor(request))
        return Response({"deleted": len(entries), "logs": [entry.to_dict() for entry in entries]})

    @action(detail=True, methods=["post"])
    def advance(self, request, pk=None):
        """
        Set the status of one stage.

        POST /api/pressman/orders/{id}/advance/
        {
            "stage": "impressao",
            "status": "Em Produção"  // optional, cycles when omitted
        }
        """
        serializer = AdvanceSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        press = get_press()
        actor = get_actor(request)
        data = serializer.validated_data
        if "status" in data:
            result = press.advance_status(pk, data["stage"], data["status"], actor)
        else:
            result = press.cycle_status(pk, data["stage"], actor)
        return command_response(result)

    @action(detail=True, methods=["post"])
    def assign(self, request, pk=None):
        """
        Assign a user to one stage.

        POST /api/pressman/orders/{id}/assign/
        {
            "stage": "producao",
            "user_id": "7",         // empty removes the assignment
            "note": "Usar ACM branco"
        }
        """
        serializer = AssignSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        result = get_press().assign_user(
            pk,
            data["stage"],
            data.get("user_id") or None,
            note=data.get("note"),
            actor=get_actor(request),
        )
        return command_response(result)

    @action(detail=True, methods=["post"])
    def paths(self, request, pk=None):
        serializer = NetworkPathsSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        result = get_press().set_network_paths(
            pk, serializer.validated_data["paths"], get_actor(request)
        )
        return command_response(result)

    @action(detail=True, methods=["post"])
    def archive(self, request, pk=None):
        return command_response(get_press().archive(pk, get_actor(request)))

    @action(detail=True, methods=["post"])
    def reactivate(self, request, pk=None):
        return command_response(get_press().reactivate(pk, get_actor(request)))


class BoardViewSet(viewsets.ViewSet):
    """
    Board columns.

    GET /api/pressman/board/?view=team&sector=impressao&search=acm&priority=Alta
    """

    permission_classes = [IsAuthenticated]

    def list(self, request):
        params = request.query_params
        try:
            columns = get_press().board(
                params.get("view", "stages"),
                get_actor(request),
                sector=params.get("sector"),
                search=params.get("search", ""),
                priority=params.get("priority"),
            )
        except PressError as e:
            return press_error_response(e)
        return Response([column.to_dict() for column in columns])


class NotificationViewSet(viewsets.ViewSet):
    """
    Notification feed of the acting user.

    list: Visible (unread) notifications, most severe first
    create: Send a manual alert
    read: Mark one as read
    read_all: Mark every visible one as read
    act: Run the follow-up action (open tasks, resolve password reset)
    password_reset: Request a password reset (no login needed)
    """

    permission_classes = [IsAuthenticated]

    def list(self, request):
        notifications = get_press().notifications_for(get_actor(request))
        return Response([notification.to_dict() for notification in notifications])

    def create(self, request):
        serializer = AlertSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        data = serializer.validated_data
        reference_date = data.get("reference_date")
        notification = get_press().send_alert(
            get_actor(request),
            data["title"],
            data["message"],
            target_user_id=data.get("target_user_id") or None,
            type=data["type"],
            reference_date=reference_date.isoformat() if reference_date else None,
        )
        return Response(notification.to_dict(), status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def read(self, request, pk=None):
        try:
            get_press().mark_read(pk, get_actor(request))
        except PressError as e:
            return press_error_response(e)
        return Response({"status": "read"})

    @action(detail=False, methods=["post"], url_path="read-all")
    def read_all(self, request):
        marked = get_press().mark_all_read(get_actor(request))
        return Response({"marked": marked})

    @action(detail=True, methods=["post"])
    def act(self, request, pk=None):
        try:
            outcome = get_press().act_on_notification(pk, get_actor(request))
        except PressError as e:
            return press_error_response(e)
        if outcome["action"] == "password_reset":
            _reset_linked_password(outcome["userId"], outcome["password"])
        return Response(outcome)

    @action(
        detail=False,
        methods=["post"],
        url_path="password-reset",
        permission_classes=[AllowAny],
    )
    def password_reset(self, request):
        serializer = PasswordResetSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            get_press().request_password_reset(serializer.validated_data["login"])
        except PressError as e:
            return press_error_response(e)
        return Response({"status": "requested"}, status=status.HTTP_202_ACCEPTED)


def _reset_linked_password(member_id: str, password: str) -> None:
    """
    Apply a resolved reset to the auth user linked to the team member, if any.

    Superuser accounts are never reset this way.
    """
    from pressman.models import TeamMember

    if not str(member_id).isdigit():
        return
    member = TeamMember.objects.select_related("user").filter(pk=member_id).first()
    if member is None or member.user is None:
        return
    if member.user.is_superuser:
        logger.warning(
            f"Refusing to reset superuser password for {member.name}",
            extra={"member_id": member_id},
        )
        return
    member.user.set_password(password)
    member.user.save(update_fields=["password"])


class StatsViewSet(viewsets.ViewSet):
    """
    Dashboard counters.

    list: total / em_producao / atrasadas / vence_hoje
    analytics: workload per user and average stage durations
    """

    permission_classes = [IsAuthenticated]

    def list(self, request):
        return Response(get_press().stats())

    @action(detail=False, methods=["get"])
    def analytics(self, request):
        return Response(get_press().analytics())
