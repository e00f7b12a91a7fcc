"""
Pressman Admin -- Django admin for orders, team members and the audit log.

Orders keep their full row history (django-simple-history), browsable from
the change form.
"""

from django.contrib import admin
from simple_history.admin import SimpleHistoryAdmin

from pressman.models import AuditLogEntry, ProductionOrder, TeamMember


# ── ProductionOrder ──


@admin.register(ProductionOrder)
class ProductionOrderAdmin(SimpleHistoryAdmin):
    """Admin for production orders."""

    list_display = (
        "order_number",
        "item_ref",
        "client",
        "item",
        "due_date",
        "priority",
        "is_archived",
    )
    list_filter = ("priority", "is_archived", "is_remake")
    search_fields = ("order_number", "client", "salesperson", "item")
    date_hierarchy = "due_date"
    readonly_fields = ("id", "created_at", "created_by", "updated_at", "archived_at")


# ── TeamMember ──


@admin.register(TeamMember)
class TeamMemberAdmin(admin.ModelAdmin):
    """Admin for the shop-floor roster."""

    list_display = ("name", "email", "role", "department", "is_leader", "is_active")
    list_filter = ("role", "department", "is_leader", "is_active")
    search_fields = ("name", "email")
    raw_id_fields = ("user",)


# ── AuditLogEntry ──


@admin.register(AuditLogEntry)
class AuditLogEntryAdmin(admin.ModelAdmin):
    """Read-only admin for the global audit log."""

    list_display = ("timestamp", "action_type", "user_name", "target_info")
    list_filter = ("action_type",)
    search_fields = ("user_name", "target_info")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
