"""
Pressman Models.

Persistence for the Django store backend:
- ProductionOrder: one order line item (pipeline state in JSON columns)
- TeamMember: shop-floor roster (role, department, leader flag)
- AuditLogEntry: global log of deletions
"""

from pressman.models.audit_log import AuditAction, AuditLogEntry
from pressman.models.production_order import ProductionOrder
from pressman.models.team_member import TeamMember

__all__ = [
    "ProductionOrder",
    "TeamMember",
    "AuditLogEntry",
    "AuditAction",
]
