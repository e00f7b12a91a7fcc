"""
Pressman entities.

Plain dataclasses for the in-memory snapshot. The engine, the notification
feed and the board work only with these; persistence maps them to and from
the camelCase payload used by stores (`to_dict` / `from_dict`).

Payload structure (one order):
    {
        'id': '1718...',
        'or': '5001',
        'numeroItem': '2',
        'cliente': 'Padaria Central',
        'vendedor': 'Carla',
        'item': 'Fachada ACM 3x1',
        'dataEntrega': '2025-06-10',
        'prioridade': 'Alta',
        'preImpressao': 'Concluído',
        'impressao': 'Em Produção',
        ...
        'assignments': {'impressao': {'userId': 'u2', 'userName': 'Rui', ...}},
        'history': [{'userId': 'u1', 'userName': 'Ana', 'timestamp': '...',
                     'status': 'Concluído', 'sector': 'preImpressao'}],
        'filePaths': [{'name': 'Principal', 'path': '\\\\srv\\arte\\5001'}],
        'isArchived': False,
    }
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from pressman.steps import STAGES, Priority, Role, StepStatus


def _drop_none(data: dict) -> dict:
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class Assignment:
    """Binding of one user to one (order, stage) pair."""

    user_id: str
    user_name: str
    assigned_by: str
    assigned_at: str
    note: str | None = None
    started_at: str | None = None
    completed_at: str | None = None

    def to_dict(self) -> dict:
        return _drop_none(
            {
                "userId": self.user_id,
                "userName": self.user_name,
                "assignedBy": self.assigned_by,
                "assignedAt": self.assigned_at,
                "note": self.note,
                "startedAt": self.started_at,
                "completedAt": self.completed_at,
            }
        )

    @classmethod
    def from_dict(cls, data: dict) -> Assignment:
        return cls(
            user_id=data.get("userId", ""),
            user_name=data.get("userName", ""),
            assigned_by=data.get("assignedBy", ""),
            assigned_at=data.get("assignedAt", ""),
            note=data.get("note"),
            started_at=data.get("startedAt"),
            completed_at=data.get("completedAt"),
        )


@dataclass(frozen=True)
class HistoryEntry:
    """Audit trail entry. Appended once per mutating command, never edited."""

    user_id: str
    user_name: str
    timestamp: str
    status: str
    sector: str

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "userName": self.user_name,
            "timestamp": self.timestamp,
            "status": self.status,
            "sector": self.sector,
        }

    @classmethod
    def from_dict(cls, data: dict) -> HistoryEntry:
        return cls(
            user_id=data.get("userId", ""),
            user_name=data.get("userName", ""),
            timestamp=data.get("timestamp", ""),
            status=data.get("status", StepStatus.PENDING),
            sector=data.get("sector", ""),
        )


@dataclass(frozen=True)
class NetworkPath:
    name: str
    path: str

    def to_dict(self) -> dict:
        return {"name": self.name, "path": self.path}

    @classmethod
    def from_dict(cls, data: dict) -> NetworkPath:
        return cls(name=data.get("name", ""), path=data.get("path", ""))


# Payload keys mapped to Order attributes
_ORDER_FIELDS = {
    "or": "order_number",
    "cliente": "client",
    "vendedor": "salesperson",
    "item": "item",
    "dataEntrega": "due_date",
    "numeroItem": "item_ref",
    "quantidade": "quantity",
    "prioridade": "priority",
    "observacao": "notes",
    "isRemake": "is_remake",
    "createdAt": "created_at",
    "createdBy": "created_by",
}

# Descriptive payload keys that update_order may change
EDITABLE_FIELDS = frozenset(_ORDER_FIELDS) - {"createdAt", "createdBy"}

_KNOWN_KEYS = (
    set(_ORDER_FIELDS)
    | set(STAGES)
    | {"id", "assignments", "history", "filePaths", "isArchived", "archivedAt"}
)


@dataclass
class Order:
    """Ordem de produção (one line item; several may share `order_number`)."""

    id: str
    order_number: str
    client: str
    salesperson: str
    item: str
    due_date: str
    item_ref: str | None = None
    quantity: str | None = None
    priority: str = Priority.MEDIUM
    notes: str | None = None
    is_remake: bool = False
    statuses: dict[str, str] = field(
        default_factory=lambda: {stage: StepStatus.PENDING for stage in STAGES}
    )
    assignments: dict[str, Assignment] = field(default_factory=dict)
    history: list[HistoryEntry] = field(default_factory=list)
    file_paths: list[NetworkPath] = field(default_factory=list)
    is_archived: bool = False
    archived_at: str | None = None
    created_at: str | None = None
    created_by: str | None = None
    # Payload keys this app does not model (attachments, lote, versao...)
    extra: dict[str, Any] = field(default_factory=dict)

    def status_of(self, stage) -> str:
        return self.statuses.get(stage, StepStatus.PENDING)

    def assignment_for(self, stage) -> Assignment | None:
        return self.assignments.get(stage)

    def copy(self) -> Order:
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data["id"] = self.id
        for key, attr in _ORDER_FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        for stage in STAGES:
            data[stage.value] = self.status_of(stage)
        data["assignments"] = {
            str(stage): assignment.to_dict() for stage, assignment in self.assignments.items()
        }
        data["history"] = [entry.to_dict() for entry in self.history]
        data["filePaths"] = [path.to_dict() for path in self.file_paths]
        data["isArchived"] = self.is_archived
        if self.archived_at:
            data["archivedAt"] = self.archived_at
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Order:
        kwargs = {
            attr: data[key] for key, attr in _ORDER_FIELDS.items() if key in data
        }
        kwargs.setdefault("priority", Priority.MEDIUM)
        kwargs["is_remake"] = bool(kwargs.get("is_remake", False))
        for required in ("order_number", "client", "salesperson", "item", "due_date"):
            kwargs.setdefault(required, "")
        return cls(
            id=str(data["id"]),
            statuses={stage: data.get(stage, StepStatus.PENDING) for stage in STAGES},
            assignments={
                stage: Assignment.from_dict(payload)
                for stage, payload in (data.get("assignments") or {}).items()
                if payload
            },
            history=[HistoryEntry.from_dict(e) for e in data.get("history") or []],
            file_paths=[NetworkPath.from_dict(p) for p in data.get("filePaths") or []],
            is_archived=bool(data.get("isArchived", False)),
            archived_at=data.get("archivedAt"),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
            **kwargs,
        )


@dataclass
class Notification:
    """Transient alert. Not persisted with orders."""

    id: str
    title: str
    message: str
    type: str
    timestamp: str
    target_user_id: str
    target_sector: str
    read_by: list[str] = field(default_factory=list)
    action_label: str | None = None
    metadata: dict[str, Any] | None = None
    reference_date: str | None = None
    sender_name: str | None = None

    def is_for(self, user_id: str, broadcast: str) -> bool:
        return self.target_user_id in (broadcast, user_id)

    def is_read_by(self, user_id: str) -> bool:
        return user_id in self.read_by

    @property
    def kind(self) -> str | None:
        """metadata['type'] (ASSIGNMENT, RESET_PASSWORD...), if any."""
        return (self.metadata or {}).get("type")

    def to_dict(self) -> dict:
        return _drop_none(
            {
                "id": self.id,
                "title": self.title,
                "message": self.message,
                "type": self.type,
                "timestamp": self.timestamp,
                "readBy": list(self.read_by),
                "targetUserId": self.target_user_id,
                "targetSector": self.target_sector,
                "actionLabel": self.action_label,
                "metadata": self.metadata,
                "referenceDate": self.reference_date,
                "senderName": self.sender_name,
            }
        )


@dataclass(frozen=True)
class Actor:
    """
    Identity of a team member, as supplied by the session layer.

    Also used for the team roster (board columns, assignment targets).
    """

    id: str
    name: str
    role: str = Role.OPERATOR
    department: str = "Geral"
    is_leader: bool = False
    email: str = ""
    job_title: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nome": self.name,
            "email": self.email,
            "role": self.role,
            "cargo": self.job_title,
            "departamento": self.department,
            "isLeader": self.is_leader,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Actor:
        return cls(
            id=str(data["id"]),
            name=data.get("nome", ""),
            role=data.get("role", Role.OPERATOR),
            department=data.get("departamento", "Geral"),
            is_leader=bool(data.get("isLeader", False)),
            email=data.get("email", ""),
            job_title=data.get("cargo", "") or "",
        )


@dataclass(frozen=True)
class LogEntry:
    """Global audit entry for things that no longer exist (deleted orders/users)."""

    id: str
    user_id: str
    user_name: str
    timestamp: str
    action_type: str
    target_info: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "userName": self.user_name,
            "timestamp": self.timestamp,
            "actionType": self.action_type,
            "targetInfo": self.target_info,
        }
