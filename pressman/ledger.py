"""
Assignment ledger.

Per-order, per-stage assignment records. Only the transition engine calls
these functions; they mutate the order they are given.
"""

from __future__ import annotations

from pressman.entities import Assignment, Order


def set_assignment(
    order: Order,
    stage: str,
    user_id: str | None,
    user_name: str,
    assigner_name: str,
    note: str | None,
    now: str,
) -> Assignment | None:
    """
    Insert, replace or remove the assignment of `stage`.

    - Empty `user_id` removes the stage key entirely (no tombstone).
    - Same user re-assigned: treated as an edit, startedAt/completedAt kept.
    - Different user: fresh record, the stage clock starts over.

    Returns the previous assignment (or None).
    """
    previous = order.assignments.get(stage)

    if not user_id:
        order.assignments.pop(stage, None)
        return previous

    assignment = Assignment(
        user_id=user_id,
        user_name=user_name,
        assigned_by=assigner_name,
        assigned_at=now,
        note=note or None,
    )
    if previous is not None and previous.user_id == user_id:
        assignment.started_at = previous.started_at
        assignment.completed_at = previous.completed_at

    order.assignments[stage] = assignment
    return previous


def touch_started(order: Order, stage: str, now: str) -> bool:
    """Stamp startedAt once. Returns True if it was stamped now."""
    assignment = order.assignments.get(stage)
    if assignment is None or assignment.started_at:
        return False
    assignment.started_at = now
    return True


def touch_completed(order: Order, stage: str, now: str) -> bool:
    """Stamp completedAt once. Returns True if it was stamped now."""
    assignment = order.assignments.get(stage)
    if assignment is None or assignment.completed_at:
        return False
    assignment.completed_at = now
    return True
