"""
Pressman Analytics.

Dashboard counters and workload reports over the in-memory order set.
"""

from datetime import timezone as dt_timezone
from typing import Any

from django.utils import timezone
from django.utils.dateparse import parse_datetime

from pressman.steps import STAGES, StepStatus, is_due_today, is_in_production, is_late


def _parse_stamp(value):
    """ISO stamp (with or without offset, `Z` included) as an aware datetime, or None."""
    try:
        parsed = parse_datetime(value or "")
    except ValueError:
        return None
    if parsed is not None and timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, dt_timezone.utc)
    return parsed


class BoardAnalytics:
    """Analytics for the production board."""

    @classmethod
    def stats(cls, orders, today: str) -> dict[str, int]:
        """
        Dashboard counters over active (non-archived) orders.

        Returns:
            {'total': 12, 'em_producao': 4, 'atrasadas': 2, 'vence_hoje': 1}
        """
        active = [order for order in orders if not order.is_archived]
        return {
            "total": len(active),
            "em_producao": sum(1 for order in active if is_in_production(order)),
            "atrasadas": sum(1 for order in active if is_late(order, today)),
            "vence_hoje": sum(1 for order in active if is_due_today(order, today)),
        }

    @classmethod
    def workload_by_user(cls, orders) -> dict[str, dict]:
        """
        Open assignments per user, split by stage status.

        Returns:
            {
                'u2': {'user_name': 'Rui', 'Pendente': 1, 'Em Produção': 2, 'total': 3},
                ...
            }
        """
        workload: dict[str, dict] = {}
        for order in orders:
            if order.is_archived:
                continue
            for stage, assignment in order.assignments.items():
                status = order.status_of(stage)
                if status == StepStatus.DONE:
                    continue
                entry = workload.setdefault(
                    assignment.user_id,
                    {
                        "user_name": assignment.user_name,
                        str(StepStatus.PENDING): 0,
                        str(StepStatus.IN_PROGRESS): 0,
                        "total": 0,
                    },
                )
                entry[str(status)] += 1
                entry["total"] += 1
        return workload

    @classmethod
    def stage_durations(cls, orders) -> dict[str, dict]:
        """
        Average time between startedAt and completedAt, per stage.

        Archived orders count too: most completed work ends up archived.
        Naive stamps are read as UTC; stamps that do not parse are skipped.

        Returns:
            {'impressao': {'avg_hours': 5.5, 'sample_size': 8}, ...}
        """
        totals = {str(stage): [0.0, 0] for stage in STAGES}
        for order in orders:
            for stage, assignment in order.assignments.items():
                started = _parse_stamp(assignment.started_at)
                completed = _parse_stamp(assignment.completed_at)
                if started is None or completed is None:
                    continue
                hours = (completed - started).total_seconds() / 3600
                if hours < 0:
                    continue
                bucket = totals[str(stage)]
                bucket[0] += hours
                bucket[1] += 1

        return {
            stage: {
                "avg_hours": round(total / count, 2) if count else None,
                "sample_size": count,
            }
            for stage, (total, count) in totals.items()
        }

    @classmethod
    def summary(cls, orders, today: str) -> dict[str, Any]:
        return {
            "stats": cls.stats(orders, today),
            "workload": cls.workload_by_user(orders),
            "stage_durations": cls.stage_durations(orders),
        }
