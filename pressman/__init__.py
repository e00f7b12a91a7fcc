"""
Django Pressman - production board for print shops.

Orders move through five fixed stages (pré-impressão, impressão, produção,
instalação, expedição); each stage has its own status and its own assignee.

Usage:
    from pressman import get_press, PressError

    press = get_press()
    result = press.assign_user(order_id, "producao", user_id, actor=leader)
    result = press.advance_status(order_id, "producao", "Em Produção", actor=operator)

    if not result.success:
        print(result.error, result.message)

    for column in press.board("team", leader, sector="producao"):
        print(column.label, column.count)
"""

from pressman.exceptions import PressError


def __getattr__(name):
    """Lazy import to avoid AppRegistryNotReady errors."""
    if name in ("get_press", "Press"):
        from pressman import service

        return getattr(service, name)
    if name == "CommandResult":
        from pressman.results import CommandResult

        return CommandResult
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["get_press", "Press", "PressError", "CommandResult"]
__version__ = "0.1.0"
