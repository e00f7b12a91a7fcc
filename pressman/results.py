"""
Pressman Result Types.

Structured results for order commands.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pressman.entities import Order


@dataclass
class CommandResult:
    """
    Resultado de um comando sobre uma ordem.

    Se success=True: order contém a ordem atualizada
    Se success=False: error contém o código e message o texto para o usuário
    """

    success: bool
    order: Order | None = None
    error: str | None = None
    message: str | None = None
    level: str = "info"
    persisted: bool = True

    @classmethod
    def ok(cls, order: Order | None, message: str | None = None, level: str = "success"):
        return cls(success=True, order=order, message=message, level=level)

    @classmethod
    def fail(cls, error: str, message: str):
        return cls(success=False, error=error, message=message, level="error")

    @property
    def failed(self) -> bool:
        return not self.success
