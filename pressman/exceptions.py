"""
Pressman Exceptions.

Bad input to the board (unknown stage, status, field...) raises PressError
right away; unknown order ids are reported through CommandResult instead.
"""

from typing import Any


class PressError(Exception):
    """
    Erro do quadro de produção, identificado por um código estável.

    The API turns `code` into the HTTP status (404 for *_NOT_FOUND, 403 for
    PERMISSION_DENIED, 400 otherwise) and `details` into the response body.

    Usage:
        raise PressError("MISSING_FIELDS", fields=["cliente", "dataEntrega"])
    """

    def __init__(self, code: str, **details: Any):
        self.code = code
        self.details = details
        super().__init__(code)

    def as_dict(self) -> dict:
        return {"code": self.code, **self.details}

    def __str__(self) -> str:
        if not self.details:
            return self.code
        context = "; ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.code} ({context})"


# Codes in use
# INVALID_STAGE / INVALID_STATUS / INVALID_PRIORITY: value outside its TextChoices
# INVALID_VIEW_MODE: board view other than stages, my_tasks, team, archive
# MISSING_FIELDS: required payload keys absent when creating an order
# INVALID_FIELD: update_order got a pipeline, assignment or archival key
# DUPLICATE_ID: create_order got an id already on the board
# ORDER_NOT_FOUND, NOTIFICATION_NOT_FOUND, USER_NOT_FOUND: nothing with that id/login
# PERMISSION_DENIED: only admins resolve password resets
# STORE_UNAVAILABLE: the store raised while loading or writing
