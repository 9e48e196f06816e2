# gymprogress/errors.py
from __future__ import annotations


class GymProgressError(Exception):
    """Base class for everything the core raises on purpose."""


class ValidationFailed(GymProgressError):
    """A required field was blank. Raised before any storage call."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(GymProgressError):
    def __init__(self, kind: str, ident: int):
        super().__init__(f"{kind} {ident} not found")
        self.kind = kind
        self.ident = ident


class PersistenceError(GymProgressError):
    """The store rejected or failed a read/write."""

    def __init__(self, action: str):
        super().__init__(f"storage failure while trying to {action}")
        self.action = action


class CascadeError(PersistenceError):
    """A machine rename/delete cascade failed part way and was rolled back."""

    def __init__(self, operation: str, machine_id: int, rows_touched: int):
        super().__init__(f"{operation} machine {machine_id}")
        self.operation = operation
        self.machine_id = machine_id
        self.rows_touched = rows_touched
