"""Domain error kinds and the exceptions raised at the storage edge."""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """The three failure kinds every user operation can report."""

    VALIDATION = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    PERSISTENCE = "PERSISTENCE_ERROR"


class UserApiError(Exception):
    """Base class for exceptions raised by the persistence gateway."""

    kind: ErrorKind


class NotFoundError(UserApiError):
    """The targeted user row does not exist (zero rows returned or affected)."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, user_id: int) -> None:
        super().__init__(f"No user found with ID: {user_id}")
        self.user_id = user_id


class PersistenceError(UserApiError):
    """The underlying store failed; the original exception is chained."""

    kind = ErrorKind.PERSISTENCE
