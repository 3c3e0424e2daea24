"""
Error taxonomy for TableAdmin.

Every error raised by the library carries an ``ErrorKind`` tag and a
``fatal`` flag:

- Configuration errors are fatal: the admin panel must not start serving.
- Not-found, validation, database and action errors are recoverable: the
  route layer turns them into a 404 page or a flash message plus redirect.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Category tag for TableAdmin errors."""

    CONFIGURATION = "configuration"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    DATABASE = "database"
    ACTION = "action"


class TableAdminError(Exception):
    """Base class for all TableAdmin errors."""

    kind: ErrorKind = ErrorKind.CONFIGURATION
    fatal: bool = False


class ConfigurationError(TableAdminError):
    """Startup configuration is invalid. Never raised while serving requests."""

    kind = ErrorKind.CONFIGURATION
    fatal = True

    def __init__(self, message: str, errors: list[str] | None = None):
        self.errors = list(errors) if errors else [message]
        super().__init__(message)


class RecoverableError(TableAdminError):
    """Request-level failure that is reported to the user and recovered from."""


class RecordNotFoundError(RecoverableError):
    """A record lookup by id found nothing."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, table_name: str, record_id: object):
        self.table_name = table_name
        self.record_id = record_id
        super().__init__(f"No record with id {record_id!r} in {table_name}")


class CsrfValidationError(RecoverableError):
    """The CSRF cookie/field pair was missing, mismatched, expired or forged."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str = "Invalid request. Please try again."):
        super().__init__(message)


class DatabaseOperationError(RecoverableError):
    """A database read or write failed (constraint violation, lost connection)."""

    kind = ErrorKind.DATABASE


class ActionError(RecoverableError):
    """A custom member/collection action handler failed."""

    kind = ErrorKind.ACTION

    def __init__(self, action_name: str, message: str):
        self.action_name = action_name
        super().__init__(f"{action_name} failed: {message}")
