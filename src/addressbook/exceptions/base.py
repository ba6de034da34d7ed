"""
Domain exceptions raised by the validators and the entry repository.

The taxonomy is closed: every failure the repository reports is one of the
`ErrorKind` members, and each kind has exactly one exception class. Callers
dispatch on the class (or on `.kind`), never on the message text.
"""

from enum import Enum
from typing import Iterable


class ErrorKind(str, Enum):
    """Closed set of domain failure kinds. The value is the user-visible message."""

    INVALID_NAME = "name is not valid"
    INVALID_USERNAME = "username is not valid"
    INVALID_EMAIL = "email is not valid"
    INVALID_TABLE_NAME = "tablename is not valid"
    INVALID_ID = "record ID is invalid"
    DUPLICATE = "record already exists"
    NOT_FOUND = "record does not exist"
    UPDATE_FAILED = "record could not be updated"
    DELETE_FAILED = "record could not be deleted"
    TABLE_EXISTS = "table already exists"
    TABLE_DOES_NOT_EXIST = "table does not exist"
    TABLE_CANNOT_BE_DELETED = "this table cannot be deleted"


# canonical repository-level exception

class RepositoryError(Exception):
    """
    Base exception for repository/validator errors.

    - message: human-friendly message (safe to show to users)
    - kind: the ErrorKind this error belongs to
    - fields: optional list of field names related to the error (e.g., ['email'])
    - constraint: optional DB constraint name or identifier (for logs only)
    """

    kind: ErrorKind | None = None

    def __init__(self, message: str | None = None, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None):
        if message is None:
            message = self.kind.value if self.kind is not None else "repository error"
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint

    @property
    def error_code(self) -> str | None:
        """Short canonical code (the enum member name, lower-cased)."""
        return self.kind.name.lower() if self.kind is not None else None

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_kind(cls, kind: ErrorKind, **kwargs) -> "RepositoryError":
        """Build the exception instance registered for `kind`."""
        return _KIND_TO_EXCEPTION[kind](**kwargs)


# =================================================================================================================
# Validation failures
# =================================================================================================================

class InvalidNameError(RepositoryError):
    kind = ErrorKind.INVALID_NAME


class InvalidUsernameError(RepositoryError):
    kind = ErrorKind.INVALID_USERNAME


class InvalidEmailError(RepositoryError):
    kind = ErrorKind.INVALID_EMAIL


class InvalidTableNameError(RepositoryError):
    kind = ErrorKind.INVALID_TABLE_NAME


class InvalidIDError(RepositoryError):
    kind = ErrorKind.INVALID_ID


# =================================================================================================================
# Record failures
# =================================================================================================================

class DuplicateError(RepositoryError):
    """Raised when a username or email collides with an existing row of the same table."""
    kind = ErrorKind.DUPLICATE


class NotFoundError(RepositoryError):
    kind = ErrorKind.NOT_FOUND


class UpdateFailedError(RepositoryError):
    """Raised when an update touched zero rows."""
    kind = ErrorKind.UPDATE_FAILED


class DeleteFailedError(RepositoryError):
    """Raised when a delete touched zero rows."""
    kind = ErrorKind.DELETE_FAILED


# =================================================================================================================
# Table lifecycle failures
# =================================================================================================================

class TableExistsError(RepositoryError):
    kind = ErrorKind.TABLE_EXISTS


class TableDoesNotExistError(RepositoryError):
    kind = ErrorKind.TABLE_DOES_NOT_EXIST


class TableCannotBeDeletedError(RepositoryError):
    kind = ErrorKind.TABLE_CANNOT_BE_DELETED


_KIND_TO_EXCEPTION: dict[ErrorKind, type[RepositoryError]] = {
    ErrorKind.INVALID_NAME: InvalidNameError,
    ErrorKind.INVALID_USERNAME: InvalidUsernameError,
    ErrorKind.INVALID_EMAIL: InvalidEmailError,
    ErrorKind.INVALID_TABLE_NAME: InvalidTableNameError,
    ErrorKind.INVALID_ID: InvalidIDError,
    ErrorKind.DUPLICATE: DuplicateError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.UPDATE_FAILED: UpdateFailedError,
    ErrorKind.DELETE_FAILED: DeleteFailedError,
    ErrorKind.TABLE_EXISTS: TableExistsError,
    ErrorKind.TABLE_DOES_NOT_EXIST: TableDoesNotExistError,
    ErrorKind.TABLE_CANNOT_BE_DELETED: TableCannotBeDeletedError,
}


# __all__ lists the public exception classes only.
__all__ = [
    "ErrorKind",
    "RepositoryError",
    "InvalidNameError",
    "InvalidUsernameError",
    "InvalidEmailError",
    "InvalidTableNameError",
    "InvalidIDError",
    "DuplicateError",
    "NotFoundError",
    "UpdateFailedError",
    "DeleteFailedError",
    "TableExistsError",
    "TableDoesNotExistError",
    "TableCannotBeDeletedError",
]
