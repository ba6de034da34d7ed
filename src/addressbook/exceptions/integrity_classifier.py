"""
Classification of sqlite constraint violations.

The classes below are labels for "which constraint failed". `classify_integrity_error`
returns one of them and the mapper decides what the caller sees:

| Label                    | Reaches the caller as          |
| ------------------------ | ------------------------------ |
| `UniqueConstraintError`  | `DuplicateError`               |
| anything else            | the IntegrityError, unchanged  |

They are never raised themselves.
"""
import logging
import re
from enum import IntEnum
from typing import Type

from sqlalchemy.exc import IntegrityError

from .base import RepositoryError

logger = logging.getLogger(__name__)


class ConstraintViolationError(RepositoryError):
    pass


class UniqueConstraintError(ConstraintViolationError):
    """UNIQUE or PRIMARY KEY collision."""


class NotNullConstraintError(ConstraintViolationError):
    pass


class CheckConstraintError(ConstraintViolationError):
    pass


class UnknownIntegrityError(ConstraintViolationError):
    """Foreign key, trigger or anything else sqlite reports as a constraint failure."""


# https://www.sqlite.org/rescode.html#extrc
class SQLiteErrorCodes(IntEnum):
    CONSTRAINT_CHECK = 275
    CONSTRAINT_NOTNULL = 1299
    CONSTRAINT_PRIMARYKEY = 1555
    CONSTRAINT_UNIQUE = 2067


SQLITE_CODE_EXCEPTION_MAP = {
    SQLiteErrorCodes.CONSTRAINT_UNIQUE: UniqueConstraintError,
    SQLiteErrorCodes.CONSTRAINT_PRIMARYKEY: UniqueConstraintError,
    SQLiteErrorCodes.CONSTRAINT_NOTNULL: NotNullConstraintError,
    SQLiteErrorCodes.CONSTRAINT_CHECK: CheckConstraintError,
}

# sqlite words every constraint message as "<KIND> constraint failed: ..."
_MESSAGE_PREFIX_RE = re.compile(r"^(?P<kind>UNIQUE|NOT NULL|CHECK) constraint failed", re.IGNORECASE)

SQLITE_MESSAGE_EXCEPTION_MAP = {
    "unique": UniqueConstraintError,
    "not null": NotNullConstraintError,
    "check": CheckConstraintError,
}


def _classify_by_code(orig) -> tuple[Type[ConstraintViolationError] | None, str | None]:
    """
    Use the extended result code sqlite3 attaches to the exception (Python 3.11+).

    Returns (None, None) when the driver error carries no code.
    """
    code = getattr(orig, "sqlite_errorcode", None)
    if code is None:
        return None, None

    name = getattr(orig, "sqlite_errorname", None)
    exception_class = SQLITE_CODE_EXCEPTION_MAP.get(code)
    if exception_class is None:
        logger.warning("classifier.unknown_code", extra={"sqlite_code": code, "sqlite_name": name})
        return UnknownIntegrityError, name

    logger.debug("classifier.code", extra={"sqlite_code": code, "sqlite_name": name})
    return exception_class, name


def _classify_by_message(msg: str) -> Type[ConstraintViolationError]:
    m = _MESSAGE_PREFIX_RE.match(msg.strip())
    if m is None:
        logger.warning("classifier.unknown_message", extra={"message_snippet": msg[:200]})
        return UnknownIntegrityError
    return SQLITE_MESSAGE_EXCEPTION_MAP[m.group("kind").lower()]


def classify_integrity_error(exc: IntegrityError) -> tuple[Type[ConstraintViolationError], str | None]:
    """
    Label a SQLAlchemy IntegrityError raised by the sqlite driver.

    Returns:
        (label class, sqlite error name such as "SQLITE_CONSTRAINT_UNIQUE" or None)
    """
    exception_class, error_name = _classify_by_code(exc.orig)
    if exception_class is not None:
        return exception_class, error_name

    return _classify_by_message(str(exc.orig)), None
