"""
Field and table-name validators.

Every check here runs locally before any statement is built. The table-name check is
an allow-list: table identifiers are spliced into DDL/DML, so a name reaches the
storage layer only after `validate_table_name` accepted it.
"""

import logging
import re

from addressbook.exceptions.base import (
    RepositoryError,
    InvalidNameError,
    InvalidUsernameError,
    InvalidEmailError,
    InvalidTableNameError,
    InvalidIDError,
)
from addressbook.models.entry import Entry
from .patterns import ValidationPatterns, DEFAULT_PATTERNS

logger = logging.getLogger(__name__)


def matches(value: object, pattern: str) -> bool:
    """Return True if `value` is a string that fully matches `pattern`."""
    return isinstance(value, str) and re.fullmatch(pattern, value) is not None


def validate_field(value: object, pattern: str, error_cls: type[RepositoryError]) -> None:
    """
    Raise `error_cls` unless `value` fully matches `pattern`.

    Args:
        value: candidate string.
        pattern: regular expression (matched with re.fullmatch).
        error_cls: the domain error to raise on mismatch.

    Raises:
        RepositoryError: an instance of `error_cls`.
    """
    if not matches(value, pattern):
        raise error_cls()


def validate_name(value: object, patterns: ValidationPatterns = DEFAULT_PATTERNS) -> None:
    validate_field(value, patterns.name, InvalidNameError)


def validate_username(value: object, patterns: ValidationPatterns = DEFAULT_PATTERNS) -> None:
    validate_field(value, patterns.username, InvalidUsernameError)


def validate_email(value: object, patterns: ValidationPatterns = DEFAULT_PATTERNS) -> None:
    validate_field(value, patterns.email, InvalidEmailError)


def validate_entry(entry: Entry, patterns: ValidationPatterns = DEFAULT_PATTERNS) -> None:
    """
    Validate an entry before it is written.

    Name, username and email are checked in that order and the first failure wins.
    An id, when the caller supplies one, must be a positive integer.

    Raises:
        InvalidNameError, InvalidUsernameError, InvalidEmailError, InvalidIDError
    """
    validate_name(entry.name, patterns)
    validate_username(entry.username, patterns)
    validate_email(entry.email, patterns)

    if entry.id is not None and (isinstance(entry.id, bool) or not isinstance(entry.id, int) or entry.id <= 0):
        raise InvalidIDError()


def is_valid_table_name(name: object, patterns: ValidationPatterns = DEFAULT_PATTERNS) -> bool:
    """
    Allow-list check for table identifiers.

    Accepted shapes:
      - plain: letter first, alphanumeric segments joined by single '-' or '_', at least
        `table_min_length` characters ("reports", "team-2", "default_table")
      - bracketed: "[...]" with alphanumerics and a small punctuation set ("[Sales Team]")

    Rejected regardless of shape: names containing the reserved catalog infix and the
    reserved words, both compared case-insensitively.
    """
    if not isinstance(name, str):
        return False

    plain = matches(name, patterns.table) and len(name) >= patterns.table_min_length
    if not plain and not matches(name, patterns.bracket_table):
        return False

    lowered = name.lower()
    if patterns.reserved_infix and patterns.reserved_infix.lower() in lowered:
        return False
    if lowered in {reserved.lower() for reserved in patterns.reserved_names}:
        return False

    return True


def validate_table_name(name: object, patterns: ValidationPatterns = DEFAULT_PATTERNS) -> None:
    """
    Raises:
        InvalidTableNameError: when `name` is not an allowed table identifier.
    """
    if not is_valid_table_name(name, patterns):
        logger.info("validator.invalid_table_name", extra={"table_name": repr(name)[:100]})
        raise InvalidTableNameError()


__all__ = [
    "matches",
    "validate_field",
    "validate_name",
    "validate_username",
    "validate_email",
    "validate_entry",
    "is_valid_table_name",
    "validate_table_name",
]
