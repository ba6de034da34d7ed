"""
Logging filters.

Context filter and helpers
--------------------------
The shell and the importer run one command at a time, and every log line written while a
command runs should say which command and which table it belongs to. The context lives in
a `contextvars.ContextVar` holding a small dict; `ContextFilter` copies it onto each
LogRecord so formatters can reference `%(table)s` and `%(command)s` without KeyErrors.

Usage (dictConfig):
    "filters": {"context": {"()": ContextFilter}},
    "handlers": {"console": {"class": "logging.StreamHandler", "filters": ["context"], ...}}

Usage (code):
    token = set_log_context(command="add_user", table=repo.current_table)
    try:
        ...
    finally:
        reset_log_context(token)
"""

import logging
from logging import LogRecord
import contextvars
from typing import Any

CONTEXT_FIELDS = ("command", "table")

_log_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar(
    "log_context", default=None
)


def set_log_context(**fields: Any):
    """
    Merge `fields` into the current log context.

    Returns:
        token: contextvars.Token which can be passed to reset_log_context(token)
    """
    merged = dict(_log_context.get() or {})
    merged.update(fields)
    return _log_context.set(merged)


def reset_log_context(token) -> None:
    """Restore the context saved by set_log_context()."""
    _log_context.reset(token)


def get_log_context() -> dict[str, Any]:
    """Return a copy of the current log context (empty dict when nothing is set)."""
    return dict(_log_context.get() or {})


class ContextFilter(logging.Filter):
    """
    Guarantee every LogRecord carries the CONTEXT_FIELDS attributes.

    Precedence per field: a value passed explicitly via `extra`, then the context var,
    then the sentinel "-". Always returns True; it only annotates.
    """

    def filter(self, record: LogRecord) -> bool:
        context = _log_context.get() or {}
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None) or context.get(field) or "-"
            setattr(record, field, value)
        return True

