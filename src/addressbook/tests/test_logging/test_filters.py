# src/addressbook/tests/test_logging/test_filters.py
import logging

from addressbook.core.logging.filters import (
    ContextFilter,
    get_log_context,
    reset_log_context,
    set_log_context,
)


def make_record():
    # name, level, pathname, lineno, msg, args, exc_info
    return logging.LogRecord("test", logging.INFO, __file__, 1, "hello %s", ("world",), None)


def test_context_filter_defaults_to_dash():
    rec = make_record()
    f = ContextFilter()
    assert f.filter(rec) is True
    assert rec.command == "-"  # fallback sentinel
    assert rec.table == "-"


def test_context_filter_uses_contextvar():
    rec = make_record()
    token = set_log_context(command="add_user", table="reports")
    try:
        ContextFilter().filter(rec)
    finally:
        reset_log_context(token)
    assert rec.command == "add_user"
    assert rec.table == "reports"


def test_context_filter_respects_record_extra():
    rec = make_record()
    rec.table = "explicit"
    token = set_log_context(table="from-context")
    try:
        ContextFilter().filter(rec)
    finally:
        reset_log_context(token)
    # record.table keeps the explicit value (respect extra)
    assert rec.table == "explicit"


def test_nested_context_merges_and_resets():
    outer = set_log_context(command="import_csv")
    inner = set_log_context(table="reports")
    assert get_log_context() == {"command": "import_csv", "table": "reports"}
    reset_log_context(inner)
    assert get_log_context() == {"command": "import_csv"}
    reset_log_context(outer)
    assert get_log_context() == {}

