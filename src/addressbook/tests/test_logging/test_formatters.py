# src/addressbook/tests/test_logging/test_formatters.py
import json
import logging
import sys

from addressbook.core.logging.formatters import ColorFormatter, JsonFormatter


def make_record(exc_info=None):
    # create a LogRecord that simulates formatting with args
    return logging.LogRecord("addressbook", logging.INFO, __file__, 10, "hello %s", ("tester",), exc_info)


def test_json_formatter_basic_fields():
    rec = make_record()
    # attach an extra (simulate extra param)
    rec.custom = "value"
    rec.command = "show_users"
    rec.table = "reports"
    fmt = JsonFormatter(env="testing", service="svc")
    data = json.loads(fmt.format(rec))
    # core assertions
    assert data["message"] == "hello tester"
    assert data["level"] == "INFO"
    assert data["service"] == "svc"
    assert data["env"] == "testing"
    assert "timestamp" in data
    assert data["command"] == "show_users"
    assert data["table"] == "reports"
    assert data["custom"] == "value"
    assert "version" in data
    # standard LogRecord attributes are not repeated as extras
    assert "args" not in data and "msg" not in data


def test_json_formatter_without_context_fields():
    data = json.loads(JsonFormatter().format(make_record()))
    assert data["command"] == "-"
    assert data["table"] == "-"


def test_json_formatter_non_serializable_extra():
    rec = make_record()

    class X:
        def __repr__(self):
            return "<X>"

    rec.obj = X()
    data = json.loads(JsonFormatter(env="dev", service="svc").format(rec))
    # non-serializable obj should be stringified
    assert isinstance(data["obj"], str)


def test_json_formatter_includes_traceback():
    try:
        raise ValueError("bad row")
    except ValueError:
        rec = make_record(sys.exc_info())
    data = json.loads(JsonFormatter().format(rec))
    assert "ValueError: bad row" in data["exc_info"]


def test_color_formatter_line_shape():
    rec = make_record()
    rec.table = "reports"
    out = ColorFormatter().format(rec)
    assert "INFO" in out
    assert "reports" in out
    assert out.endswith("| hello tester")
