# src/crud_gateway/tests/test_logging/test_formatters.py
import json
import sys
import logging

from crud_gateway.core.logging.formatters import ColorFormatter, JsonFormatter


def make_record(level=logging.INFO):
    return logging.LogRecord("crud_gateway.api", level, __file__, 10, "hello %s", ("tester",), None)


def test_json_formatter_basic_fields():
    rec = make_record()
    rec.pgcode = "23505"  # simulate extra=
    rec.request_id = "req-1"

    data = json.loads(JsonFormatter(env="testing", service="svc").format(rec))

    assert data["message"] == "hello tester"
    assert data["level"] == "INFO"
    assert data["logger"] == "crud_gateway.api"
    assert data["service"] == "svc"
    assert data["env"] == "testing"
    assert data["request_id"] == "req-1"
    assert data["pgcode"] == "23505"
    assert "timestamp" in data
    assert "version" in data


def test_json_formatter_non_serializable_extra():
    rec = make_record()

    class X:
        def __repr__(self):
            return "<X>"

    rec.obj = X()
    data = json.loads(JsonFormatter(env="dev", service="svc").format(rec))

    assert isinstance(data["obj"], str)


def test_json_formatter_includes_exception_text():
    try:
        raise ValueError("boom")
    except ValueError:
        rec = logging.LogRecord("crud_gateway", logging.ERROR, __file__, 1, "failed", (), None)
        rec.exc_info = sys.exc_info()

    data = json.loads(JsonFormatter(service="svc").format(rec))

    assert "ValueError: boom" in data["exc_info"]


def test_color_formatter_line_layout():
    rec = make_record(logging.WARNING)
    rec.request_id = "rid-9"

    line = ColorFormatter().format(rec)

    assert "WARNING" in line
    assert "crud_gateway.api" in line
    assert "rid-9" in line
    assert line.endswith("hello tester")
