import json
import logging

from recordkit.core.context import reset_correlation_id, set_correlation_id
from recordkit.core.logging_config import JSONFormatter, setup_logging


def make_record(msg="hello %s", args=("world",), **extra):
    record = logging.LogRecord("recordkit.test", logging.INFO, __file__, 10, msg, args, None)
    record.__dict__.update(extra)
    return record


def test_json_formatter_fields():
    payload = json.loads(JSONFormatter().format(make_record()))

    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "recordkit.test"
    assert payload["correlationId"] == "n/a"


def test_json_formatter_merges_extra_and_correlation_id():
    token = set_correlation_id("abc123")
    try:
        payload = json.loads(JSONFormatter().format(make_record(record_type="Widget", identifier=object())))
    finally:
        reset_correlation_id(token)

    assert payload["correlationId"] == "abc123"
    assert payload["record_type"] == "Widget"
    # Non-JSON values are stringified
    assert isinstance(payload["identifier"], str)


def test_setup_logging_installs_json_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("WARNING")
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
