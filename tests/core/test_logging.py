"""Tests for JSON logging."""

import json
import logging
import sys
from io import StringIO

from prerender.core.logging import _JsonFormatter, get_logger, request_id_var, setup_logging


def test_setup_logging_installs_single_json_handler():
    """Repeated setup does not stack handlers."""
    setup_logging()
    root = logging.getLogger()
    count = sum(isinstance(h.formatter, _JsonFormatter) for h in root.handlers)
    setup_logging("DEBUG")
    assert sum(isinstance(h.formatter, _JsonFormatter) for h in root.handlers) == count == 1
    assert root.level == logging.DEBUG
    root.setLevel(logging.INFO)


def test_get_logger_returns_logger():
    logger = get_logger("test")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "test"


def test_json_formatter_produces_json():
    """Log lines are single JSON objects."""
    logger = get_logger("test.json")
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(_JsonFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

    try:
        logger.info("Cache hit for: https://example.com")
    finally:
        logger.removeHandler(handler)

    parsed = json.loads(stream.getvalue().strip())
    assert parsed["level"] == "INFO"
    assert parsed["logger"] == "test.json"
    assert parsed["msg"] == "Cache hit for: https://example.com"
    assert "ts" in parsed


def test_json_formatter_includes_exception():
    formatter = _JsonFormatter()
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())
    parsed = json.loads(formatter.format(record))
    assert "RuntimeError: boom" in parsed["exc_info"]


def test_json_formatter_adds_request_context():
    """Request id comes from the context; known extras are copied through."""
    formatter = _JsonFormatter()
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "Cache hit", None, None)
    record.url = "https://example.com"
    record.cache = "HIT"

    token = request_id_var.set("req-42")
    try:
        parsed = json.loads(formatter.format(record))
    finally:
        request_id_var.reset(token)

    assert parsed["request_id"] == "req-42"
    assert parsed["url"] == "https://example.com"
    assert parsed["cache"] == "HIT"


def test_json_formatter_omits_request_id_outside_requests():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "startup", None, None)
    assert "request_id" not in json.loads(_JsonFormatter().format(record))
