"""Structured Logging: JSON formatter output and idempotent setup."""

import json
import logging

from storefront.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "storefront.services.user_store", logging.WARNING, __file__, 1,
        "User id %s already taken", (6,), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_core_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "storefront.services.user_store"
    assert payload["message"] == "User id 6 already taken"
    assert "timestamp" in payload


def test_json_formatter_surfaces_known_extras_only():
    payload = json.loads(JSONFormatter().format(
        _record(collection="users", record_key=6, attempt=1, secret="x"),
    ))
    assert payload["collection"] == "users"
    assert payload["record_key"] == 6
    assert payload["attempt"] == 1
    assert "secret" not in payload


def test_setup_logging_is_idempotent():
    setup_logging("DEBUG", "json")
    setup_logging("INFO", "text")
    try:
        ours = [h for h in logging.root.handlers if h.get_name() == "storefront"]
        assert len(ours) == 1
        assert not isinstance(ours[0].formatter, JSONFormatter)
        assert logging.root.level == logging.INFO
    finally:
        for handler in ours:
            logging.root.removeHandler(handler)
