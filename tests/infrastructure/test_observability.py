"""JSON log formatter: base fields plus known extras."""

import json
import logging

from campspot.infrastructure.observability import JSONFormatter


def _record(**extra):
    record = logging.LogRecord(
        "campspot.test", logging.INFO, __file__, 1, "Booking confirmed", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "campspot.test"
    assert log["message"] == "Booking confirmed"
    assert "timestamp" in log


def test_json_formatter_includes_known_extras_only():
    log = json.loads(JSONFormatter().format(
        _record(user_id=4, camping_spot_id=9, unrelated="x"),
    ))
    assert log["user_id"] == 4
    assert log["camping_spot_id"] == 9
    assert "unrelated" not in log


def test_json_formatter_includes_email_extra():
    log = json.loads(JSONFormatter().format(_record(email="olivia@example.com")))
    assert log["email"] == "olivia@example.com"
