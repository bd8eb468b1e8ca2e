# tests/test_ops.py
"""
Tests for logging formatters and health probes.
"""

import json
import logging
from decimal import Decimal

import pytest

from ops.logging_config import ConsoleFormatter, JsonFormatter, get_logging_config, record_context


def _record(**extra):
    record = logging.LogRecord("inventory.commands", logging.WARNING, __file__, 10, "Stock is negative", (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_record_context_only_returns_extras():
    assert record_context(_record(item_id=3)) == {"item_id": 3}
    assert record_context(_record()) == {}


def test_console_formatter_appends_context():
    line = ConsoleFormatter().format(_record(item_id=3, level_after=Decimal("-1.000")))
    assert line.endswith("Stock is negative | item_id=3 level_after=-1.000")


def test_json_formatter():
    payload = json.loads(JsonFormatter().format(_record(delta=Decimal("2.5"))))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "inventory.commands"
    assert payload["message"] == "Stock is negative"
    assert payload["context"] == {"delta": "2.5"}


def test_logging_config(monkeypatch):
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_FILE", "/tmp/ledgerbook.log")

    config = get_logging_config(debug=True)

    assert config["handlers"]["console"]["formatter"] == "console"
    assert config["loggers"][""]["handlers"] == ["console", "file"]
    assert config["loggers"]["accounting"] == {"level": "DEBUG", "propagate": True}
    assert get_logging_config(debug=False)["handlers"]["console"]["formatter"] == "json"


@pytest.mark.django_db
def test_readiness(client):
    response = client.get("/_health/ready")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ready"
    assert body["migrations"]["pending"] == []
