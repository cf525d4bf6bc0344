"""JSONFormatter — structured log lines with ledger extra fields."""

import json
import logging

from merchcoin.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "merchcoin.test", logging.INFO, __file__, 1, "bought %s", ("cup",), None,
    )
    record.__dict__.update(extra)
    return record


def test_base_fields_present():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "merchcoin.test"
    assert payload["message"] == "bought cup"
    assert "timestamp" in payload


def test_ledger_extras_surface_and_unknown_extras_do_not():
    payload = json.loads(JSONFormatter().format(
        _record(account_id=7, item_name="cup", failure_kind="item_not_found", noise=1),
    ))
    assert payload["account_id"] == 7
    assert payload["item_name"] == "cup"
    assert payload["failure_kind"] == "item_not_found"
    assert "noise" not in payload
