"""Logging — JSON lines, idempotent setup, access log per request (failures included)."""

import json
import logging
from types import SimpleNamespace

import pytest

from koinonia.infrastructure.observability import (
    ACCESS_LOGGER, JSONFormatter, log_requests, setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "koinonia.test", logging.INFO, __file__, 1, "hello %s", ("world",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_set_fields_only():
    line = JSONFormatter().format(_record(event_id=3, user_id=None))
    data = json.loads(line)
    assert data["message"] == "hello world"
    assert data["level"] == "INFO"
    assert data["logger"] == "koinonia.test"
    assert data["event_id"] == 3
    assert "user_id" not in data
    assert "timestamp" in data


def test_json_formatter_keeps_non_ascii():
    record = logging.LogRecord(
        "koinonia.test", logging.INFO, __file__, 1, "Inscrição", (), None,
    )
    assert "Inscrição" in JSONFormatter().format(record)


def test_setup_logging_does_not_stack_handlers():
    root = logging.getLogger()
    before_level = root.level
    try:
        first = setup_logging("WARNING", "json")
        second = setup_logging("INFO", "text")
        assert first not in root.handlers
        assert second in root.handlers
        assert root.level == logging.INFO
        assert not isinstance(second.formatter, JSONFormatter)
    finally:
        root.removeHandler(second)
        root.setLevel(before_level)


async def test_each_request_is_access_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger=ACCESS_LOGGER):
        res = await client.get("/events/abc")
    assert res.status_code == 400
    access = [r for r in caplog.records if r.name == ACCESS_LOGGER]
    assert len(access) == 1
    assert access[0].path == "/events/abc"
    assert access[0].status_code == 400
    assert access[0].duration_ms >= 0


async def test_failed_request_is_access_logged_as_500(caplog):
    request = SimpleNamespace(method="GET", url=SimpleNamespace(path="/boom"))

    async def call_next(_request):
        raise RuntimeError("boom")

    with caplog.at_level(logging.INFO, logger=ACCESS_LOGGER):
        with pytest.raises(RuntimeError):
            await log_requests(request, call_next)
    access = [r for r in caplog.records if r.name == ACCESS_LOGGER]
    assert len(access) == 1
    assert access[0].path == "/boom"
    assert access[0].status_code == 500
