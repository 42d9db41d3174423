from __future__ import annotations

import json

import pytest

from event_browser.observability import configure_logging, get_logger


def test_json_logging_renders_structured_lines(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("INFO", json=True)

    get_logger("event_browser.tests").info("fetch_failed", category="http_status")
    get_logger("event_browser.tests").debug("message_applied")

    lines = [line for line in capsys.readouterr().err.splitlines() if line.strip()]
    assert len(lines) == 1
    payload = json.loads(lines[0])
    assert payload["event"] == "fetch_failed"
    assert payload["category"] == "http_status"
    assert payload["level"] == "info"
    assert payload["logger"] == "event_browser.tests"
    assert "timestamp" in payload
