from __future__ import annotations

import httpx
import pytest

from event_browser.cli import main
from tests.support.event_api import EventApiStub
from tests.support.payloads import ROOT_URL

FLAG_ARGS = [
    "--root-url",
    ROOT_URL,
    "--streams-url",
    f"{ROOT_URL}/streams",
    "--events-url",
    f"{ROOT_URL}/events",
    "--res-version",
    "0.34.0",
]


def _transport() -> httpx.ASGITransport:
    return httpx.ASGITransport(app=EventApiStub.with_orders(3).create_app())


def test_cli_prints_first_page(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([*FLAG_ARGS, "#/"], transport=_transport()) == 0

    output = capsys.readouterr().out
    assert "All events" in output
    assert "[first] [next] [last]" in output
    assert "OrderPlaced | order-1 | 2020-01-01T00:00:00Z  (#/events/order-1)" in output
    assert "order-3" not in output
    assert output.endswith("RES version 0.34.0\n")


def test_cli_follows_pagination(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([*FLAG_ARGS, "#/", "--follow", "next"], transport=_transport()) == 0

    output = capsys.readouterr().out
    assert "order-3" in output
    assert "order-1" not in output


def test_cli_shows_event_metadata(capsys: pytest.CaptureFixture[str]) -> None:
    argv = [*FLAG_ARGS, "#/events/order-2", "--tab", "metadata"]

    assert main(argv, transport=_transport()) == 0

    output = capsys.readouterr().out
    assert "Event id: order-2" in output
    assert "[data] [*metadata*]" in output
    assert '"timestamp": "2020-01-02T00:00:00Z"' in output


def test_cli_rejects_missing_flags(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    for name in ("ROOT_URL", "STREAMS_URL", "EVENTS_URL", "RES_VERSION"):
        monkeypatch.delenv(f"EVENT_BROWSER_{name}", raising=False)

    assert main(["--root-url", ROOT_URL, "#/"]) == 2
    assert "Invalid flags" in capsys.readouterr().err
