"""Command line entrypoint: open a browser URL and print the rendered page."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from urllib.parse import urljoin

import httpx

from event_browser.api.client import open_event_api
from event_browser.config import Flags, load_flags
from event_browser.core.errors import ConfigError
from event_browser.core.renderer import PAGINATION_ORDER, Node, render_text
from event_browser.core.runtime import BrowserRuntime
from event_browser.models.events import DetailTab
from event_browser.models.messages import EventDetailMsg, SelectTab
from event_browser.observability import configure_logging, get_logger

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse an event store from the terminal")
    parser.add_argument(
        "url",
        nargs="?",
        default="#/",
        help="Browser URL or fragment to open, e.g. '#/streams/Order-1'",
    )
    parser.add_argument("--flags-file", type=Path, help="JSON file with startup flags")
    parser.add_argument("--root-url", help="Base URL of the browser app")
    parser.add_argument("--streams-url", help="Event API streams endpoint")
    parser.add_argument("--events-url", help="Event API events endpoint")
    parser.add_argument("--res-version", help="Version string shown in the footer")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request timeout in seconds (default: wait indefinitely)",
    )
    parser.add_argument(
        "--follow",
        action="append",
        default=[],
        choices=PAGINATION_ORDER,
        help="Pagination link to follow after loading (repeat for multiple)",
    )
    parser.add_argument(
        "--tab",
        choices=[tab.value for tab in DetailTab],
        help="Raw document shown for an opened event",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    return parser


def _pagination_control(tree: Node, name: str) -> Node | None:
    for control in tree.find_all("button"):
        if control.text == name:
            return control
    return None


async def browse(
    flags: Flags,
    url: str,
    *,
    follow: list[str] | None = None,
    tab: DetailTab | None = None,
    timeout_seconds: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Open `url`, apply the requested interactions and return the page as text."""
    async with open_event_api(
        flags,
        timeout_seconds=timeout_seconds,
        transport=transport,
    ) as client:
        runtime = BrowserRuntime(flags, client)
        await runtime.start(urljoin(flags.root_url, url))
        await runtime.run_until_idle()

        for name in follow or []:
            control = _pagination_control(runtime.render(), name)
            if control is None:
                logger.warning("pagination_link_missing", link=name)
                break
            runtime.click(control)
            await runtime.run_until_idle()

        if tab is not None:
            runtime.dispatch(EventDetailMsg(SelectTab(tab)))
            await runtime.run_until_idle()

        return render_text(runtime.render())


def main(
    argv: list[str] | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level.upper(), json=args.json_logs)

    try:
        flags = load_flags(
            args.flags_file,
            overrides={
                "root_url": args.root_url,
                "streams_url": args.streams_url,
                "events_url": args.events_url,
                "res_version": args.res_version,
            },
        )
    except ConfigError as exc:
        sys.stderr.write(f"{exc}\n")
        return 2

    output = asyncio.run(
        browse(
            flags,
            args.url,
            follow=args.follow,
            tab=DetailTab(args.tab) if args.tab else None,
            timeout_seconds=args.timeout,
            transport=transport,
        )
    )
    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
