"""Fragment-based routing between browser URLs and pages.

The app is served as a single-page shell, so the URL fragment is read as the
effective application path: `http://host/res#/streams/Order-1` routes the same
way a plain `/streams/Order-1` path would.
"""

from __future__ import annotations

import re
from urllib.parse import quote, unquote_to_bytes, urlsplit

from event_browser.core.errors import RouteDecodeError
from event_browser.models.pages import ALL_STREAMS, BrowseEvents, NotFound, Page, ShowEvent

# encodeURIComponent leaves these unescaped in addition to `A-Za-z0-9_.-~`.
_COMPONENT_SAFE = "!*'()"
_BROKEN_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def fragment_path(url: str) -> str:
    """Return the fragment of `url`, used in place of its path."""
    return urlsplit(url).fragment


def path_segments(path: str) -> list[str]:
    segments = path.split("/")
    if segments and segments[0] == "":
        segments = segments[1:]
    if segments and segments[-1] == "":
        segments = segments[:-1]
    return segments


def percent_encode(value: str) -> str:
    return quote(value, safe=_COMPONENT_SAFE)


def percent_decode(segment: str) -> str:
    """Strictly decode one path segment.

    Raises `RouteDecodeError` on malformed escapes or non UTF-8 bytes.
    """
    if _BROKEN_ESCAPE.search(segment):
        raise RouteDecodeError(segment)
    try:
        return unquote_to_bytes(segment).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise RouteDecodeError(segment) from exc


def parse(url: str) -> Page | None:
    """Parse a browser URL into a page.

    Returns `None` when no route matches and `NotFound` when a route matches
    but its identifier cannot be decoded.
    """
    segments = path_segments(fragment_path(url))

    if not segments:
        return BrowseEvents(ALL_STREAMS)

    if len(segments) != 2:
        return None

    prefix, raw_id = segments
    if prefix not in {"streams", "events"}:
        return None

    try:
        identifier = percent_decode(raw_id)
    except RouteDecodeError:
        return NotFound()

    if prefix == "streams":
        return BrowseEvents(identifier)
    return ShowEvent(identifier)


def route(url: str) -> Page:
    """Resolve a URL to exactly one page."""
    page = parse(url)
    if page is None:
        return NotFound()
    return page


def page_url(page: Page) -> str:
    """Build the in-app href addressing `page`."""
    match page:
        case BrowseEvents(stream_id=stream_id):
            if stream_id == ALL_STREAMS:
                return "#/"
            return f"#/streams/{percent_encode(stream_id)}"
        case ShowEvent(event_id=event_id):
            return f"#/events/{percent_encode(event_id)}"
        case NotFound():
            msg = "NotFound page has no URL"
            raise ValueError(msg)
