"""Navigation capability handed to the state machine."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol
from urllib.parse import urljoin, urlsplit

from event_browser.models.messages import ExternalUrl, InternalUrl, LinkClicked
from event_browser.observability import get_logger

logger = get_logger(__name__)


class Navigator(Protocol):
    """Opaque handle used only to request URL changes."""

    def push_url(self, url: str) -> None:
        """Push an in-app URL and notify the app of the change."""

    def load_url(self, url: str) -> None:
        """Leave the app for an external URL."""


class HistoryNavigator:
    """In-process navigation history.

    `push_url` resolves the target against the current URL, records it and
    reports the resolved URL through `on_url_change`.
    """

    def __init__(
        self,
        initial_url: str,
        *,
        on_url_change: Callable[[str], None] | None = None,
    ) -> None:
        self._entries: list[str] = [initial_url]
        self._loaded: list[str] = []
        self._on_url_change = on_url_change

    @property
    def current_url(self) -> str:
        return self._entries[-1]

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def loaded(self) -> list[str]:
        """External URLs requested through `load_url`."""
        return list(self._loaded)

    def listen(self, on_url_change: Callable[[str], None]) -> None:
        self._on_url_change = on_url_change

    def push_url(self, url: str) -> None:
        resolved = urljoin(self.current_url, url)
        self._entries.append(resolved)
        logger.info("navigation_push", url=resolved)
        if self._on_url_change is not None:
            self._on_url_change(resolved)

    def load_url(self, url: str) -> None:
        self._loaded.append(url)
        logger.info("navigation_load", url=url)


def classify_link(current_url: str, href: str) -> LinkClicked:
    """Classify a clicked href as in-app or external relative to `current_url`."""
    resolved = urlsplit(urljoin(current_url, href))
    current = urlsplit(current_url)
    if (resolved.scheme, resolved.netloc) == (current.scheme, current.netloc):
        return LinkClicked(InternalUrl(href))
    return LinkClicked(ExternalUrl(href))
