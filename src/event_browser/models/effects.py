"""Follow-up effects requested by the state machine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FetchPage:
    """Fetch a page of a stream and report it as `EventsFetched`."""

    url: str


@dataclass(frozen=True, slots=True)
class FetchOne:
    """Fetch one event and report it as `EventFetched`."""

    url: str


@dataclass(frozen=True, slots=True)
class PushUrl:
    """Push an in-app URL onto the navigation history."""

    url: str


@dataclass(frozen=True, slots=True)
class LoadUrl:
    """Leave the app and load an external URL."""

    url: str


type Effect = FetchPage | FetchOne | PushUrl | LoadUrl
