"""Messages consumed by the browser state machine."""

from __future__ import annotations

from dataclasses import dataclass

from event_browser.core.errors import FetchError
from event_browser.models.events import DetailTab, Event, PaginatedList


@dataclass(frozen=True)
class Ok[T]:
    """Successful outcome."""

    value: T


@dataclass(frozen=True)
class Err[E]:
    """Failed outcome."""

    error: E


type Result[T, E] = Ok[T] | Err[E]


@dataclass(frozen=True, slots=True)
class InternalUrl:
    url: str


@dataclass(frozen=True, slots=True)
class ExternalUrl:
    url: str


type UrlRequest = InternalUrl | ExternalUrl


@dataclass(frozen=True, slots=True)
class SelectTab:
    """Switch the raw document shown for the opened event."""

    tab: DetailTab


type DetailMsg = SelectTab


@dataclass(frozen=True, slots=True)
class EventsFetched:
    result: Result[PaginatedList[Event], FetchError]


@dataclass(frozen=True, slots=True)
class EventFetched:
    result: Result[Event, FetchError]


@dataclass(frozen=True, slots=True)
class UrlChanged:
    url: str


@dataclass(frozen=True, slots=True)
class LinkClicked:
    request: UrlRequest


@dataclass(frozen=True, slots=True)
class PageRequested:
    """Follow a pagination link exactly as the server supplied it."""

    link: str


@dataclass(frozen=True, slots=True)
class EventDetailMsg:
    inner: DetailMsg


type Msg = (
    EventsFetched
    | EventFetched
    | UrlChanged
    | LinkClicked
    | PageRequested
    | EventDetailMsg
)
