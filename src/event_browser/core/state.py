"""Browser model and its message-driven update function."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import assert_never

from event_browser.api.client import build_url
from event_browser.config import Flags
from event_browser.core.event_detail import detail_update, open_event
from event_browser.core.navigation import Navigator
from event_browser.core.router import route
from event_browser.models.effects import Effect, FetchOne, FetchPage, LoadUrl, PushUrl
from event_browser.models.events import Event, EventDetail, PaginatedList, empty_events
from event_browser.models.messages import (
    Err,
    EventDetailMsg,
    EventFetched,
    EventsFetched,
    ExternalUrl,
    InternalUrl,
    LinkClicked,
    Msg,
    Ok,
    PageRequested,
    UrlChanged,
)
from event_browser.models.pages import BrowseEvents, NotFound, Page, ShowEvent


@dataclass(frozen=True, slots=True)
class Model:
    """Complete browser state; replaced, never mutated, by `update`."""

    flags: Flags
    navigation: Navigator = field(compare=False, repr=False)
    page: Page = field(default_factory=NotFound)
    events: PaginatedList[Event] = field(default_factory=empty_events)
    event: EventDetail | None = None


type Transition = tuple[Model, Effect | None]


def init(flags: Flags, url: str, navigation: Navigator) -> Transition:
    """Build the initial model for `url` and its first fetch."""
    return resolve_url(Model(flags=flags, navigation=navigation), url)


def resolve_url(model: Model, url: str) -> Transition:
    """Point the model at the page addressed by `url` and request its data.

    Runs identically at startup and on every URL change.
    """
    page = route(url)
    match page:
        case BrowseEvents(stream_id=stream_id):
            target = build_url(model.flags.streams_url, stream_id)
            return replace(model, page=page), FetchPage(target)
        case ShowEvent(event_id=event_id):
            target = build_url(model.flags.events_url, event_id)
            return replace(model, page=page), FetchOne(target)
        case NotFound():
            return replace(model, page=page), None
        case _:
            assert_never(page)


def update(msg: Msg, model: Model) -> Transition:
    match msg:
        case EventsFetched(result=Ok(value=events)):
            return replace(model, events=events), None
        case EventsFetched(result=Err()):
            return model, None
        case EventFetched(result=Ok(value=event)):
            return replace(model, event=open_event(event)), None
        case EventFetched(result=Err()):
            return model, None
        case UrlChanged(url=url):
            return resolve_url(model, url)
        case LinkClicked(request=InternalUrl(url=url)):
            return model, PushUrl(url)
        case LinkClicked(request=ExternalUrl(url=url)):
            return model, LoadUrl(url)
        case PageRequested(link=link):
            return model, FetchPage(link)
        case EventDetailMsg(inner=inner):
            if model.event is None:
                return model, None
            return replace(model, event=detail_update(inner, model.event)), None
        case _:
            assert_never(msg)
