"""Display-tree projection of the browser model."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Protocol, assert_never

from event_browser.core.router import page_url
from event_browser.core.state import Model
from event_browser.models.events import DetailTab, Event, EventDetail, PaginationLinks
from event_browser.models.messages import (
    EventDetailMsg,
    InternalUrl,
    LinkClicked,
    Msg,
    PageRequested,
    SelectTab,
)
from event_browser.models.pages import ALL_STREAMS, BrowseEvents, NotFound, ShowEvent

PAGINATION_ORDER = ("first", "prev", "next", "last")


@dataclass(frozen=True, slots=True)
class Node:
    """One element of the display tree."""

    kind: str
    text: str | None = None
    href: str | None = None
    on_click: Msg | None = None
    children: tuple[Node, ...] = field(default=())

    def find_all(self, kind: str) -> list[Node]:
        """Return descendants (and self) of `kind` in document order."""
        found = [self] if self.kind == kind else []
        for child in self.children:
            found.extend(child.find_all(kind))
        return found


class Renderer(Protocol):
    """Pure projection from model to display tree."""

    def __call__(self, model: Model) -> Node:
        """Render the whole app."""


def view(model: Model) -> Node:
    return Node(
        "app",
        children=(
            Node("header", children=(Node("link", text="Event Store", href="#/"),)),
            Node("main", children=(_main_view(model),)),
            Node("footer", text=f"RES version {model.flags.res_version}"),
        ),
    )


def _main_view(model: Model) -> Node:
    page = model.page
    match page:
        case BrowseEvents(stream_id=stream_id):
            return browse_events_view(stream_id, model)
        case ShowEvent(event_id=event_id):
            return show_event_view(event_id, model.event)
        case NotFound():
            return Node("not_found", text="404 - Page not found")
        case _:
            assert_never(page)


def browse_events_view(stream_id: str, model: Model) -> Node:
    title = "All events" if stream_id == ALL_STREAMS else f"Events in {stream_id}"
    items = model.events.items
    listing = (
        Node("empty", text="No items")
        if not items
        else Node("table", children=tuple(event_row(event) for event in items))
    )
    return Node(
        "browser",
        children=(
            Node("title", text=title),
            pagination_view(model.events.links),
            listing,
        ),
    )


def pagination_view(links: PaginationLinks) -> Node:
    """Render one control per present link; absent links get no control."""
    controls = []
    for name in PAGINATION_ORDER:
        link = getattr(links, name)
        if link is None:
            continue
        controls.append(Node("button", text=name, on_click=PageRequested(link)))
    return Node("pagination", children=tuple(controls))


def event_row(event: Event) -> Node:
    href = page_url(ShowEvent(event.event_id))
    return Node(
        "row",
        href=href,
        on_click=LinkClicked(InternalUrl(href)),
        children=(
            Node("cell", text=event.event_type),
            Node("cell", text=event.event_id),
            Node("cell", text=event.created_at),
        ),
    )


def show_event_view(event_id: str, detail: EventDetail | None) -> Node:
    if detail is None:
        return Node("event", children=(Node("loading", text=f"Loading {event_id}"),))
    event = detail.event
    tabs = tuple(
        Node(
            "tab_active" if tab is detail.tab else "tab",
            text=tab.value,
            on_click=EventDetailMsg(SelectTab(tab)),
        )
        for tab in DetailTab
    )
    return Node(
        "event",
        children=(
            Node("title", text=event.event_type),
            Node("field", text=f"Event id: {event.event_id}"),
            Node("field", text=f"Created at: {event.created_at}"),
            Node("tabs", children=tabs),
            Node("code", text=detail.raw_document),
        ),
    )


def render_text(node: Node) -> str:
    """Project a display tree to plain text, one element per line."""
    return "\n".join(_lines(node)) + "\n"


def _lines(node: Node) -> Iterator[str]:
    match node.kind:
        case "row":
            yield " | ".join(child.text or "" for child in node.children) + f"  ({node.href})"
        case "pagination" | "tabs":
            if node.children:
                yield " ".join(
                    f"[*{c.text}*]" if c.kind == "tab_active" else f"[{c.text}]"
                    for c in node.children
                )
        case _:
            if node.text is not None:
                yield from node.text.splitlines() or [""]
            for child in node.children:
                yield from _lines(child)
