"""State machine for an opened event."""

from __future__ import annotations

from typing import assert_never

from event_browser.models.events import Event, EventDetail
from event_browser.models.messages import DetailMsg, SelectTab


def open_event(event: Event) -> EventDetail:
    return EventDetail(event=event)


def detail_update(msg: DetailMsg, detail: EventDetail) -> EventDetail:
    match msg:
        case SelectTab(tab=tab):
            if detail.tab is tab:
                return detail
            return detail.model_copy(update={"tab": tab})
        case _:
            assert_never(msg)
