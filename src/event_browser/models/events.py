"""Event domain models decoded from the Event API."""

from __future__ import annotations

from enum import StrEnum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Event(BaseModel):
    """One stored event as shown by the browser.

    `raw_data` and `raw_metadata` hold the JSON documents already serialized
    with 2-space indentation; their nested shape is never inspected.
    """

    model_config = ConfigDict(frozen=True)

    event_type: str
    event_id: str
    created_at: str
    raw_data: str
    raw_metadata: str


class PaginationLinks(BaseModel):
    """Server-supplied links to neighbouring pages of a collection."""

    model_config = ConfigDict(frozen=True)

    next: str | None = None
    prev: str | None = None
    first: str | None = None
    last: str | None = None


class PaginatedList(BaseModel, Generic[T]):
    """One page of items in server order plus its pagination links."""

    model_config = ConfigDict(frozen=True)

    items: tuple[T, ...] = ()
    links: PaginationLinks = Field(default_factory=PaginationLinks)


class DetailTab(StrEnum):
    """Raw JSON document displayed for an opened event."""

    DATA = "data"
    METADATA = "metadata"


class EventDetail(BaseModel):
    """View state of one opened event."""

    model_config = ConfigDict(frozen=True)

    event: Event
    tab: DetailTab = DetailTab.DATA

    @property
    def raw_document(self) -> str:
        if self.tab is DetailTab.METADATA:
            return self.event.raw_metadata
        return self.event.raw_data


def empty_events() -> PaginatedList[Event]:
    """Return the page shown before any stream page has been fetched."""
    return PaginatedList[Event]()
