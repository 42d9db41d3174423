"""Page variants addressable by the browser URL."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

ALL_STREAMS: Final = "all"


@dataclass(frozen=True, slots=True)
class BrowseEvents:
    """List events of one stream; `ALL_STREAMS` means no stream filter."""

    stream_id: str


@dataclass(frozen=True, slots=True)
class ShowEvent:
    """Show a single event."""

    event_id: str


@dataclass(frozen=True, slots=True)
class NotFound:
    """URL did not resolve to any page."""


type Page = BrowseEvents | ShowEvent | NotFound
