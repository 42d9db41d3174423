"""Event API client producing state-machine messages."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from event_browser.config import Flags
from event_browser.core.decoders import decode_event_collection, decode_event_document
from event_browser.core.errors import FetchError, HttpStatusError, NetworkError
from event_browser.core.router import percent_encode
from event_browser.models.events import Event, PaginatedList
from event_browser.models.messages import Err, EventFetched, EventsFetched, Ok
from event_browser.observability import get_logger

JSON_API_MEDIA_TYPE = "application/vnd.api+json"

logger = get_logger(__name__)


def build_url(base: str, identifier: str) -> str:
    """Return the request target for one stream or event identifier."""
    return f"{base}/{percent_encode(identifier)}"


class EventApiClient:
    """Read-only GET access to stream pages and single events.

    In-flight requests are never cancelled; each call resolves on its own.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        root_url: str | None = None,
    ) -> None:
        self._http = http_client
        self._root_url = root_url

    async def fetch_page(self, url: str) -> EventsFetched:
        """GET a stream page and wrap the outcome as `EventsFetched`."""
        try:
            page = await self.get_page(url)
        except FetchError as exc:
            return EventsFetched(Err(exc))
        return EventsFetched(Ok(page))

    async def fetch_one(self, url: str) -> EventFetched:
        """GET one event and wrap the outcome as `EventFetched`."""
        try:
            event = await self.get_event(url)
        except FetchError as exc:
            return EventFetched(Err(exc))
        return EventFetched(Ok(event))

    async def get_page(self, url: str) -> PaginatedList[Event]:
        content = await self._get(url)
        return decode_event_collection(content, url=url)

    async def get_event(self, url: str) -> Event:
        content = await self._get(url)
        return decode_event_document(content, url=url)

    def resolve(self, url: str) -> str:
        """Resolve a possibly relative link against the root URL."""
        if self._root_url is None:
            return url
        return str(httpx.URL(self._root_url).join(url))

    async def _get(self, url: str) -> bytes:
        try:
            target = self.resolve(url)
            logger.debug("fetch_started", url=target)
            response = await self._http.get(target, headers={"Accept": JSON_API_MEDIA_TYPE})
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            message = str(exc) or "request timed out"
            raise NetworkError(message, category="network_timeout", url=url) from exc
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            message = f"http status {status_code}"
            raise HttpStatusError(message, status_code=status_code, url=url) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            message = str(exc) or type(exc).__name__
            raise NetworkError(message, category="transport_error", url=url) from exc
        return response.content


@asynccontextmanager
async def open_event_api(
    flags: Flags,
    *,
    timeout_seconds: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[EventApiClient]:
    """Yield a client bound to `flags.root_url` for the lifetime of the block."""
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds),
        transport=transport,
        follow_redirects=True,
    ) as http_client:
        yield EventApiClient(http_client, root_url=flags.root_url)
