"""Single-owner message loop driving the browser state machine."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any, assert_never

from event_browser.api.client import EventApiClient
from event_browser.config import Flags
from event_browser.core.navigation import HistoryNavigator, Navigator
from event_browser.core.renderer import Node, Renderer, view
from event_browser.core.state import Model, init, update
from event_browser.models.effects import Effect, FetchOne, FetchPage, LoadUrl, PushUrl
from event_browser.models.messages import Err, EventFetched, EventsFetched, Msg, UrlChanged
from event_browser.observability import get_logger

logger = get_logger(__name__)


class BrowserRuntime:
    """Own the model, apply messages one at a time and execute effects.

    Fetches run as independent tasks that post their result message back on
    the queue. Nothing is cancelled when superseded, so a late response is
    applied to whatever the current model is.
    """

    def __init__(
        self,
        flags: Flags,
        client: EventApiClient,
        *,
        navigator: Navigator | None = None,
        renderer: Renderer = view,
    ) -> None:
        self._flags = flags
        self._client = client
        self._navigator = navigator
        self._renderer = renderer
        self._queue: asyncio.Queue[Msg] = asyncio.Queue()
        self._tasks: set[asyncio.Task[None]] = set()
        self._model: Model | None = None

    @property
    def model(self) -> Model:
        if self._model is None:
            msg = "runtime has not been started"
            raise RuntimeError(msg)
        return self._model

    async def start(self, url: str) -> Model:
        """Resolve the initial URL and schedule its fetch."""
        navigator = self._navigator or HistoryNavigator(url)
        if isinstance(navigator, HistoryNavigator):
            navigator.listen(self._on_url_change)
        model, effect = init(self._flags, url, navigator)
        self._model = model
        self._execute(effect)
        return model

    def dispatch(self, msg: Msg) -> None:
        self._queue.put_nowait(msg)

    def click(self, node: Node) -> None:
        """Emit the message attached to a rendered control."""
        if node.on_click is None:
            msg = f"{node.kind} node is not clickable"
            raise ValueError(msg)
        self.dispatch(node.on_click)

    def render(self) -> Node:
        return self._renderer(self.model)

    async def run_until_idle(self) -> Model:
        """Process messages until the queue is empty and no fetch is in flight."""
        while True:
            if not self._queue.empty():
                self._apply(self._queue.get_nowait())
                continue
            pending = {task for task in self._tasks if not task.done()}
            if not pending:
                return self.model
            await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)

    async def run(self) -> None:
        """Process messages forever."""
        while True:
            msg = await self._queue.get()
            self._apply(msg)

    def _apply(self, msg: Msg) -> None:
        if isinstance(msg, EventsFetched | EventFetched) and isinstance(msg.result, Err):
            error = msg.result.error
            logger.warning(
                "fetch_failed",
                url=error.url,
                category=error.category,
                error=str(error),
            )
        model, effect = update(msg, self.model)
        self._model = model
        logger.debug(
            "message_applied",
            message=type(msg).__name__,
            page=type(model.page).__name__,
        )
        self._execute(effect)

    def _execute(self, effect: Effect | None) -> None:
        match effect:
            case None:
                return
            case FetchPage(url=url):
                self._spawn(self._client.fetch_page(url))
            case FetchOne(url=url):
                self._spawn(self._client.fetch_one(url))
            case PushUrl(url=url):
                self.model.navigation.push_url(url)
            case LoadUrl(url=url):
                self.model.navigation.load_url(url)
            case _:
                assert_never(effect)

    def _spawn(self, request: Coroutine[Any, Any, Msg]) -> None:
        task = asyncio.create_task(self._post(request))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _post(self, request: Coroutine[Any, Any, Msg]) -> None:
        try:
            msg = await request
        except Exception:  # noqa: BLE001
            logger.exception("fetch_crashed")
            return
        self.dispatch(msg)

    def _on_url_change(self, url: str) -> None:
        self.dispatch(UrlChanged(url))
