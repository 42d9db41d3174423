from __future__ import annotations

from event_browser.core.errors import HttpStatusError, NetworkError
from event_browser.core.navigation import HistoryNavigator
from event_browser.core.state import Model, init, update
from event_browser.models.effects import FetchOne, FetchPage, LoadUrl, PushUrl
from event_browser.models.events import DetailTab, EventDetail, PaginatedList, PaginationLinks
from event_browser.models.messages import (
    Err,
    EventDetailMsg,
    EventFetched,
    EventsFetched,
    ExternalUrl,
    InternalUrl,
    LinkClicked,
    Ok,
    PageRequested,
    SelectTab,
    UrlChanged,
)
from event_browser.models.pages import BrowseEvents, NotFound, ShowEvent
from tests.support.payloads import ROOT_URL, make_event, make_flags


def _init(url: str) -> tuple[Model, object]:
    return init(make_flags(), url, HistoryNavigator(url))


def _browsing_model() -> Model:
    model, _ = _init(f"{ROOT_URL}#/")
    return model


def test_init_at_root_fetches_all_stream() -> None:
    model, effect = _init(f"{ROOT_URL}#/")

    assert model.page == BrowseEvents("all")
    assert effect == FetchPage(f"{ROOT_URL}/streams/all")
    assert model.events.items == ()
    assert model.event is None


def test_init_at_stream_encodes_identifier() -> None:
    model, effect = _init(f"{ROOT_URL}#/streams/Order%201")

    assert model.page == BrowseEvents("Order 1")
    assert effect == FetchPage(f"{ROOT_URL}/streams/Order%201")


def test_init_at_event_fetches_one() -> None:
    model, effect = _init(f"{ROOT_URL}#/events/e-1")

    assert model.page == ShowEvent("e-1")
    assert effect == FetchOne(f"{ROOT_URL}/events/e-1")


def test_init_at_unknown_url_is_not_found_without_fetch() -> None:
    model, effect = _init(f"{ROOT_URL}#/nonsense")

    assert model.page == NotFound()
    assert effect is None


def test_events_fetched_replaces_events() -> None:
    page = PaginatedList(
        items=(make_event("1"), make_event("2")),
        links=PaginationLinks(next="/res/streams/all?page=2"),
    )

    model, effect = update(EventsFetched(Ok(page)), _browsing_model())

    assert [event.event_id for event in model.events.items] == ["1", "2"]
    assert model.events.links.next == "/res/streams/all?page=2"
    assert effect is None


def test_fetch_errors_leave_model_untouched() -> None:
    model = _browsing_model()
    error = NetworkError("boom", category="transport_error", url="http://x")

    for msg in (EventsFetched(Err(error)), EventFetched(Err(error))):
        updated, effect = update(msg, model)
        assert updated is model
        assert effect is None


def test_event_fetched_opens_detail_on_data_tab() -> None:
    model, _ = _init(f"{ROOT_URL}#/events/1")
    event = make_event("1")

    model, effect = update(EventFetched(Ok(event)), model)

    assert model.event == EventDetail(event=event, tab=DetailTab.DATA)
    assert effect is None


def test_url_changed_reruns_resolution() -> None:
    model, effect = update(UrlChanged(f"{ROOT_URL}#/events/e%2F1"), _browsing_model())

    assert model.page == ShowEvent("e/1")
    assert effect == FetchOne(f"{ROOT_URL}/events/e%2F1")


def test_url_changed_to_unknown_page() -> None:
    model, effect = update(UrlChanged(f"{ROOT_URL}#/streams/%zz"), _browsing_model())

    assert model.page == NotFound()
    assert effect is None


def test_link_clicks_request_navigation() -> None:
    model = _browsing_model()

    internal = update(LinkClicked(InternalUrl("#/events/1")), model)
    external = update(LinkClicked(ExternalUrl("https://example.com")), model)

    assert internal == (model, PushUrl("#/events/1"))
    assert external == (model, LoadUrl("https://example.com"))


def test_page_requested_follows_link_verbatim() -> None:
    link = "/res/streams/all?page=2&count=20%20"
    model = _browsing_model()

    updated, effect = update(PageRequested(link), model)

    assert updated is model
    assert effect == FetchPage(link)


def test_detail_message_without_event_is_ignored() -> None:
    model = _browsing_model()

    updated, effect = update(EventDetailMsg(SelectTab(DetailTab.METADATA)), model)

    assert updated is model
    assert effect is None


def test_detail_message_delegates_to_detail() -> None:
    model, _ = _init(f"{ROOT_URL}#/events/1")
    model, _ = update(EventFetched(Ok(make_event("1"))), model)

    model, effect = update(EventDetailMsg(SelectTab(DetailTab.METADATA)), model)

    assert model.event is not None
    assert model.event.tab is DetailTab.METADATA
    assert effect is None


def test_late_stream_response_still_applies_after_navigation() -> None:
    model = _browsing_model()
    model, _ = update(UrlChanged(f"{ROOT_URL}#/events/1"), model)
    late_page = PaginatedList(items=(make_event("9"),))

    model, _ = update(EventsFetched(Ok(late_page)), model)

    assert model.page == ShowEvent("1")
    assert [event.event_id for event in model.events.items] == ["9"]


def test_http_status_error_carries_status() -> None:
    error = HttpStatusError("http status 404", status_code=404, url="http://x")

    assert error.category == "http_status"
    assert error.status_code == 404
