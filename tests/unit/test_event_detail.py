from __future__ import annotations

from event_browser.core.event_detail import detail_update, open_event
from event_browser.models.events import DetailTab
from event_browser.models.messages import SelectTab
from tests.support.payloads import make_event


def test_open_event_starts_on_data() -> None:
    detail = open_event(make_event())

    assert detail.tab is DetailTab.DATA
    assert detail.raw_document == '{\n  "a": 1\n}'


def test_select_metadata_tab() -> None:
    detail = open_event(make_event())

    switched = detail_update(SelectTab(DetailTab.METADATA), detail)

    assert switched.tab is DetailTab.METADATA
    assert switched.raw_document == detail.event.raw_metadata
    assert detail.tab is DetailTab.DATA


def test_selecting_current_tab_keeps_detail() -> None:
    detail = open_event(make_event())

    assert detail_update(SelectTab(DetailTab.DATA), detail) is detail
