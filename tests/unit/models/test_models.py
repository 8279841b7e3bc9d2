from dataclasses import FrozenInstanceError
from datetime import timedelta

import pytest

from tinylinks.models import ClickEvent


def test_record_defaults(record):
    assert record.clicks == 0
    assert record.click_events == ()


def test_with_click_appends_event(record, click_event):
    clicked = record.with_click(click_event)

    assert clicked.clicks == 1
    assert clicked.click_events == (click_event,)
    assert clicked.created_at == record.created_at
    # Original record is untouched
    assert record.clicks == 0
    assert record.click_events == ()


def test_with_click_keeps_click_order(record, click_event):
    later = ClickEvent(timestamp=click_event.timestamp + timedelta(seconds=10), source='curl/8.4.0')

    clicked = record.with_click(click_event).with_click(later)

    assert clicked.clicks == 2
    assert [event.source for event in clicked.click_events] == ['Mozilla/5.0', 'curl/8.4.0']


def test_with_click_uses_store_counter(record, click_event):
    clicked = record.with_click(click_event, clicks=42)

    assert clicked.clicks == 42


def test_record_is_immutable(record):
    with pytest.raises(FrozenInstanceError):
        record.target = 'https://example.com/other'
