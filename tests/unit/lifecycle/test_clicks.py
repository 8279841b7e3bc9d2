"""Unit tests for click recording in clicks.py

Test coverage includes:

1. record_click() persists one event through dao.hit()
2. The returned record carries the counter reported by the store
3. Store errors propagate to the caller
"""

from datetime import datetime, UTC
from unittest.mock import MagicMock

import pytest

from tinylinks.models import ClickEvent
from tinylinks.dao.base import ShortcodeBaseDAO
from tinylinks.dao.exceptions import ShortURLNotFoundError, DataStoreError
from tinylinks.lifecycle.clicks import record_click


@pytest.fixture
def dao():
    _dao = MagicMock(spec=ShortcodeBaseDAO)
    _dao.hit.return_value = 1
    return _dao


def test_record_click(dao, record):
    now = datetime(2025, 10, 15, 12, 0, 30, tzinfo=UTC)

    updated = record_click(dao, record, 'curl/8.4.0', now)

    event = ClickEvent(timestamp=now, source='curl/8.4.0')
    dao.hit.assert_called_once_with('abc123', event)
    assert updated.clicks == 1
    assert updated.click_events == (event,)
    assert updated.target == record.target
    assert record.clicks == 0  # records are immutable


def test_record_click_uses_store_counter(dao, record):
    """Concurrent clicks may have advanced the counter; the store's value wins."""
    dao.hit.return_value = 7

    updated = record_click(dao, record, 'unknown', datetime(2025, 10, 15, 12, 0, 30, tzinfo=UTC))

    assert updated.clicks == 7


def test_record_click_accumulates_in_memory_store(memory_dao, record):
    memory_dao.insert(record)
    now = datetime(2025, 10, 15, 12, 0, 30, tzinfo=UTC)

    for source in ('a', 'b', 'c'):
        record_click(memory_dao, memory_dao.get('abc123'), source, now)

    stored = memory_dao.get('abc123')
    assert stored.clicks == 3
    assert [e.source for e in stored.click_events] == ['a', 'b', 'c']


@pytest.mark.parametrize('error', [ShortURLNotFoundError(), DataStoreError()])
def test_record_click_propagates_store_errors(dao, record, error):
    dao.hit.side_effect = error

    with pytest.raises(type(error)):
        record_click(dao, record, 'unknown', datetime(2025, 10, 15, 12, 0, 30, tzinfo=UTC))
