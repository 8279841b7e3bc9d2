"""Shared fixtures for unit tests

InMemoryShortcodeDAO is a dict-backed ShortcodeBaseDAO with the same
contract as ShortcodeRedisDAO (insert-if-absent, atomic hit), used to
exercise the lifecycle engine without Redis.
"""

from datetime import datetime, UTC

import pytest

from tinylinks.models import ShortcodeRecord, ClickEvent
from tinylinks.dao.base import ShortcodeBaseDAO
from tinylinks.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError


class InMemoryShortcodeDAO(ShortcodeBaseDAO):
    def __init__(self):
        self.records: dict[str, ShortcodeRecord] = {}

    def insert(self, record, **kwargs):
        if record.shortcode in self.records:
            raise ShortURLAlreadyExistsError(f"Short URL with code '{record.shortcode}' already exists.")
        self.records[record.shortcode] = record
        return self

    def get(self, shortcode, **kwargs):
        try:
            return self.records[shortcode]
        except KeyError:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.") from None

    def hit(self, shortcode, event, **kwargs):
        record = self.get(shortcode)
        self.records[shortcode] = record.with_click(event)
        return self.records[shortcode].clicks


@pytest.fixture
def memory_dao() -> InMemoryShortcodeDAO:
    return InMemoryShortcodeDAO()


@pytest.fixture
def created_at() -> datetime:
    return datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def record(created_at) -> ShortcodeRecord:
    return ShortcodeRecord(
        target='https://example.com/blog/chuck-norris-is-awesome',
        shortcode='abc123',
        validity=30,
        created_at=created_at,
    )


@pytest.fixture
def click_event(created_at) -> ClickEvent:
    return ClickEvent(timestamp=created_at, source='Mozilla/5.0')
