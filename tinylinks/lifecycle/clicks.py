from datetime import datetime

from tinylinks.models import ClickEvent, ShortcodeRecord
from tinylinks.dao.base import ShortcodeBaseDAO


def record_click(dao: ShortcodeBaseDAO, record: ShortcodeRecord, source: str, now: datetime) -> ShortcodeRecord:
    """Persist one click for `record` and return the updated record.

    The event is appended and the counter incremented in a single store
    operation (`dao.hit`). The returned record carries the counter value the
    store reported. Expiry must be checked by the caller.

    Raises:
        ShortURLNotFoundError: If the record vanished from the store.
        DataStoreError: On store connectivity issues.
    """
    event = ClickEvent(timestamp=now, source=source)
    clicks = dao.hit(record.shortcode, event)
    return record.with_click(event, clicks=clicks)
