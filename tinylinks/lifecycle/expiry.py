"""Expiry evaluation for short URL records

A record is valid up to and including `created_at + validity minutes`;
it expires strictly after that instant. Expiry is never stored, it is
recomputed from `created_at` and `validity` on every read.
"""

from datetime import datetime, timedelta


def expiry_instant(created_at: datetime, validity: int) -> datetime:
    return created_at + timedelta(minutes=validity)


def is_expired(created_at: datetime, validity: int, now: datetime) -> bool:
    """Return True if `now` is past the record's validity window.

    Example:
        >>> created = datetime(2025, 10, 15, 12, 0, tzinfo=UTC)
        >>> is_expired(created, 1, datetime(2025, 10, 15, 12, 1, tzinfo=UTC))
        False
        >>> is_expired(created, 1, datetime(2025, 10, 15, 12, 1, 1, tzinfo=UTC))
        True
    """
    return now > expiry_instant(created_at, validity)
