"""Unit tests for expiry evaluation in expiry.py

Test coverage includes:

1. expiry_instant() adds the validity window to the creation instant
2. is_expired() is strict: a record is still live at its exact expiry instant
3. is_expired() is monotonic in `now`
"""

from datetime import datetime, timedelta, UTC

import pytest

from tinylinks.lifecycle.expiry import expiry_instant, is_expired


# -------------------------------
# 1. expiry_instant()
# -------------------------------


@pytest.mark.parametrize(
    'validity, expected',
    [
        (1, datetime(2025, 10, 15, 12, 1, tzinfo=UTC)),
        (30, datetime(2025, 10, 15, 12, 30, tzinfo=UTC)),
        (60 * 24, datetime(2025, 10, 16, 12, 0, tzinfo=UTC)),
    ],
)
def test_expiry_instant(created_at, validity, expected):
    assert expiry_instant(created_at, validity) == expected


# -------------------------------
# 2. Strict boundary
# -------------------------------


@pytest.mark.parametrize(
    'offset, expected',
    [
        (timedelta(0), False),
        (timedelta(seconds=30), False),
        (timedelta(seconds=59, microseconds=999999), False),
        (timedelta(seconds=60), False),  # exact expiry instant is still valid
        (timedelta(seconds=60, microseconds=1), True),
        (timedelta(seconds=61), True),
        (timedelta(days=365), True),
    ],
)
def test_is_expired_boundary(created_at, offset, expected):
    assert is_expired(created_at, 1, created_at + offset) is expected


# -------------------------------
# 3. Monotonicity
# -------------------------------


def test_is_expired_is_monotonic(created_at):
    """Once expired, a record stays expired for every later instant."""
    instants = [created_at + timedelta(seconds=s) for s in range(0, 600, 7)]
    flags = [is_expired(created_at, 5, now) for now in instants]

    first_expired = flags.index(True)
    assert not any(flags[:first_expired])
    assert all(flags[first_expired:])
