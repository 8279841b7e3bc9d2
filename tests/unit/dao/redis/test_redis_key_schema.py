"""Unit tests for the RedisKeySchema class in redis_key_schema.py.

This test suite verifies the correctness, consistency, and safety of
Redis key generation supplied by RedisKeySchema.

Test coverage includes:

1. Per-shortcode key generation
   - Ensures record, clicks and events keys are generated for a given shortcode.

2. Default prefix behavior
   - Confirms keys are not prefixed when no prefix is provided.

3. Custom prefix behavior
   - Confirms keys are correctly prefixed when a valid prefix is provided.

4. Invalid prefix types
   - Ensures improper prefix types raise TypeError.
"""

import pytest

from tinylinks.dao.redis.redis_key_schema import RedisKeySchema


# -------------------------------
# 1. Per-shortcode key generation
# -------------------------------

@pytest.mark.parametrize(
    "shortcode, expected_record, expected_clicks, expected_events",
    [
        ("abc123", "links:abc123:record", "links:abc123:clicks", "links:abc123:events"),
        ("XyZ789", "links:XyZ789:record", "links:XyZ789:clicks", "links:XyZ789:events"),
    ],
)
def test_link_keys(shortcode, expected_record, expected_clicks, expected_events):
    """Ensure each shortcode owns a record, a clicks and an events key."""
    keys = RedisKeySchema()
    assert keys.link_record_key(shortcode) == expected_record
    assert keys.link_clicks_key(shortcode) == expected_clicks
    assert keys.link_events_key(shortcode) == expected_events


# -------------------------------
# 2. Default prefix behavior
# -------------------------------

def test_no_key_prefix_by_default():
    """Ensure keys are not prefixed when no prefix is provided."""
    keys = RedisKeySchema()
    assert keys.prefix is None
    assert keys.link_record_key("abc123") == "links:abc123:record"


# -------------------------------
# 3. Custom prefix behavior
# -------------------------------

@pytest.mark.parametrize(
    "prefix, shortcode, expected_record_key, expected_events_key",
    [
        ("testprefix", "abc123", "testprefix:links:abc123:record", "testprefix:links:abc123:events"),
        ("tinylinks:dev", "abc123", "tinylinks:dev:links:abc123:record", "tinylinks:dev:links:abc123:events"),
        (None, "abc123", "links:abc123:record", "links:abc123:events"),
    ],
)
def test_key_prefixing(prefix, shortcode, expected_record_key, expected_events_key):
    """Ensure keys are correctly prefixed when a prefix is provided."""
    keys = RedisKeySchema(prefix=prefix)
    assert keys.link_record_key(shortcode) == expected_record_key
    assert keys.link_events_key(shortcode) == expected_events_key


# -------------------------------
# 4. Invalid prefix types
# -------------------------------

@pytest.mark.parametrize("prefix", [123, -1, 45.6, [], {}])
def test_invalid_prefix_type_raises_error(prefix):
    """Ensure invalid prefix types raise a TypeError."""
    with pytest.raises(TypeError):
        RedisKeySchema(prefix=prefix)
