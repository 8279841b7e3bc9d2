"""Data Access Object (DAO) implementation for managing shortcode records in Redis

This module provides a Redis-based implementation of ShortcodeBaseDAO.

Responsibilities:
    - Claim shortcodes atomically (SET NX), closing the check-then-act race
      between concurrent create requests;
    - Retrieve a record with its click counter and click log as one snapshot;
    - Append click events and increment click counters atomically (MULTI/EXEC);
    - Provide defensive error handling and raise appropriate DAO exceptions.

Classes:
    ShortcodeRedisDAO:
        DAO for storing and retrieving ShortcodeRecord in a Redis datastore.

Example:
    >>> from tinylinks.models import ShortcodeRecord, ClickEvent
    >>> from tinylinks.dao.redis import ShortcodeRedisDAO

    >>> dao = ShortcodeRedisDAO(prefix="tinylinks:dev")

    >>> record = ShortcodeRecord(
    ...     target="https://example.com/page",
    ...     shortcode="abc123",
    ...     validity=30,
    ...     created_at=datetime.now(UTC),
    ... )
    >>> dao.insert(record)
    <ShortcodeRedisDAO>

    >>> dao.hit("abc123", ClickEvent(timestamp=datetime.now(UTC), source="Mozilla/5.0"))
    1
    >>> dao.get("abc123").clicks
    1
"""

import json
from datetime import datetime

from beartype import beartype

from tinylinks.models import ShortcodeRecord, ClickEvent
from tinylinks.dao.base import ShortcodeBaseDAO
from tinylinks.dao.redis.mixins import RedisClientMixin
from tinylinks.dao.redis.helpers import handle_redis_connection_error
from tinylinks.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError, MalformedRecordError


class ShortcodeRedisDAO(RedisClientMixin, ShortcodeBaseDAO):
    """Redis-based Data Access Object (DAO) for managing shortcode records

    This class implements the ShortcodeBaseDAO interface using Redis as a data store.
    Keys never expire: a shortcode stays taken even after its record expired.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        insert(record: ShortcodeRecord, **kwargs) -> ShortcodeRedisDAO:
            Store a new record if its shortcode is free.
            Raises ShortURLAlreadyExistsError when the shortcode is taken.
            Raises DataStoreError on connectivity issues with Redis.

        get(shortcode: str, **kwargs) -> ShortcodeRecord:
            Retrieve a record with its clicks and click events.
            Raises ShortURLNotFoundError when the shortcode doesn't exist.
            Raises DataStoreError on connectivity issues with Redis.

        hit(shortcode: str, event: ClickEvent, **kwargs) -> int:
            Append a click event and increment the click counter.
            Raises ShortURLNotFoundError when the shortcode doesn't exist.
            Raises DataStoreError on connectivity issues with Redis.
    """

    @handle_redis_connection_error
    @beartype
    def insert(self, record: ShortcodeRecord, **kwargs) -> 'ShortcodeRedisDAO':
        """Claim a shortcode and store its record in Redis

        Uses a single `SET <record key> <json> NX` so the existence check and
        the write can't be interleaved by another writer.

        Args:
            record (ShortcodeRecord):
                The record to store. Clicks and click events are not stored,
                the counter and the click log start empty.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortcodeRedisDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a record with the same shortcode already exists.
            DataStoreError:
                If a Redis connection issue occurs.

        Example:
            >>> dao.insert(record)
            <ShortcodeRedisDAO>
        """
        link_record_key = self.keys.link_record_key(record.shortcode)
        payload = json.dumps(
            {
                'target': record.target,
                'validity': record.validity,
                'created_at': record.created_at.isoformat(),
            }
        )

        # NOTE: `SET ... NX` returns None when the key already exists
        if not self.redis.set(link_record_key, payload, nx=True):
            raise ShortURLAlreadyExistsError(f"Short URL with code '{record.shortcode}' already exists.")
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortcodeRecord:
        """Retrieve a stored record by shortcode

        Fetches the record, its click counter and its click log in a single
        Redis transaction, so a concurrent hit() can't be observed half-applied.

        Args:
            shortcode (str):
                The shortcode identifier for the shortened URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortcodeRecord:
                The retrieved record.

        Raises:
            ShortURLNotFoundError:
                If the shortcode does not exist in Redis.
            MalformedRecordError:
                If the stored JSON can't be decoded.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.get('abc123')
            ShortcodeRecord(target='https://example.com', shortcode='abc123', ...)
        """
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.get(self.keys.link_record_key(shortcode))
            pipe.get(self.keys.link_clicks_key(shortcode))
            pipe.lrange(self.keys.link_events_key(shortcode), 0, -1)
            raw_record, clicks, raw_events = pipe.execute()

        if raw_record is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        try:
            data = json.loads(raw_record)
            events = tuple(self._decode_event(raw) for raw in raw_events or [])
            return ShortcodeRecord(
                target=data['target'],
                shortcode=shortcode,
                validity=int(data['validity']),
                created_at=datetime.fromisoformat(data['created_at']),
                clicks=int(clicks or 0),
                click_events=events,
            )
        except (ValueError, KeyError, TypeError) as e:
            raise MalformedRecordError(f"Short URL record with code '{shortcode}' is malformed.") from e

    @handle_redis_connection_error
    @beartype
    def hit(self, shortcode: str, event: ClickEvent, **kwargs) -> int:
        """Record a click for a shortcode

        NOTE: The RPUSH and INCR commands are executed as one MULTI/EXEC
              transaction. Two concurrent redirects therefore can't lose an
              update, and a reader never sees a counter that disagrees with
              the length of the click log:

              (lambda 1): ShortcodeRedisDAO.hit():
                          -> RPUSH <app>:links:<shortcode>:events <event>
                          ... interruption
              (lambda 2): ShortcodeRedisDAO.get():
                          -> GET <app>:links:<shortcode>:clicks  => one click short
              (lambda 1): ShortcodeRedisDAO.hit() continued...:
                          -> INCR <app>:links:<shortcode>:clicks

              is impossible because both commands are queued and applied together.
        NOTE: Records are never deleted, so checking existence before the
              transaction can't race with a removal.

        Args:
            shortcode (str):
                The shortcode that was accessed.
            event (ClickEvent):
                Timestamp and source label of the access.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            int:
                Click count after this click.

        Raises:
            ShortURLNotFoundError:
                If no record with the given shortcode exists.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.hit('abc123', ClickEvent(timestamp=datetime.now(UTC), source='curl/8.5.0'))
            4
        """
        if not self.redis.exists(self.keys.link_record_key(shortcode)):
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        payload = json.dumps({'timestamp': event.timestamp.isoformat(), 'source': event.source})
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.rpush(self.keys.link_events_key(shortcode), payload)
            pipe.incr(self.keys.link_clicks_key(shortcode))
            _, clicks = pipe.execute()

        return int(clicks)

    @staticmethod
    def _decode_event(raw: str | bytes) -> ClickEvent:
        data = json.loads(raw)
        return ClickEvent(timestamp=datetime.fromisoformat(data['timestamp']), source=data['source'])
