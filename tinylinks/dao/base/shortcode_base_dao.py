"""Abstract base class for shortcode record data access objects (DAOs).

This class establishes a consistent contract for all record store implementations,
regardless of the underlying storage mechanism (e.g., Redis, DynamoDB, PostgreSQL).

Responsibilities:
    - Provide an interface for inserting and retrieving ShortcodeRecord objects.
    - Provide an atomic click append so counters never lose updates.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from tinylinks.models import ShortcodeRecord, ClickEvent
        >>> from tinylinks.dao.redis import ShortcodeRedisDAO

        >>> dao = ShortcodeRedisDAO(...)

        >>> record = ShortcodeRecord(
        ...     target="https://example.com/blog/article-123",
        ...     shortcode="a1b2c3",
        ...     validity=30,
        ...     created_at=datetime.now(UTC),
        ... )
        >>> dao.insert(record)

        >>> dao.hit("a1b2c3", ClickEvent(timestamp=datetime.now(UTC), source="curl/8.5.0"))
        1

        >>> retrieved = dao.get("a1b2c3")
        >>> retrieved.clicks, len(retrieved.click_events)
        (1, 1)
"""

from abc import ABC, abstractmethod

from tinylinks.models import ShortcodeRecord, ClickEvent


class ShortcodeBaseDAO(ABC):
    """Interface for shortcode record data access objects (DAOs).

    Methods:
        insert(record: ShortcodeRecord, **kwargs) -> ShortcodeBaseDAO:
            Insert a new record only if its shortcode is free (atomic insert-if-absent).
            Raises ShortURLAlreadyExistsError if the shortcode is already taken.
            Raises DataStoreError on connection or write failure.

        get(shortcode: str, **kwargs) -> ShortcodeRecord:
            Retrieve a record, its click counter and click events by shortcode.
            Raises ShortURLNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or read failure.

        hit(shortcode: str, event: ClickEvent, **kwargs) -> int:
            Atomically append a click event and increment the click counter.
            Returns the new click count.
            Raises ShortURLNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or write failure.

    Subclassing:
        Datastore-specific implementations (e.g., ShortcodeRedisDAO) must extend
        this class and implement all abstract methods.

    NOTE:
        - Records are never deleted or compacted. A shortcode, once inserted,
          stays taken forever, even after the record expired.
    """

    @abstractmethod
    def insert(self, record: ShortcodeRecord, **kwargs) -> 'ShortcodeBaseDAO':
        """Insert a new ShortcodeRecord into the data store.

        The uniqueness check and the write must be a single atomic operation.

        Args:
            record (ShortcodeRecord):
                The record to be inserted. Its clicks/click_events are ignored,
                new records always start with zero clicks.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortcodeBaseDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a record with the same shortcode already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortcodeRecord:
        """Retrieve a ShortcodeRecord from the data store by its shortcode.

        Args:
            shortcode (str):
                The shortcode of the record to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortcodeRecord: consistent snapshot (clicks == len(click_events)).

        Raises:
            ShortURLNotFoundError:
                If no record with the given shortcode exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def hit(self, shortcode: str, event: ClickEvent, **kwargs) -> int:
        """Record a click against an existing shortcode.

        Args:
            shortcode (str):
                The shortcode that was accessed.

            event (ClickEvent):
                Timestamp and source label of the access.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            int: click count after this click was recorded.

        Raises:
            ShortURLNotFoundError:
                If no record with the given shortcode exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass
