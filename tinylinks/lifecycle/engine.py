"""Shortcode lifecycle engine

Implements the three operations of a short URL's life:

    create(target, validity, shortcode) -> CreatedShortcode
        Validate the target URL and validity window, claim a shortcode
        (generated or requested) and persist the record.
    stat(shortcode) -> ShortcodeStats
        Read-only projection of a live record and its click log.
    redirect(shortcode, source) -> str
        Record a click on a live record and return its target URL.

Errors raised by the engine are all ShortcodeLifecycleError subclasses:
validation and lookup outcomes keep their own type (4xx), data store failures
and unexpected exceptions are wrapped in InternalError (5xx) with the cause
chained. Every operation reports to the injected LifecycleHooks.

Example:
    >>> from tinylinks.dao.redis import ShortcodeRedisDAO
    >>> engine = ShortcodeLifecycle(ShortcodeRedisDAO(prefix='tinylinks:dev'))
    >>> created = engine.create('https://example.com/page', validity=1, shortcode='abc123')
    >>> engine.redirect('abc123', 'Mozilla/5.0')
    'https://example.com/page'
    >>> engine.stat('abc123').clicks
    1
"""

import inspect
import functools
import urllib.parse
from collections.abc import Callable
from datetime import datetime

from tinylinks.constants import Defaults
from tinylinks.models import ShortcodeRecord, CreatedShortcode, ShortcodeStats
from tinylinks.dao.base import ShortcodeBaseDAO
from tinylinks.dao.exceptions import ShortURLNotFoundError
from tinylinks.exceptions import (
    ShortcodeLifecycleError,
    MissingUrlError,
    InvalidUrlError,
    InvalidValidityError,
    ShortcodeNotFoundError,
    ShortcodeExpiredError,
    InternalError,
)
from tinylinks.lifecycle.expiry import is_expired, expiry_instant
from tinylinks.lifecycle.clicks import record_click
from tinylinks.lifecycle.hooks import LifecycleHooks, LoggingHooks
from tinylinks.lifecycle.resolver import ShortcodeResolver
from tinylinks.utils.helpers import utcnow


def lifecycle_operation[F: Callable](name: str) -> Callable[[F], F]:
    """Decorator: report an engine method to the hooks and normalize its errors.

    - ShortcodeLifecycleError below 500 -> operation_rejected, re-raised as is
    - InternalError -> operation_failed, re-raised as is
    - any other exception (DataStoreError included) -> operation_failed,
      re-raised as InternalError from the original exception
    - return value -> operation_succeeded
    """

    def decorator(method: F) -> F:
        signature = inspect.signature(method)

        @functools.wraps(method)
        def wrapper(self: 'ShortcodeLifecycle', *args, **kwargs):
            details = signature.bind(self, *args, **kwargs).arguments
            details.pop('self')
            self.hooks.operation_started(name, **details)

            try:
                result = method(self, *args, **kwargs)
            except InternalError as e:
                self.hooks.operation_failed(name, e, **details)
                raise
            except ShortcodeLifecycleError as e:
                self.hooks.operation_rejected(name, e, **details)
                raise
            except Exception as e:
                self.hooks.operation_failed(name, e, **details)
                raise InternalError() from e

            self.hooks.operation_succeeded(name, result, **details)
            return result

        return wrapper

    return decorator


def validate_target(target: str | None) -> str:
    """Ensure `target` is an absolute URL (scheme and host present).

    Raises:
        MissingUrlError: If target is None or empty.
        InvalidUrlError: If target is not a string or not an absolute URL.
    """
    if target is None or target == '':
        raise MissingUrlError()
    if not isinstance(target, str):
        raise InvalidUrlError()

    try:
        components = urllib.parse.urlsplit(target)
        components.port  # raises ValueError on a non-numeric or out-of-range port
    except ValueError as e:
        raise InvalidUrlError() from e
    if not components.scheme or not components.hostname:
        raise InvalidUrlError()
    return target


def validate_validity(validity: int | None) -> int:
    if validity is None:
        return Defaults.VALIDITY_MINUTES
    if isinstance(validity, bool) or not isinstance(validity, int) or validity <= 0:
        raise InvalidValidityError()
    return validity


class ShortcodeLifecycle:
    """Create, inspect and follow short URLs

    Attributes:
        dao (ShortcodeBaseDAO):
            Record store.
        hooks (LifecycleHooks):
            Extension points notified around every operation (LoggingHooks by default).
        clock (Callable[[], datetime]):
            Returns the current UTC time.
        resolver (ShortcodeResolver):
            Claims shortcodes for new records.
    """

    def __init__(
        self,
        dao: ShortcodeBaseDAO,
        hooks: LifecycleHooks | None = None,
        clock: Callable[[], datetime] = utcnow,
        resolver: ShortcodeResolver | None = None,
    ):
        self.dao = dao
        self.hooks = hooks or LoggingHooks()
        self.clock = clock
        self.resolver = resolver or ShortcodeResolver(dao)

    @lifecycle_operation('create')
    def create(
        self,
        target: str | None,
        validity: int | None = Defaults.VALIDITY_MINUTES,
        shortcode: str | None = None,
    ) -> CreatedShortcode:
        """Shorten `target`

        Args:
            target (str): Absolute URL to shorten.
            validity (int): Minutes the short URL stays live. None means the default (30).
            shortcode (str | None): Requested shortcode. None or '' means "generate one".

        Raises:
            MissingUrlError, InvalidUrlError, InvalidValidityError:
                On invalid input.
            DuplicateShortcodeError:
                If the requested shortcode is taken.
            InternalError:
                On store failures or when no free shortcode could be generated.
        """
        target = validate_target(target)
        validity = validate_validity(validity)

        now = self.clock()
        try:
            expires_at = expiry_instant(now, validity)
        except OverflowError as e:
            raise InvalidValidityError() from e

        record = self.resolver.claim(
            lambda code: ShortcodeRecord(target=target, shortcode=code, validity=validity, created_at=now),
            shortcode=shortcode,
        )
        return CreatedShortcode(shortcode=record.shortcode, expires_at=expires_at)

    @lifecycle_operation('stat')
    def stat(self, shortcode: str) -> ShortcodeStats:
        """Return click statistics of a live short URL. Never mutates the record.

        Raises:
            ShortcodeNotFoundError: If no record exists.
            ShortcodeExpiredError: If the record's validity window has passed.
            InternalError: On store failures.
        """
        record = self._live_record(shortcode)
        return ShortcodeStats(
            clicks=record.clicks,
            target=record.target,
            created_at=record.created_at,
            expires_at=expiry_instant(record.created_at, record.validity),
            click_events=record.click_events,
        )

    @lifecycle_operation('redirect')
    def redirect(self, shortcode: str, source: str = Defaults.CLICK_SOURCE) -> str:
        """Record a click and return the target URL of a live short URL.

        Raises:
            ShortcodeNotFoundError: If no record exists.
            ShortcodeExpiredError: If the record's validity window has passed.
            InternalError: On store failures.
        """
        now = self.clock()
        record = self._live_record(shortcode, now=now)
        try:
            record_click(self.dao, record, source or Defaults.CLICK_SOURCE, now)
        except ShortURLNotFoundError as e:
            raise ShortcodeNotFoundError() from e
        return record.target

    def _live_record(self, shortcode: str, now: datetime | None = None) -> ShortcodeRecord:
        try:
            record = self.dao.get(shortcode)
        except ShortURLNotFoundError as e:
            raise ShortcodeNotFoundError() from e

        if is_expired(record.created_at, record.validity, now or self.clock()):
            raise ShortcodeExpiredError()
        return record
