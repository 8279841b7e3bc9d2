"""Shortcode collision resolution

Claims a shortcode for a new record using only the store's atomic
insert-if-absent. There is no separate "does it exist?" lookup, so two
concurrent creates can never end up owning the same shortcode.

Modes:
    - Auto: draw a random candidate, try to insert, draw again on collision.
      Bounded by `Shortcode.MAX_ATTEMPTS`.
    - Requested: the caller picked the shortcode. One insert attempt, a
      collision is reported to the caller. Any non-empty string is accepted.

Example:
    >>> resolver = ShortcodeResolver(dao)
    >>> record = resolver.claim(lambda code: ShortcodeRecord('https://example.com', code, 30, now))
    >>> record.shortcode
    'Gh71TC'
    >>> resolver.claim(factory, shortcode='Gh71TC')
    DuplicateShortcodeError: Shortcode already exists
"""

import logging
from collections.abc import Callable

from tinylinks.constants import Shortcode
from tinylinks.models import ShortcodeRecord
from tinylinks.dao.base import ShortcodeBaseDAO
from tinylinks.dao.exceptions import ShortURLAlreadyExistsError
from tinylinks.exceptions import DuplicateShortcodeError, ShortcodeGenerationError
from tinylinks.utils.shortener import generate_shortcode


logger = logging.getLogger(__name__)

type RecordFactory = Callable[[str], ShortcodeRecord]


class ShortcodeResolver:
    def __init__(
        self,
        dao: ShortcodeBaseDAO,
        generator: Callable[[], str] = generate_shortcode,
        max_attempts: int = Shortcode.MAX_ATTEMPTS,
    ):
        if max_attempts < 1:
            raise ValueError('max_attempts must be at least 1.')
        self.dao = dao
        self.generator = generator
        self.max_attempts = max_attempts

    def claim(self, record_factory: RecordFactory, shortcode: str | None = None) -> ShortcodeRecord:
        """Insert the record built by `record_factory` under a free shortcode.

        Args:
            record_factory (Callable[[str], ShortcodeRecord]):
                Builds the record to store for a candidate shortcode.
            shortcode (str | None):
                Requested shortcode. None or '' means "generate one".

        Returns:
            ShortcodeRecord: The stored record.

        Raises:
            DuplicateShortcodeError: If the requested shortcode is taken.
            ShortcodeGenerationError: If no free shortcode was drawn within the retry cap.
            DataStoreError: On store connectivity issues.
        """
        if shortcode:
            return self._claim_requested(record_factory, shortcode)
        return self._claim_generated(record_factory)

    def _claim_requested(self, record_factory: RecordFactory, shortcode: str) -> ShortcodeRecord:
        record = record_factory(shortcode)
        try:
            self.dao.insert(record)
        except ShortURLAlreadyExistsError as e:
            raise DuplicateShortcodeError() from e
        return record

    def _claim_generated(self, record_factory: RecordFactory) -> ShortcodeRecord:
        for attempt in range(1, self.max_attempts + 1):
            record = record_factory(self.generator())
            try:
                self.dao.insert(record)
            except ShortURLAlreadyExistsError:
                logger.info(
                    'Shortcode collision. Drawing a new candidate.',
                    extra={'shortcode': record.shortcode, 'attempt': attempt},
                )
                continue
            return record

        raise ShortcodeGenerationError(f'No free shortcode found after {self.max_attempts} attempts.')
