"""Lifecycle hooks: extension points around each engine operation

The engine calls exactly one of `operation_rejected`, `operation_succeeded`
or `operation_failed` after `operation_started` for every call of
`create`, `stat` and `redirect`.

Classes:
    LifecycleHooks:
        Abstract hook interface.
    LoggingHooks:
        Writes lifecycle events to the module logger and, optionally, to the
        remote log collector.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from tinylinks.constants import RemoteLog
from tinylinks.exceptions import ShortcodeLifecycleError
from tinylinks.logship.client import RemoteLogClient, SHIPPED_ATTR


class LifecycleHooks(ABC):
    @abstractmethod
    def operation_started(self, operation: str, **details: Any) -> None:
        """Called before the operation does any work."""
        raise NotImplementedError

    @abstractmethod
    def operation_rejected(self, operation: str, error: ShortcodeLifecycleError, **details: Any) -> None:
        """Called when the operation failed validation or lookup (4xx outcome)."""
        raise NotImplementedError

    @abstractmethod
    def operation_succeeded(self, operation: str, result: Any, **details: Any) -> None:
        """Called with the operation's return value."""
        raise NotImplementedError

    @abstractmethod
    def operation_failed(self, operation: str, error: Exception, **details: Any) -> None:
        """Called on store failures and unexpected exceptions (5xx outcome)."""
        raise NotImplementedError


class LoggingHooks(LifecycleHooks):
    """Log lifecycle events locally and ship them to the remote collector

    Local records carry `event` (`<operation>_<stage>`) and the operation's
    arguments as `extra` fields. When `remote` is given, every event is also
    shipped with `package='controller'`; local records are then marked as
    shipped so RemoteLogHandler doesn't send them a second time.
    """

    PACKAGE = 'controller'

    # operation -> (started, succeeded, failed)
    MESSAGES = {
        'create': ('Create short URL request received', 'Short URL created successfully', 'Error creating short URL'),
        'stat': ('Get URL statistics request', 'URL statistics retrieved successfully', 'Error retrieving URL statistics'),
        'redirect': ('Redirect request received', 'Successful redirect to original URL', 'Error during redirect'),
    }

    # (operation, error code) -> rejection message, falls back to the error's message
    REJECTIONS = {
        ('create', 'MISSING_URL'): 'URL field missing in request',
        ('create', 'INVALID_URL'): 'Invalid URL format provided',
        ('create', 'INVALID_VALIDITY'): 'Invalid validity provided',
        ('create', 'DUPLICATE_SHORTCODE'): 'Shortcode already exists',
        ('stat', 'SHORTCODE_NOT_FOUND'): 'Shortcode not found',
        ('stat', 'SHORTCODE_EXPIRED'): 'Short URL has expired',
        ('redirect', 'SHORTCODE_NOT_FOUND'): 'Shortcode not found for redirect',
        ('redirect', 'SHORTCODE_EXPIRED'): 'Expired short URL access attempt',
    }

    def __init__(self, logger: logging.Logger | None = None, remote: RemoteLogClient | None = None):
        self.logger = logger or logging.getLogger(__name__)
        self.remote = remote

    def operation_started(self, operation, **details):
        self._emit(logging.INFO, 'info', operation, 'started', self._message(operation, 0), details)

    def operation_rejected(self, operation, error, **details):
        details = {**details, 'errorCode': error.error_code}
        message = self.REJECTIONS.get((operation, error.error_code), str(error))
        self._emit(logging.WARNING, 'warn', operation, 'rejected', message, details)

    def operation_succeeded(self, operation, result, **details):
        self._emit(logging.INFO, 'info', operation, 'succeeded', self._message(operation, 1), details)

    def operation_failed(self, operation, error, **details):
        message = self._message(operation, 2)
        self.logger.error(
            message,
            exc_info=error,
            extra={'event': f'{operation}_failed', **details, SHIPPED_ATTR: self.remote is not None},
        )
        self._ship('error', message)

    def _message(self, operation: str, stage: int) -> str:
        default = (f'{operation} started', f'{operation} succeeded', f'{operation} failed')
        return self.MESSAGES.get(operation, default)[stage]

    def _emit(self, level: int, remote_level: str, operation: str, stage: str, message: str, details: dict[str, Any]) -> None:
        self.logger.log(
            level,
            message,
            extra={'event': f'{operation}_{stage}', **details, SHIPPED_ATTR: self.remote is not None},
        )
        self._ship(remote_level, message)

    def _ship(self, level: str, message: str) -> None:
        if self.remote is not None:
            self.remote.log(RemoteLog.STACK, level, self.PACKAGE, message)
