"""Client for the remote log collector

The collector accepts JSON log events over HTTP:

    POST <LOG_URL>
    Authorization: Bearer <LOG_BEARER_TOKEN>   (optional)
    {"stack": "backend", "level": "info", "package": "controller", "message": "..."}

`stack`, `level` and `package` are lower-cased before shipping.

Classes:
    RemoteLogClient:
        Ships log events. `log()` is fire-and-forget (background thread),
        `log_sync()` waits for the collector's answer.

Functions:
    get_remote_log_client() -> RemoteLogClient | None
        Process-wide client built from the environment (None when LOG_URL is unset).

Example:
    >>> client = RemoteLogClient('https://logs.example.com/log', token='s3cr3t')
    >>> client.log('backend', 'info', 'controller', 'Short URL created successfully')
    >>> client.log_sync('backend', 'warn', 'controller', 'Shortcode already exists')
    {'logID': '...', 'message': 'log created successfully'}
"""

import os
import logging
import functools
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import requests

from tinylinks.constants import ENV, RemoteLog


logger = logging.getLogger(__name__)

# Records carrying this attribute were already shipped and must not be shipped again
SHIPPED_ATTR = 'shipped'


class RemoteLogClient:
    def __init__(
        self,
        url: str,
        token: str | None = None,
        timeout: float = RemoteLog.TIMEOUT_SECONDS,
        session: requests.Session | None = None,
        executor: ThreadPoolExecutor | None = None,
    ):
        if not url:
            raise ValueError('Remote log collector URL must be a non-empty string.')

        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'Content-Type': 'application/json'})
        if token:
            self.session.headers.update({'Authorization': f'Bearer {token}'})
        self._executor = executor or ThreadPoolExecutor(max_workers=RemoteLog.MAX_WORKERS, thread_name_prefix='remote-log')

    @classmethod
    def from_environment(cls) -> 'RemoteLogClient | None':
        url = os.environ.get(ENV.RemoteLog.URL)
        if not url:
            return None
        return cls(url, token=os.environ.get(ENV.RemoteLog.BEARER_TOKEN))

    @staticmethod
    def payload(stack: str, level: str, package: str, message: str) -> dict[str, str]:
        """Build the collector payload, rejecting unknown levels.

        Raises:
            ValueError: If any field is empty or the level is not one of
                        debug, info, warn, error, fatal.
        """
        if not (stack and level and package and message):
            raise ValueError('stack, level, package and message are all required.')
        level = level.lower()
        if level not in RemoteLog.LEVELS:
            raise ValueError(f"Unknown log level '{level}' (expected one of: {', '.join(sorted(RemoteLog.LEVELS))}).")
        return {
            'stack': stack.lower(),
            'level': level,
            'package': package.lower(),
            'message': message,
        }

    def log(self, stack: str, level: str, package: str, message: str) -> None:
        """Ship a log event in the background. Never raises, never blocks on the network."""
        try:
            data = self.payload(stack, level, package, message)
            self._executor.submit(self._send, data)
        except (ValueError, RuntimeError) as e:
            # RuntimeError: executor already shut down
            logger.warning('Dropped remote log event: %s', e, extra={SHIPPED_ATTR: True})

    def log_sync(self, stack: str, level: str, package: str, message: str) -> dict[str, Any]:
        """Ship a log event and return the collector's JSON response.

        Raises:
            ValueError: On invalid fields (see `payload()`).
            requests.RequestException: On transport errors or non-2xx responses.
        """
        response = self.session.post(self.url, json=self.payload(stack, level, package, message), timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def close(self) -> None:
        self._executor.shutdown(wait=True)
        self.session.close()

    def _send(self, data: dict[str, str]) -> None:
        try:
            response = self.session.post(self.url, json=data, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning('Log failed: %s', e, extra={SHIPPED_ATTR: True, 'collectorUrl': self.url})
        else:
            logger.debug('Log sent.', extra={SHIPPED_ATTR: True, 'status': response.status_code})


@functools.cache
def get_remote_log_client() -> RemoteLogClient | None:
    return RemoteLogClient.from_environment()
