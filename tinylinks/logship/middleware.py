import time
import logging
import functools
from collections.abc import Callable

from tinylinks.constants import RemoteLog
from tinylinks.logship.client import get_remote_log_client, SHIPPED_ATTR


logger = logging.getLogger(__name__)


def request_logging(handler: Callable) -> Callable:
    """Decorator: log every request entering and leaving a Lambda handler.

    Entry:  "<METHOD> <path>"                          (info, package 'middleware')
    Exit:   "<METHOD> <path> - Success <status>"       (info, package 'handler')
            "<METHOD> <path> - Error <status>"         (error, package 'handler', status >= 400)

    Messages go to the module logger and, when LOG_URL is configured, to the
    remote log collector. Apply it outside `guarantee_500_response` so generic
    500 responses are logged too.

    Example:
        >>> @request_logging
        ... @guarantee_500_response
        ... def lambda_handler(event, context):
        ...     ...
    """

    @functools.wraps(handler)
    def wrapper(event, context):
        remote = get_remote_log_client()
        request = f'{event.get("httpMethod") or "GET"} {event.get("path") or "/"}'
        start = time.monotonic()

        _log(remote, logging.INFO, 'middleware', request)
        response = handler(event, context)

        status = response.get('statusCode', 200)
        outcome = 'Error' if status >= 400 else 'Success'
        _log(
            remote,
            logging.ERROR if status >= 400 else logging.INFO,
            'handler',
            f'{request} - {outcome} {status}',
            durationMs=round((time.monotonic() - start) * 1000),
        )
        return response

    return wrapper


def _log(remote, level: int, package: str, message: str, **extra) -> None:
    logger.log(level, message, extra={'package': package, **extra, SHIPPED_ATTR: remote is not None})
    if remote is not None:
        remote.log(RemoteLog.STACK, 'error' if level >= logging.ERROR else 'info', package, message)
