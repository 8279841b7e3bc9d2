import logging

from tinylinks.constants import ENV, RemoteLog
from tinylinks.logship.client import RemoteLogClient, SHIPPED_ATTR
from tinylinks.utils.helpers import require_environment


class RemoteLogHandler(logging.Handler):
    """Forward log records to the remote collector.

    `package` is the last component of the logger name
    (`tinylinks.lifecycle.engine` -> `engine`). Records marked as already
    shipped are skipped, which also keeps the client's own delivery warnings
    from looping back into the collector.
    """

    LEVELS = {
        logging.DEBUG: 'debug',
        logging.INFO: 'info',
        logging.WARNING: 'warn',
        logging.ERROR: 'error',
        logging.CRITICAL: 'fatal',
    }

    def __init__(self, client: RemoteLogClient, stack: str = RemoteLog.STACK, level: int = logging.WARNING):
        super().__init__(level=level)
        self.client = client
        self.stack = stack

    @classmethod
    @require_environment(ENV.RemoteLog.URL)
    def from_environment(cls) -> 'RemoteLogHandler':
        return cls(RemoteLogClient.from_environment())

    def emit(self, record: logging.LogRecord) -> None:
        if getattr(record, SHIPPED_ATTR, False):
            return
        try:
            level = self.LEVELS.get(record.levelno, 'fatal' if record.levelno > logging.CRITICAL else 'debug')
            package = record.name.rsplit('.', 1)[-1]
            self.client.log(self.stack, level, package, record.getMessage())
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        self.client.close()
        super().close()
