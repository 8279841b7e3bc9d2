from tinylinks.logship.client import RemoteLogClient, get_remote_log_client
from tinylinks.logship.handler import RemoteLogHandler
from tinylinks.logship.middleware import request_logging


__all__ = [
    'RemoteLogClient',
    'get_remote_log_client',
    'RemoteLogHandler',
    'request_logging',
]
