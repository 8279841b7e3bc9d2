"""Check that the local development dependencies are reachable

- redis: REDIS_HOST:REDIS_PORT/REDIS_DB (defaults to 127.0.0.1:6379/0)
- remote log collector: LOG_URL (skipped when unset)

Expect to see "Redis OK" and, with LOG_URL set, the collector's answer
printed in your local console.
"""

import os

from tinylinks.constants import ENV, RemoteLog
from tinylinks.dao.redis import ShortcodeRedisDAO
from tinylinks.logship import RemoteLogClient


def main():
    dao = ShortcodeRedisDAO(
        redis_host=os.environ.get(ENV.Redis.HOST, '127.0.0.1'),
        redis_port=int(os.environ.get(ENV.Redis.PORT, '6379')),
        redis_db=int(os.environ.get(ENV.Redis.DB, '0')),
    )
    print('Redis OK' if dao._healthcheck() else 'Redis unreachable')

    client = RemoteLogClient.from_environment()
    if client is None:
        print('LOG_URL not set, skipping remote log collector')
        return

    try:
        print(client.log_sync(RemoteLog.STACK, 'info', 'service', 'Local healthcheck'))
    finally:
        client.close()


if __name__ == '__main__':
    main()
