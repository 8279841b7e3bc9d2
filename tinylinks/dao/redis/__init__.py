from tinylinks.dao.redis.redis_key_schema import RedisKeySchema
from tinylinks.dao.redis.mixins import RedisClientMixin
from tinylinks.dao.redis.shortcode_redis_dao import ShortcodeRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'ShortcodeRedisDAO',
]
