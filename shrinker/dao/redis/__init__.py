from shrinker.dao.redis.redis_key_schema import RedisKeySchema
from shrinker.dao.redis.redirect_redis_dao import RedirectRedisDAO
from shrinker.dao.redis.mixins import RedisClientMixin


__all__ = [
    'RedisKeySchema',
    'RedirectRedisDAO',
    'RedisClientMixin',
]
