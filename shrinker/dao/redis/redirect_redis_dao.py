"""Data Access Object (DAO) implementation for managing redirect records in Redis

This module provides a Redis-based implementation of RedirectBaseDAO.

Every origin is stored as a Redis hash with two fields:

    HSET <prefix>:<origin> target <target url> status <status code>

and, optionally, a native expiry set with EXPIREAT.

Responsibilities:
    - Read the whole record of an origin (HGETALL) as a field mapping;
    - Write target and status in a single HSET;
    - Apply the per-key expiry (EXPIREAT);
    - Translate Redis failures into DAO exceptions.

Classes:
    RedirectRedisDAO:
        DAO for storing and retrieving redirect records in a Redis datastore.

Example:
    >>> from shrinker.dao.redis import RedirectRedisDAO

    >>> dao = RedirectRedisDAO(redis_url='redis://localhost:6379/0')

    >>> dao.put('abc123', 'https://example.com/page', 308)
    <RedirectRedisDAO>
    >>> dao.expire_at('abc123', datetime(2030, 1, 1, tzinfo=UTC))
    <RedirectRedisDAO>

    >>> redirect = dao.get('abc123')
    >>> redirect.target
    'https://example.com/page'
    >>> redirect.status
    308
"""

from datetime import datetime, UTC

import redis
from beartype import beartype

from shrinker.models import RedirectModel
from shrinker.types import RecordFields
from shrinker.dao.base import RedirectBaseDAO
from shrinker.dao.redis.mixins import RedisClientMixin
from shrinker.dao.redis.helpers import handle_redis_connection_error
from shrinker.dao.exceptions import ExpiryNotSetError, RedirectAlreadyExistsError


class RedirectRedisDAO(RedisClientMixin, RedirectBaseDAO):
    """Redis-based Data Access Object (DAO) for managing redirect records

    This class implements the RedirectBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        fetch(origin: str) -> RecordFields:
            HGETALL the record of an origin. Empty mapping if the key doesn't exist.
            Raises DataStoreError on connectivity issues with Redis.

        put(origin: str, target: str, status: int) -> RedirectRedisDAO:
            HSET target and status in a single command.
            Raises DataStoreError on connectivity issues with Redis.

        put_if_absent(origin: str, target: str, status: int) -> RedirectRedisDAO:
            HSET target and status inside a WATCH/MULTI transaction, only if the key is free.
            Raises RedirectAlreadyExistsError when the origin is already bound.
            Raises DataStoreError on connectivity issues with Redis.

        expire_at(origin: str, when: datetime) -> RedirectRedisDAO:
            EXPIREAT the record of an origin.
            Raises ExpiryNotSetError when Redis doesn't apply the expiry.
            Raises DataStoreError on connectivity issues with Redis.

        get(origin: str) -> RedirectModel:
            Inherited from RedirectBaseDAO: parse the fetch() result with a single HGETALL.
            Raises RedirectNotFoundError when the origin has no usable record.
            Raises DataStoreError on connectivity issues with Redis.

    Example:
        >>> dao = RedirectRedisDAO(redis_host='localhost', prefix='shrinker:test')
        >>> dao.put('abc123', 'https://example.com', 301)
        <RedirectRedisDAO>
        >>> dao.fetch('abc123')
        {'target': 'https://example.com', 'status': '301'}
        >>> dao.exists('abc123')
        True
    """

    @handle_redis_connection_error
    @beartype
    def fetch(self, origin: str) -> RecordFields:
        """Fetch all fields of an origin's record

        Args:
            origin (str):
                Origin whose record is fetched.

        Returns:
            RecordFields:
                Field name to value mapping. Empty if the key doesn't exist
                (never created or already expired).

        Raises:
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.fetch('abc123')
            {'target': 'https://example.com', 'status': '301'}
            >>> dao.fetch('missing')
            {}
        """
        fields = self.redis.hgetall(self.keys.origin_key(origin))
        return dict(fields)

    @handle_redis_connection_error
    @beartype
    def put(self, origin: str, target: str, status: int) -> 'RedirectRedisDAO':
        """Write the record of an origin

        Both fields are sent in one HSET command, so a reader never observes
        a record with only one of them. An existing record is overwritten.

        Args:
            origin (str):
                Key of the record.
            target (str):
                URL the origin redirects to.
            status (int):
                Redirect status code.

        Returns:
            RedirectRedisDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If a Redis connection issue occurs.

        Example:
            >>> dao.put('abc123', 'https://example.com', 301)
            <RedirectRedisDAO>
        """
        record = RedirectModel(origin=origin, target=target, status=status)
        self.redis.hset(self.keys.origin_key(origin), mapping=record.fields())
        return self

    @handle_redis_connection_error
    @beartype
    def put_if_absent(self, origin: str, target: str, status: int) -> 'RedirectRedisDAO':
        """Write the record of an origin, unless the origin is already bound

        Args:
            origin (str):
                Key of the record.
            target (str):
                URL the origin redirects to.
            status (int):
                Redirect status code.

        Returns:
            RedirectRedisDAO: self (for method chaining)

        Raises:
            RedirectAlreadyExistsError:
                If the key exists, or another client wrote it while the transaction was open.
            DataStoreError:
                If a Redis connection issue occurs.
        """
        origin_key = self.keys.origin_key(origin)
        record = RedirectModel(origin=origin, target=target, status=status)

        # NOTE: WATCH makes the MULTI/EXEC block fail if a concurrent client
        #       binds the same origin between the EXISTS check and the HSET:
        #
        #       (client 1): WATCH <origin>; EXISTS <origin> => 0
        #       (client 2): HSET <origin> target ... status ...
        #       (client 1): MULTI; HSET <origin> ...; EXEC  => aborted (WatchError)
        with self.redis.pipeline(transaction=True) as pipe:
            try:
                pipe.watch(origin_key)
                if pipe.exists(origin_key):
                    raise RedirectAlreadyExistsError(f"Redirect with origin '{origin}' already exists.")
                pipe.multi()
                pipe.hset(origin_key, mapping=record.fields())
                pipe.execute()
            except redis.exceptions.WatchError as e:
                raise RedirectAlreadyExistsError(f"Redirect with origin '{origin}' already exists.") from e
        return self

    @handle_redis_connection_error
    @beartype
    def expire_at(self, origin: str, when: datetime) -> 'RedirectRedisDAO':
        """Set the expiry of an origin's record

        NOTE: an expiry in the past makes Redis delete the key right away.

        Args:
            origin (str):
                Key of the record.
            when (datetime):
                Expiry moment. Naive datetimes are interpreted as UTC.

        Returns:
            RedirectRedisDAO: self (for method chaining)

        Raises:
            ExpiryNotSetError:
                If Redis replies that no expiry was set (the key doesn't exist) or answers with an error reply.
            DataStoreError:
                If a Redis connection issue occurs.

        Example:
            >>> dao.expire_at('abc123', datetime(2030, 1, 1, tzinfo=UTC))
            <RedirectRedisDAO>
        """
        if when.tzinfo is None:
            when = when.replace(tzinfo=UTC)

        try:
            applied = self.redis.expireat(self.keys.origin_key(origin), int(when.timestamp()))
        except redis.exceptions.ResponseError as e:
            # error replies such as OOM
            raise ExpiryNotSetError(f"Expiry of redirect with origin '{origin}' was not set: {e}") from e

        if not applied:
            raise ExpiryNotSetError(f"Expiry of redirect with origin '{origin}' was not set.")
        return self
