import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from shortlinks.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_redis_errors(method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle Redis errors

    Connectivity issues (connection refused, socket timeouts) name the Redis
    endpoint in the raised error. Every other RedisError (WRONGTYPE, script
    errors, ...) becomes a generic DataStoreError; the server reply is kept
    only on the exception chain.

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise
            any redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on Redis failures.

    Example:
        >>> @handle_redis_errors
        ... def get_link(self, hash):
        ...     return self.redis.hgetall(self.keys.link_key(hash))
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            info = self.redis.connection_pool.connection_kwargs
            redis_host = info.get('host')
            redis_port = info.get('port')
            redis_db = info.get('db')
            raise DataStoreError(f"Can't connect to Redis at {redis_host}:{redis_port}/{redis_db}.") from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis request failed ({e.__class__.__name__}).') from e

    return wrapper
