"""Data Access Object (DAO) implementation for managing links in Redis

This module provides a Redis-based implementation of LinkBaseDAO.

Responsibilities:
    - Atomically insert links only if their hash is free (server-side Lua script);
    - Retrieve links by hash;
    - Maintain a recency index (sorted set scored by a global insertion counter);
    - Raise appropriate DAO exceptions.

Key layout (see RedisKeySchema):
    <prefix>:links:item:<hash> -> HASH {url, created_at}
    <prefix>:links:recent      -> ZSET member=<hash> score=<insertion sequence>
    <prefix>:links:counter     -> INT  global insertion sequence

Classes:
    LinkRedisDAO:
        DAO for storing and retrieving LinkModel in a Redis datastore.

Example:
    >>> from shortlinks.dao.redis import LinkRedisDAO

    >>> dao = LinkRedisDAO(prefix="app:dev")
    >>> dao.insert("aB3_", "https://example.com/page")
    LinkModel(hash='aB3_', url='https://example.com/page', created_at=...)

    >>> dao.get("aB3_").url
    'https://example.com/page'
"""

from datetime import datetime, UTC

from beartype import beartype

from shortlinks.models import LinkModel
from shortlinks.dao.base import LinkBaseDAO
from shortlinks.dao.redis.mixins import RedisClientMixin
from shortlinks.dao.redis.helpers import handle_redis_errors
from shortlinks.dao.exceptions import DataStoreError, LinkAlreadyExistsError, LinkNotFoundError
from shortlinks.utils.constants import LINKS_PAGE_SIZE


# KEYS[1] = link key, KEYS[2] = recent links key, KEYS[3] = counter key
# ARGV[1] = hash, ARGV[2] = url, ARGV[3] = created_at (ISO-8601)
# Returns 1 when the link was created, 0 when the hash is already taken.
INSERT_LINK_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 1 then
    return 0
end
redis.call('HSET', KEYS[1], 'url', ARGV[2], 'created_at', ARGV[3])
local sequence = redis.call('INCR', KEYS[3])
redis.call('ZADD', KEYS[2], sequence, ARGV[1])
return 1
"""


class LinkRedisDAO(RedisClientMixin, LinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing links

    This class implements the LinkBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        insert(hash: str, url: str, **kwargs) -> LinkModel:
            Insert a link and index it by recency in one atomic script run.
            Raises LinkAlreadyExistsError when the hash is taken.
            Raises DataStoreError on Redis failures.

        get(hash: str, **kwargs) -> LinkModel:
            Retrieve a link by hash.
            Raises LinkNotFoundError when the hash doesn't exist.
            Raises DataStoreError on Redis failures.

        recent(limit: int = 30, **kwargs) -> list[LinkModel]:
            Retrieve the newest links, newest first.
            Raises DataStoreError on Redis failures.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._insert_link = self.redis.register_script(INSERT_LINK_SCRIPT)

    @handle_redis_errors
    @beartype
    def insert(self, hash: str, url: str, **kwargs) -> LinkModel:
        """Insert a link into Redis unless its hash is taken

        The existence check, the write and the recency index update run inside
        a single Lua script, which Redis executes atomically. Two concurrent
        inserts of the same hash can never both succeed.

        Args:
            hash (str):
                The short identifier to reserve.
            url (str):
                The target URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            LinkModel: the created link.

        Raises:
            LinkAlreadyExistsError:
                If a link with the same hash already exists.
            DataStoreError:
                If Redis fails or cannot be reached.

        Example:
            >>> dao.insert('aB3_', 'https://example.com')
            LinkModel(hash='aB3_', url='https://example.com', created_at=...)
        """
        created_at = datetime.now(UTC)
        # fmt: off
        created = self._insert_link(
            keys=[self.keys.link_key(hash), self.keys.recent_links_key(), self.keys.counter_key()],
            args=[hash, url, created_at.isoformat()],
        )
        # fmt: on
        if not created:
            raise LinkAlreadyExistsError(f"Link with hash '{hash}' already exists.")
        return LinkModel(hash=hash, url=url, created_at=created_at)

    @handle_redis_errors
    @beartype
    def get(self, hash: str, **kwargs) -> LinkModel:
        """Retrieve a stored link by hash

        Args:
            hash (str):
                The hash identifier of the link.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            LinkModel:
                The retrieved link.

        Raises:
            LinkNotFoundError:
                If the link does not exist in Redis.
            DataStoreError:
                If Redis fails or cannot be reached, or the record is malformed.
        """
        fields = self.redis.hgetall(self.keys.link_key(hash))
        if not fields:
            raise LinkNotFoundError(f"Link with hash '{hash}' not found.")
        return self._to_model(hash, fields)

    @handle_redis_errors
    @beartype
    def recent(self, limit: int = LINKS_PAGE_SIZE, **kwargs) -> list[LinkModel]:
        """Retrieve the most recently inserted links

        The recency index is read first, then all link records are fetched in
        a single pipeline round trip. Links are immutable and never deleted,
        so every indexed hash has a record.

        Args:
            limit (int):
                Maximum number of links to return. Defaults to 30.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            list[LinkModel]: links, newest first.

        Raises:
            DataStoreError:
                If Redis fails or cannot be reached, or a record is malformed.
        """
        if limit < 1:
            return []

        hashes = self.redis.zrevrange(self.keys.recent_links_key(), 0, limit - 1)
        if not hashes:
            return []

        with self.redis.pipeline(transaction=False) as pipe:
            for hash in hashes:
                pipe.hgetall(self.keys.link_key(hash))
            records = pipe.execute()

        return [self._to_model(hash, fields) for hash, fields in zip(hashes, records) if fields]

    @staticmethod
    def _to_model(hash: str, fields: dict[str, str]) -> LinkModel:
        try:
            return LinkModel(
                hash=hash,
                url=fields['url'],
                created_at=datetime.fromisoformat(fields['created_at']),
            )
        except (KeyError, ValueError) as e:
            raise DataStoreError(f"Malformed link record for hash '{hash}'.") from e
