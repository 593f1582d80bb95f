"""Redis cache store.

ONLY Redis implementation - cache storage on a shared Redis server so every
API instance sees the same entries and the same purges.

Keys are stored as ``{key_prefix}{cache_key}``; enumeration strips the
prefix again so callers only ever see cache keys. Prefix enumeration uses
SCAN (never KEYS) so large namespaces do not block the server.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, List, Optional, Sequence

from loguru import logger
from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

from ...core.exceptions.store_unavailable import StoreUnavailable
from ...core.value_objects.invalidation_pattern import InvalidationPattern


class RedisCacheStore:
    """Redis cache store.

    Every backend error is re-raised as ``StoreUnavailable`` so the cache
    store adapter can apply its degrade-and-log policy uniformly.
    """

    def __init__(
        self,
        redis_client: Redis,
        key_prefix: str = "quill:",
        scan_count: int = 500,
        owns_client: bool = False
    ):
        """Initialize Redis cache store.

        Args:
            redis_client: Async Redis client (bytes responses)
            key_prefix: Prefix applied to every stored key
            scan_count: SCAN batch size hint
            owns_client: Close the client when the store is closed
        """
        if redis_client is None:
            raise ValueError("Redis client is required")

        self._redis = redis_client
        self._key_prefix = key_prefix
        self._scan_count = scan_count
        self._owns_client = owns_client

    @property
    def key_prefix(self) -> str:
        """Prefix applied to stored keys."""
        return self._key_prefix

    @property
    def scan_count(self) -> int:
        """SCAN batch size hint."""
        return self._scan_count

    def _full_key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    def _strip(self, raw_key: Any) -> str:
        key = raw_key.decode("utf-8") if isinstance(raw_key, bytes) else str(raw_key)
        return key[len(self._key_prefix):]

    async def get(self, key: str) -> Optional[bytes]:
        """Get payload by key."""
        try:
            value = await self._redis.get(self._full_key(key))
        except (RedisError, OSError) as e:
            raise StoreUnavailable("get", key, e) from e

        if value is None:
            return None
        return value.encode("utf-8") if isinstance(value, str) else value

    async def set(self, key: str, payload: bytes, ttl_seconds: int) -> None:
        """Store payload with expiry."""
        try:
            await self._redis.set(self._full_key(key), payload, ex=ttl_seconds)
        except (RedisError, OSError) as e:
            raise StoreUnavailable("set", key, e) from e

    async def delete(self, key: str) -> bool:
        """Delete key."""
        try:
            return await self._redis.delete(self._full_key(key)) > 0
        except (RedisError, OSError) as e:
            raise StoreUnavailable("delete", key, e) from e

    async def scan_prefix(self, prefix: str) -> List[str]:
        """List keys starting with prefix using SCAN MATCH."""
        match = InvalidationPattern(prefix).to_glob(self._key_prefix)
        full_prefix = self._full_key(prefix)
        keys = []
        try:
            async for raw_key in self._redis.scan_iter(match=match, count=self._scan_count):
                key = self._strip(raw_key)
                # SCAN may return a key more than once
                if self._full_key(key).startswith(full_prefix) and key not in keys:
                    keys.append(key)
        except (RedisError, OSError) as e:
            raise StoreUnavailable("scan", prefix + "*", e) from e
        return keys

    async def delete_many(self, keys: Sequence[str]) -> int:
        """Delete keys in one DEL command."""
        if not keys:
            return 0
        try:
            return await self._redis.delete(*(self._full_key(key) for key in keys))
        except (RedisError, OSError) as e:
            raise StoreUnavailable("delete_many", f"{len(keys)} keys", e) from e

    async def exists(self, key: str) -> bool:
        """Check if key exists."""
        try:
            return await self._redis.exists(self._full_key(key)) > 0
        except (RedisError, OSError) as e:
            raise StoreUnavailable("exists", key, e) from e

    async def ping(self) -> bool:
        """Health check - verify Redis is responsive."""
        try:
            response = await self._redis.ping()
        except (RedisError, OSError) as e:
            logger.warning(f"Redis ping failed: {e}")
            return False
        return response is True or response == b"PONG" or response == "PONG"

    async def close(self) -> None:
        """Close the Redis client if this store created it."""
        if self._owns_client:
            await self._redis.aclose()
            logger.info("Redis cache store connection closed")


def create_redis_cache_store(
    redis_url: str,
    key_prefix: str = "quill:",
    pool_size: int = 10,
    socket_timeout: float = 5.0,
    scan_count: int = 500
) -> RedisCacheStore:
    """Create Redis cache store with its own connection pool.

    Args:
        redis_url: Redis connection URL
        key_prefix: Prefix applied to every stored key
        pool_size: Maximum pooled connections
        socket_timeout: Socket timeout in seconds
        scan_count: SCAN batch size hint

    Returns:
        Redis cache store that closes its client on shutdown
    """
    pool = ConnectionPool.from_url(
        redis_url,
        max_connections=pool_size,
        socket_timeout=socket_timeout,
        socket_connect_timeout=socket_timeout,
        health_check_interval=30,
    )
    client = Redis(connection_pool=pool, auto_close_connection_pool=True)
    return RedisCacheStore(
        redis_client=client,
        key_prefix=key_prefix,
        scan_count=scan_count,
        owns_client=True,
    )
