"""Cache store adapter service.

ONLY store access policy - wraps a ``CacheStore`` backend with the cache's
failure semantics. A cache outage must never fail a read or a write of the
blog itself, so backend errors are logged, published and absorbed here:

- ``get`` failures are reported as a miss
- ``set`` failures leave the value uncached
- ``delete`` and ``delete_by_pattern`` failures are reported with a
  staleness risk, since stale entries may survive until their TTL

Programmer errors (bad TTL, malformed pattern) are raised, never absorbed.

Following maximum separation architecture - one file = one purpose.
"""

from typing import List, Optional, Union

from loguru import logger

from ...core.events.cache_store_failure import CacheStoreFailure
from ...core.protocols.cache_store import CacheStore
from ...core.value_objects.cache_ttl import CacheTTL
from ...core.value_objects.invalidation_pattern import InvalidationPattern
from .event_publisher import CacheEventPublisher


class CacheStoreAdapter:
    """Cache store adapter.

    Pattern deletes are implemented here as enumerate-then-bulk-delete so
    every backend only has to provide prefix enumeration and multi-key
    delete.
    """

    def __init__(
        self,
        store: CacheStore,
        publisher: Optional[CacheEventPublisher] = None,
        batch_size: int = 500
    ):
        """Initialize cache store adapter.

        Args:
            store: Backend cache store
            publisher: Event publisher for store failure events
            batch_size: Keys per bulk delete during pattern purges
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        self._store = store
        self._publisher = publisher
        self._batch_size = batch_size

    @property
    def store(self) -> CacheStore:
        """Underlying backend."""
        return self._store

    async def get(self, key: str) -> Optional[bytes]:
        """Get payload, None when missing or when the store fails."""
        try:
            return await self._store.get(key)
        except Exception as e:
            logger.warning(f"Cache get failed for '{key}', treating as miss: {e}")
            self._publish_failure("get", key, e)
            return None

    async def set_with_ttl(
        self,
        key: str,
        payload: bytes,
        ttl_seconds: Union[CacheTTL, int]
    ) -> None:
        """Store payload with expiry, overwriting any existing entry.

        Raises:
            InvalidTtl: If ttl_seconds is not a positive whole number
        """
        ttl = CacheTTL.of(ttl_seconds)
        try:
            await self._store.set(key, payload, ttl.seconds)
        except Exception as e:
            logger.error(f"Cache set failed for '{key}' (ttl={ttl}): {e}")
            self._publish_failure("set", key, e)

    async def delete(self, key: str) -> bool:
        """Delete one key; deleting a missing key is not an error."""
        try:
            return await self._store.delete(key)
        except Exception as e:
            logger.error(f"Cache delete failed for '{key}', entry may be stale: {e}")
            self._publish_failure("delete", key, e, staleness_risk=True)
            return False

    async def delete_by_pattern(self, pattern: Union[str, InvalidationPattern]) -> int:
        """Delete every key matching a ``prefix*`` pattern.

        Returns:
            Number of keys deleted. On failure, the keys deleted before the
            failure (0 if enumeration failed).

        Raises:
            CacheKeyInvalid: If pattern is not a single trailing-wildcard prefix
        """
        if not isinstance(pattern, InvalidationPattern):
            pattern = InvalidationPattern.parse(pattern)

        try:
            keys = await self._store.scan_prefix(pattern.prefix)
        except Exception as e:
            logger.error(f"Cache scan failed for '{pattern}', entries may be stale: {e}")
            self._publish_failure("scan", str(pattern), e, staleness_risk=True)
            return 0

        deleted = 0
        for batch in self._batches(keys):
            try:
                deleted += await self._store.delete_many(batch)
            except Exception as e:
                logger.error(
                    f"Cache purge of '{pattern}' failed after {deleted} of {len(keys)} keys, "
                    f"entries may be stale: {e}"
                )
                self._publish_failure("delete_many", str(pattern), e, staleness_risk=True)
                return deleted

        logger.debug(f"Cache purge of '{pattern}' deleted {deleted} keys")
        return deleted

    async def exists(self, key: str) -> bool:
        """Check if key exists, False when the store fails."""
        try:
            return await self._store.exists(key)
        except Exception as e:
            logger.warning(f"Cache exists check failed for '{key}': {e}")
            self._publish_failure("exists", key, e)
            return False

    async def ping(self) -> bool:
        """Health check the backend."""
        try:
            return await self._store.ping()
        except Exception as e:
            logger.warning(f"Cache store ping failed: {e}")
            return False

    async def close(self) -> None:
        """Close the backend."""
        try:
            await self._store.close()
        except Exception as e:
            logger.warning(f"Cache store close failed: {e}")

    def _batches(self, keys: List[str]):
        for start in range(0, len(keys), self._batch_size):
            yield keys[start:start + self._batch_size]

    def _publish_failure(
        self,
        operation: str,
        target: str,
        error: Exception,
        staleness_risk: bool = False
    ) -> None:
        if self._publisher is None:
            return
        self._publisher.publish(CacheStoreFailure(
            operation=operation,
            target=target,
            error=str(error),
            staleness_risk=staleness_risk,
        ))
