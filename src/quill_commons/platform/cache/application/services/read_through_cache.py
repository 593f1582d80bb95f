"""Read-through cache service.

ONLY read-through orchestration - returns the cached value for a key or
runs the caller's data-store query, caches its result and returns it.

Behaviour:
- Concurrent misses for one key share a single in-flight compute
- The compute-and-store step runs in its own task; callers await it through
  ``asyncio.shield`` so a cancelled request never aborts the compute or the
  cache write other callers are waiting for
- Compute errors propagate unchanged and are never cached
- ``None`` results are cached for a short negative TTL
- Undecodable payloads are dropped and recomputed
- A purge that covers a key with a compute in flight detaches that flight,
  so its result (possibly read before the write) is returned but not stored

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Set, TypeVar, Union

from loguru import logger

from ...core.events.cache_hit import CacheHit
from ...core.events.cache_miss import CacheMiss
from ...core.events.cache_purge_started import CachePurgeStarted
from ...core.exceptions.serialization_error import SerializationError, DeserializationError
from ...core.protocols.cache_serializer import CacheSerializer
from ...core.value_objects.cache_key import SEGMENT_SEPARATOR
from ...core.value_objects.cache_ttl import CacheTTL
from .cache_store_adapter import CacheStoreAdapter
from .event_publisher import CacheEventPublisher
from .key_builder import KeyBuilder
from .namespace_registry import NamespaceRegistry

T = TypeVar("T")

Compute = Callable[[], Awaitable[T]]


@dataclass
class _Flight:
    """One in-flight compute-and-store for a key."""

    key: str
    task: Optional[asyncio.Task] = None
    stale: bool = False


class ReadThroughCache:
    """Read-through cache service."""

    def __init__(
        self,
        adapter: CacheStoreAdapter,
        serializer: CacheSerializer,
        key_builder: KeyBuilder,
        registry: NamespaceRegistry,
        publisher: Optional[CacheEventPublisher] = None,
        negative_ttl_seconds: int = 30,
        enabled: bool = True
    ):
        """Initialize read-through cache.

        Args:
            adapter: Cache store adapter
            serializer: Payload serializer
            key_builder: Key builder for namespace lookups
            registry: Namespace registry for default TTLs
            publisher: Event publisher; purge notifications detach flights
            negative_ttl_seconds: TTL for cached ``None`` results, 0 disables
            enabled: When False every call goes straight to compute
        """
        if negative_ttl_seconds < 0:
            raise ValueError(f"negative_ttl_seconds cannot be negative, got {negative_ttl_seconds}")

        self._adapter = adapter
        self._serializer = serializer
        self._key_builder = key_builder
        self._registry = registry
        self._publisher = publisher
        self._negative_ttl = negative_ttl_seconds
        self._enabled = enabled

        self._in_flight: Dict[str, _Flight] = {}
        self._tasks: Set[asyncio.Task] = set()

        if publisher is not None:
            publisher.subscribe(CachePurgeStarted, self.handle_purge_started)

    @property
    def enabled(self) -> bool:
        """Whether reads go through the cache."""
        return self._enabled

    @property
    def in_flight_count(self) -> int:
        """Number of keys with a compute currently shared by callers."""
        return len(self._in_flight)

    async def get_or_compute(
        self,
        key: str,
        ttl_seconds: Union[CacheTTL, int],
        compute: Compute
    ) -> Any:
        """Return the cached value for key, computing and caching it on a miss.

        Args:
            key: Cache key from the key builder
            ttl_seconds: Positive TTL for the stored result
            compute: Zero-argument coroutine function running the query

        Returns:
            Cached or freshly computed value

        Raises:
            InvalidTtl: If ttl_seconds is not positive
            Exception: Whatever compute raises, unchanged
        """
        ttl = CacheTTL.of(ttl_seconds)

        if not self._enabled:
            return await compute()

        namespace = key.split(SEGMENT_SEPARATOR, 1)[0]

        flight = self._in_flight.get(key)
        if flight is not None:
            return await self._join(flight, namespace)

        started = time.perf_counter()
        payload = await self._adapter.get(key)
        if payload is not None:
            try:
                value = self._serializer.deserialize(payload)
            except DeserializationError as e:
                logger.warning(f"Dropping undecodable cache entry '{key}': {e}")
                await self._adapter.delete(key)
            else:
                lookup_ms = (time.perf_counter() - started) * 1000
                logger.debug(f"Cache hit: {key}")
                self._publish(CacheHit(
                    key=key,
                    namespace=namespace,
                    lookup_time_ms=lookup_ms,
                    payload_size_bytes=len(payload),
                ))
                return value

        # Another caller may have started a flight while we awaited the store
        flight = self._in_flight.get(key)
        if flight is not None:
            return await self._join(flight, namespace)

        logger.debug(f"Cache miss: {key}")
        self._publish(CacheMiss(key=key, namespace=namespace))

        flight = _Flight(key=key)
        flight.task = asyncio.create_task(self._compute_and_store(flight, ttl, compute))
        self._in_flight[key] = flight
        self._tasks.add(flight.task)
        flight.task.add_done_callback(lambda task: self._finish(flight, task))

        return await asyncio.shield(flight.task)

    async def get_or_compute_in(
        self,
        namespace: str,
        params: Optional[Mapping[str, Any]],
        compute: Compute,
        ttl_seconds: Optional[Union[CacheTTL, int]] = None
    ) -> Any:
        """Build the key for a namespace query and read through it.

        Uses the namespace's effective TTL when ttl_seconds is not given.
        """
        key = self._key_builder.build_key(namespace, params)
        ttl = ttl_seconds if ttl_seconds is not None else self._registry.ttl_for(namespace)
        return await self.get_or_compute(key, ttl, compute)

    def handle_purge_started(self, event: CachePurgeStarted) -> int:
        """Detach in-flight computes whose keys the purge covers.

        Detached flights still resolve for their callers but do not store
        their result; the next caller starts a fresh compute.

        Returns:
            Number of flights detached
        """
        detached = 0
        for key, flight in list(self._in_flight.items()):
            if event.pattern.matches(key):
                flight.stale = True
                del self._in_flight[key]
                detached += 1

        if detached:
            logger.debug(f"Detached {detached} in-flight computes covered by '{event.pattern}'")
        return detached

    async def drain(self) -> None:
        """Wait for every outstanding compute-and-store task."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _join(self, flight: _Flight, namespace: str) -> Any:
        logger.debug(f"Cache miss joined in-flight compute: {flight.key}")
        self._publish(CacheMiss(key=flight.key, namespace=namespace, joined_in_flight=True))
        return await asyncio.shield(flight.task)

    async def _compute_and_store(self, flight: _Flight, ttl: CacheTTL, compute: Compute) -> Any:
        value = await compute()

        if value is None:
            if self._negative_ttl == 0:
                return None
            store_ttl = min(self._negative_ttl, ttl.seconds)
        else:
            store_ttl = ttl.seconds

        try:
            payload = self._serializer.serialize(value)
        except SerializationError as e:
            logger.warning(f"Returning uncached result for '{flight.key}': {e}")
            return value

        if flight.stale:
            logger.debug(f"Not caching '{flight.key}', invalidated while computing")
            return value

        await self._adapter.set_with_ttl(flight.key, payload, store_ttl)
        return value

    def _finish(self, flight: _Flight, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if self._in_flight.get(flight.key) is flight:
            del self._in_flight[flight.key]
        # Mark the error retrieved when every caller was cancelled
        if not task.cancelled():
            task.exception()

    def _publish(self, event: Any) -> None:
        if self._publisher is not None:
            self._publisher.publish(event)
