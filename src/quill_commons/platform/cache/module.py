"""Cache platform composition root.

Wires the cache services for one process from settings. There is no module
level instance: the application creates a platform at startup (see
``cache_lifespan``) and closes it at shutdown.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Any, AsyncContextManager, Dict, Mapping, Optional, Union

from loguru import logger

from ...config.settings import QuillSettings, get_settings
from .application.services.cache_store_adapter import CacheStoreAdapter
from .application.services.event_publisher import CacheEventPublisher, CacheMetrics
from .application.services.invalidation_service import InvalidationService
from .application.services.key_builder import KeyBuilder
from .application.services.namespace_registry import NamespaceRegistry
from .application.services.read_through_cache import Compute, ReadThroughCache
from .core.protocols.cache_store import CacheStore
from .core.value_objects.cache_ttl import CacheTTL
from .infrastructure.configuration.blog_namespaces import create_blog_registry
from .infrastructure.repositories.memory_cache_store import Clock, MemoryCacheStore
from .infrastructure.repositories.redis_cache_store import create_redis_cache_store
from .infrastructure.serializers.json_serializer import create_json_serializer


class CachePlatform:
    """Cache platform facade.

    Exposes the three operations route handlers need (``build_key``,
    ``get_or_compute``, ``invalidate``) and keeps the individual services
    reachable for wiring and tests.
    """

    def __init__(
        self,
        settings: QuillSettings,
        registry: NamespaceRegistry,
        key_builder: KeyBuilder,
        publisher: CacheEventPublisher,
        adapter: CacheStoreAdapter,
        read_cache: ReadThroughCache,
        invalidation: InvalidationService
    ):
        self.settings = settings
        self.registry = registry
        self.key_builder = key_builder
        self.publisher = publisher
        self.adapter = adapter
        self.read_cache = read_cache
        self.invalidation = invalidation
        self._closed = False

    def build_key(self, namespace: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Build a cache key."""
        return self.key_builder.build_key(namespace, params)

    async def get_or_compute(
        self,
        key: str,
        ttl_seconds: Union[CacheTTL, int],
        compute: Compute
    ) -> Any:
        """Read through the cache for one key."""
        return await self.read_cache.get_or_compute(key, ttl_seconds, compute)

    async def get_or_compute_in(
        self,
        namespace: str,
        params: Optional[Mapping[str, Any]],
        compute: Compute,
        ttl_seconds: Optional[Union[CacheTTL, int]] = None
    ) -> Any:
        """Read through the cache for a namespace query with its default TTL."""
        return await self.read_cache.get_or_compute_in(namespace, params, compute, ttl_seconds)

    async def invalidate(
        self,
        resource_type: str,
        context: Optional[Mapping[str, Any]] = None
    ) -> int:
        """Purge caches made stale by a committed write."""
        return await self.invalidation.invalidate(resource_type, context)

    def invalidate_after(
        self,
        resource_type: str,
        context: Optional[Mapping[str, Any]] = None
    ) -> AsyncContextManager[Dict[str, Any]]:
        """Invalidate after the wrapped write block succeeds."""
        return self.invalidation.invalidate_after(resource_type, context)

    async def invalidate_namespace(self, name: str) -> int:
        """Flush one namespace."""
        return await self.invalidation.invalidate_namespace(name)

    @property
    def metrics(self) -> Optional[CacheMetrics]:
        """Cache event counters."""
        return self.publisher.metrics

    async def health_check(self) -> Dict[str, Any]:
        """Report backend reachability and counters."""
        healthy = await self.adapter.ping()
        metrics = self.metrics
        return {
            "healthy": healthy,
            "enabled": self.read_cache.enabled,
            "backend": self.settings.cache_backend,
            "namespaces": self.registry.names(),
            "in_flight": self.read_cache.in_flight_count,
            "metrics": metrics.to_dict() if metrics else None,
        }

    async def close(self) -> None:
        """Wait for outstanding cache writes, then close the backend."""
        if self._closed:
            return
        self._closed = True
        await self.read_cache.drain()
        await self.adapter.close()
        logger.info("Cache platform closed")


def create_cache_platform(
    settings: Optional[QuillSettings] = None,
    store: Optional[CacheStore] = None,
    registry: Optional[NamespaceRegistry] = None,
    clock: Optional[Clock] = None
) -> CachePlatform:
    """Create a cache platform.

    Args:
        settings: Settings, defaults to get_settings()
        store: Backend override; otherwise chosen by ``cache_backend``
        registry: Namespace registry, defaults to the blog registry
        clock: Clock for the memory backend

    Returns:
        Wired cache platform
    """
    settings = settings or get_settings()
    registry = registry or create_blog_registry(settings.cache_ttl_overrides)

    if store is None:
        if settings.is_redis_backend:
            store = create_redis_cache_store(
                settings.redis_url,
                key_prefix=settings.cache_key_prefix,
                pool_size=settings.redis_pool_size,
                socket_timeout=settings.redis_socket_timeout,
                scan_count=settings.redis_scan_count,
            )
        else:
            store = MemoryCacheStore(clock=clock)

    publisher = CacheEventPublisher()
    adapter = CacheStoreAdapter(
        store,
        publisher=publisher,
        batch_size=settings.cache_invalidation_batch_size,
    )
    key_builder = KeyBuilder(registry, strict=settings.cache_strict_namespaces)
    read_cache = ReadThroughCache(
        adapter,
        create_json_serializer(),
        key_builder,
        registry,
        publisher=publisher,
        negative_ttl_seconds=settings.cache_negative_ttl_seconds,
        enabled=settings.cache_enabled,
    )
    invalidation = InvalidationService(
        registry,
        key_builder,
        adapter,
        publisher=publisher,
        granularity=settings.cache_invalidation_granularity,
    )

    logger.info(
        f"Cache platform ready: backend={settings.cache_backend}, "
        f"enabled={settings.cache_enabled}, namespaces={len(registry)}, "
        f"granularity={settings.cache_invalidation_granularity}"
    )
    return CachePlatform(
        settings=settings,
        registry=registry,
        key_builder=key_builder,
        publisher=publisher,
        adapter=adapter,
        read_cache=read_cache,
        invalidation=invalidation,
    )
