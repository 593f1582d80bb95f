"""Platform cache module.

Read-through caching with pattern-based invalidation for the blog API:
deterministic keys per namespace, single-flight reads, and write-driven
purges declared as rules in one registry.

Following maximum separation architecture - one file = one purpose.
"""

from .core.entities import *
from .core.value_objects import *
from .core.events import *
from .core.exceptions import *
from .core.protocols import *

from .application.services import *

from .infrastructure.repositories import *
from .infrastructure.serializers import *
from .infrastructure.configuration import *

from .module import CachePlatform, create_cache_platform

__all__ = [
    # Core Domain
    "CacheNamespace",
    "InvalidationRule",

    # Value Objects
    "CacheKey",
    "CacheTTL",
    "InvalidationPattern",

    # Events
    "CacheHit",
    "CacheMiss",
    "CachePurgeStarted",
    "CacheInvalidated",
    "CacheStoreFailure",

    # Exceptions
    "CacheKeyInvalid",
    "UnknownNamespace",
    "UnserializableParam",
    "InvalidTtl",
    "StoreUnavailable",
    "SerializationError",
    "DeserializationError",

    # Protocols
    "CacheStore",
    "CacheSerializer",

    # Services
    "NamespaceRegistry",
    "KeyBuilder",
    "CacheEventPublisher",
    "CacheMetrics",
    "CacheStoreAdapter",
    "ReadThroughCache",
    "InvalidationService",

    # Infrastructure
    "MemoryCacheStore",
    "RedisCacheStore",
    "create_memory_cache_store",
    "create_redis_cache_store",
    "JSONCacheSerializer",
    "create_json_serializer",
    "BLOG_NAMESPACES",
    "BLOG_INVALIDATION_RULES",
    "create_blog_registry",

    # Composition
    "CachePlatform",
    "create_cache_platform",
]
