"""Cache API dependencies.

Dependency injection for cache services following maximum separation.
"""

from .cache_dependencies import (
    cache_lifespan,
    get_cache_platform,
    get_read_through_cache,
    get_invalidation_service,
    get_key_builder,
    CachePlatformDependency,
    ReadThroughCacheDependency,
    InvalidationServiceDependency,
    KeyBuilderDependency,
)

__all__ = [
    "cache_lifespan",
    "get_cache_platform",
    "get_read_through_cache",
    "get_invalidation_service",
    "get_key_builder",
    "CachePlatformDependency",
    "ReadThroughCacheDependency",
    "InvalidationServiceDependency",
    "KeyBuilderDependency",
]
