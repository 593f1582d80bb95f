"""Cache domain events."""

from .cache_hit import CacheHit
from .cache_miss import CacheMiss
from .cache_purge_started import CachePurgeStarted
from .cache_invalidated import CacheInvalidated
from .cache_store_failure import CacheStoreFailure

__all__ = [
    "CacheHit",
    "CacheMiss",
    "CachePurgeStarted",
    "CacheInvalidated",
    "CacheStoreFailure",
]
