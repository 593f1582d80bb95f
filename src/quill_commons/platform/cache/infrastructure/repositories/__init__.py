"""Cache store backends."""

from .memory_cache_store import MemoryCacheStore, create_memory_cache_store
from .redis_cache_store import RedisCacheStore, create_redis_cache_store

__all__ = [
    "MemoryCacheStore",
    "create_memory_cache_store",
    "RedisCacheStore",
    "create_redis_cache_store",
]
