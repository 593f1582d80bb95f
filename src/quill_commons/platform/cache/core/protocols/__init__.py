"""Cache protocols."""

from .cache_store import CacheStore
from .cache_serializer import CacheSerializer

__all__ = [
    "CacheStore",
    "CacheSerializer",
]
