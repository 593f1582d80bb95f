"""Cache domain entities."""

from .cache_namespace import CacheNamespace
from .invalidation_rule import InvalidationRule

__all__ = [
    "CacheNamespace",
    "InvalidationRule",
]
