"""Cache value objects."""

from .cache_key import CacheKey, NAMESPACE_PATTERN, PARAM_NAME_PATTERN
from .cache_ttl import CacheTTL
from .invalidation_pattern import InvalidationPattern

__all__ = [
    "CacheKey",
    "CacheTTL",
    "InvalidationPattern",
    "NAMESPACE_PATTERN",
    "PARAM_NAME_PATTERN",
]
