"""Cache application services.

Orchestration services following maximum separation - one service per file.
"""

from .namespace_registry import NamespaceRegistry
from .key_builder import KeyBuilder, encode_param_value
from .event_publisher import CacheEventPublisher, CacheMetrics, create_cache_event_publisher
from .cache_store_adapter import CacheStoreAdapter
from .read_through_cache import ReadThroughCache
from .invalidation_service import InvalidationService

__all__ = [
    "NamespaceRegistry",
    "KeyBuilder",
    "encode_param_value",
    "CacheEventPublisher",
    "CacheMetrics",
    "create_cache_event_publisher",
    "CacheStoreAdapter",
    "ReadThroughCache",
    "InvalidationService",
]
