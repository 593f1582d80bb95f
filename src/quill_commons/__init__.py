"""Quill-Commons - shared library for the Quill community blogging API.

Provides the read-through cache platform with pattern-based invalidation,
settings, and logging configuration used by the API services.
"""

from .__version__ import __version__

from .core.exceptions import QuillCommonsError, CacheError
from .config import QuillSettings, get_settings, configure_logging
from .platform.cache import (
    CachePlatform,
    create_cache_platform,
    KeyBuilder,
    ReadThroughCache,
    InvalidationService,
    NamespaceRegistry,
)

__all__ = [
    "__version__",
    "QuillCommonsError",
    "CacheError",
    "QuillSettings",
    "get_settings",
    "configure_logging",
    "CachePlatform",
    "create_cache_platform",
    "KeyBuilder",
    "ReadThroughCache",
    "InvalidationService",
    "NamespaceRegistry",
]
