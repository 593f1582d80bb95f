"""Cache configuration.

Default namespace and invalidation rule set for the blog API.
"""

from .blog_namespaces import (
    BLOG_NAMESPACES,
    BLOG_INVALIDATION_RULES,
    create_blog_registry,
)

__all__ = [
    "BLOG_NAMESPACES",
    "BLOG_INVALIDATION_RULES",
    "create_blog_registry",
]
