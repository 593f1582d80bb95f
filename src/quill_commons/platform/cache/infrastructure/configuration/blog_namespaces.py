"""Blog cache namespaces.

ONLY default blog configuration - the cacheable query families of the blog
API and the writes that make each of them stale.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Mapping, Optional, Tuple

from ...application.services.namespace_registry import NamespaceRegistry
from ...core.entities.cache_namespace import CacheNamespace
from ...core.entities.invalidation_rule import InvalidationRule
from ...core.value_objects.cache_ttl import CacheTTL

ARTICLES = "articles"
ARTICLE = "article"
USER_ARTICLES = "user-articles"
TAGS = "tags"
TRENDING = "trending"
FEATURED = "featured"
USER_PROFILE = "user-profile"


BLOG_NAMESPACES: Tuple[CacheNamespace, ...] = (
    CacheNamespace(
        name=ARTICLES,
        description="Paginated, filterable published article lists",
        default_ttl=CacheTTL(CacheTTL.FIVE_MINUTES),
    ),
    CacheNamespace(
        name=ARTICLE,
        description="Single article by slug",
        default_ttl=CacheTTL(CacheTTL.FIVE_MINUTES),
        scope_params=("slug",),
        key_params=("slug",),
    ),
    CacheNamespace(
        name=USER_ARTICLES,
        description="Articles written by one wallet",
        default_ttl=CacheTTL(CacheTTL.FIVE_MINUTES),
        scope_params=("wallet",),
    ),
    CacheNamespace(
        name=TAGS,
        description="All tags with article counts",
        default_ttl=CacheTTL(CacheTTL.TEN_MINUTES),
    ),
    CacheNamespace(
        name=TRENDING,
        description="Trending articles by recent engagement",
        default_ttl=CacheTTL(CacheTTL.ONE_MINUTE),
    ),
    CacheNamespace(
        name=FEATURED,
        description="Featured articles",
        default_ttl=CacheTTL(CacheTTL.FIVE_MINUTES),
    ),
    CacheNamespace(
        name=USER_PROFILE,
        description="Public profile of one wallet",
        default_ttl=CacheTTL(CacheTTL.TEN_MINUTES),
        scope_params=("wallet",),
        key_params=("wallet",),
    ),
)


BLOG_INVALIDATION_RULES: Tuple[InvalidationRule, ...] = (
    # Article create/update/delete/publish
    InvalidationRule("article", ARTICLES),
    InvalidationRule("article", ARTICLE, {"slug": "slug"}),
    InvalidationRule("article", USER_ARTICLES, {"wallet": "author_wallet"}),
    InvalidationRule("article", TRENDING),
    InvalidationRule("article", FEATURED),
    InvalidationRule("article", TAGS),

    # Comment counts and like counts show up in lists and on the article
    InvalidationRule("comment", ARTICLES),
    InvalidationRule("comment", ARTICLE, {"slug": "article_slug"}),
    InvalidationRule("comment", TRENDING),
    InvalidationRule("like", ARTICLES),
    InvalidationRule("like", ARTICLE, {"slug": "article_slug"}),
    InvalidationRule("like", TRENDING),

    InvalidationRule("view", TRENDING),

    InvalidationRule("tag", TAGS),
    InvalidationRule("tag", ARTICLES),

    # Profile changes rename the author on every article they wrote
    InvalidationRule("user", USER_PROFILE, {"wallet": "wallet"}),
    InvalidationRule("user", USER_ARTICLES, {"wallet": "wallet"}),
    InvalidationRule("user", ARTICLES),
    InvalidationRule("user", ARTICLE),

    InvalidationRule("subscription", USER_PROFILE, {"wallet": "wallet"}),
)


def create_blog_registry(ttl_overrides: Optional[Mapping[str, int]] = None) -> NamespaceRegistry:
    """Create the namespace registry for the blog API.

    Args:
        ttl_overrides: Optional namespace -> seconds deployment overrides
    """
    return NamespaceRegistry(
        BLOG_NAMESPACES,
        BLOG_INVALIDATION_RULES,
        ttl_overrides=ttl_overrides,
    )
