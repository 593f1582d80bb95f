"""Cache service dependencies.

ONLY cache service dependencies - provides the FastAPI lifespan that owns
the cache platform and the dependencies route handlers use to reach it.

Following maximum separation architecture - one file = one purpose.
"""

from contextlib import asynccontextmanager
from typing import Annotated, AsyncIterator, Optional

from fastapi import Depends, FastAPI, HTTPException, Request, status

from .....config.settings import QuillSettings
from ...application.services.invalidation_service import InvalidationService
from ...application.services.key_builder import KeyBuilder
from ...application.services.read_through_cache import ReadThroughCache
from ...core.protocols.cache_store import CacheStore
from ...module import CachePlatform, create_cache_platform

STATE_ATTRIBUTE = "cache_platform"


@asynccontextmanager
async def cache_lifespan(
    app: FastAPI,
    settings: Optional[QuillSettings] = None,
    store: Optional[CacheStore] = None
) -> AsyncIterator[CachePlatform]:
    """Create the cache platform for the app's lifetime.

    Usage:

    ```python
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with cache_lifespan(app):
            yield

    app = FastAPI(lifespan=lifespan)
    ```
    """
    platform = create_cache_platform(settings=settings, store=store)
    setattr(app.state, STATE_ATTRIBUTE, platform)
    try:
        yield platform
    finally:
        await platform.close()
        setattr(app.state, STATE_ATTRIBUTE, None)


async def get_cache_platform(request: Request) -> CachePlatform:
    """Get the cache platform created by cache_lifespan."""
    platform = getattr(request.app.state, STATE_ATTRIBUTE, None)
    if platform is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Cache platform is not initialized",
        )
    return platform


async def get_read_through_cache(
    platform: Annotated[CachePlatform, Depends(get_cache_platform)]
) -> ReadThroughCache:
    """Get read-through cache dependency.

    Usage in feature endpoints:

    ```python
    @router.get("/articles")
    async def list_articles(page: int, limit: int, cache: ReadThroughCacheDependency):
        return await cache.get_or_compute_in(
            "articles", {"page": page, "limit": limit},
            lambda: repo.list_published(page, limit),
        )
    ```
    """
    return platform.read_cache


async def get_invalidation_service(
    platform: Annotated[CachePlatform, Depends(get_cache_platform)]
) -> InvalidationService:
    """Get invalidation service dependency for write endpoints."""
    return platform.invalidation


async def get_key_builder(
    platform: Annotated[CachePlatform, Depends(get_cache_platform)]
) -> KeyBuilder:
    """Get key builder dependency."""
    return platform.key_builder


# Type annotations for easier imports
CachePlatformDependency = Annotated[CachePlatform, Depends(get_cache_platform)]
ReadThroughCacheDependency = Annotated[ReadThroughCache, Depends(get_read_through_cache)]
InvalidationServiceDependency = Annotated[InvalidationService, Depends(get_invalidation_service)]
KeyBuilderDependency = Annotated[KeyBuilder, Depends(get_key_builder)]
