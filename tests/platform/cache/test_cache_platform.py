"""Tests for the cache platform composition root and FastAPI wiring."""

from contextlib import asynccontextmanager

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from quill_commons.config.settings import QuillSettings
from quill_commons.platform.cache.api.dependencies import (
    CachePlatformDependency,
    InvalidationServiceDependency,
    KeyBuilderDependency,
    ReadThroughCacheDependency,
    cache_lifespan,
)
from quill_commons.platform.cache.infrastructure.repositories import MemoryCacheStore, RedisCacheStore
from quill_commons.platform.cache.module import create_cache_platform


class TestCachePlatform:
    """Test the wired platform facade."""

    @pytest.mark.asyncio
    async def test_read_invalidate_read(self, platform, counter_factory):
        """Test the three public operations together."""
        key = platform.build_key("articles", {"page": 1, "limit": 10})
        compute = counter_factory(result={"items": ["v1"]})

        await platform.get_or_compute(key, 300, compute)
        await platform.get_or_compute(key, 300, compute)
        assert compute.calls == 1

        assert await platform.invalidate("article", {"id": 42}) == 1
        await platform.get_or_compute(key, 300, compute)
        assert compute.calls == 2

    @pytest.mark.asyncio
    async def test_namespace_read_and_flush(self, platform, counter_factory):
        """Test namespace reads and operational flushes."""
        compute = counter_factory(result=["python", "rust"])

        await platform.get_or_compute_in("tags", None, compute)
        await platform.get_or_compute_in("tags", None, compute)
        assert compute.calls == 1

        assert await platform.invalidate_namespace("tags") == 1

    @pytest.mark.asyncio
    async def test_invalidate_after(self, platform, counter_factory):
        """Test the write context manager purges on success."""
        compute = counter_factory(result={"name": "ada"})
        await platform.get_or_compute_in("user-profile", {"wallet": "0xab"}, compute)

        async with platform.invalidate_after("subscription", {"wallet": "0xab"}):
            pass

        await platform.get_or_compute_in("user-profile", {"wallet": "0xab"}, compute)
        assert compute.calls == 2

    @pytest.mark.asyncio
    async def test_ttl_overrides_from_settings(self, clock, counter_factory):
        """Test settings TTL overrides reach namespace reads."""
        settings = QuillSettings(_env_file=None, cache_ttl_overrides={"trending": 5})
        platform = create_cache_platform(settings=settings, store=MemoryCacheStore(clock=clock))
        compute = counter_factory(result=[])

        await platform.get_or_compute_in("trending", None, compute)
        clock.advance(5)
        await platform.get_or_compute_in("trending", None, compute)

        assert compute.calls == 2

    @pytest.mark.asyncio
    async def test_disabled_cache(self, counter_factory):
        """Test a disabled cache computes every time."""
        platform = create_cache_platform(settings=QuillSettings(_env_file=None, cache_enabled=False))
        compute = counter_factory(result=[])

        await platform.get_or_compute_in("featured", None, compute)
        await platform.get_or_compute_in("featured", None, compute)

        assert compute.calls == 2

    @pytest.mark.asyncio
    async def test_health_check(self, platform, counter_factory):
        """Test health reports backend, namespaces and counters."""
        await platform.get_or_compute_in("tags", None, counter_factory(result=[]))

        health = await platform.health_check()

        assert health["healthy"] is True
        assert health["backend"] == "memory"
        assert "articles" in health["namespaces"]
        assert health["metrics"]["misses"] == 1

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, platform):
        """Test closing twice is safe."""
        await platform.close()
        await platform.close()

    @pytest.mark.asyncio
    async def test_redis_backend_selected(self):
        """Test the redis backend is built from settings without connecting."""
        settings = QuillSettings(
            _env_file=None,
            cache_backend="redis",
            redis_url="redis://localhost:6379/0",
            cache_key_prefix="test:",
            cache_invalidation_batch_size=50,
            redis_scan_count=1000,
        )

        platform = create_cache_platform(settings=settings)

        assert isinstance(platform.adapter.store, RedisCacheStore)
        assert platform.adapter.store.key_prefix == "test:"
        assert platform.adapter.store.scan_count == 1000
        await platform.close()

    def test_permissive_namespaces(self):
        """Test strictness follows settings."""
        platform = create_cache_platform(settings=QuillSettings(_env_file=None, cache_strict_namespaces=False))

        assert platform.build_key("drafts", {"page": 1}) == "drafts:page=1"


def _create_app(settings, computes):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with cache_lifespan(app, settings=settings):
            yield

    app = FastAPI(lifespan=lifespan)

    @app.get("/articles")
    async def list_articles(page: int, cache: ReadThroughCacheDependency):
        async def compute():
            computes.append(page)
            return {"page": page, "items": [f"article-{page}"]}

        return await cache.get_or_compute_in("articles", {"page": page, "limit": 10}, compute)

    @app.post("/articles/{slug}/likes")
    async def like_article(slug: str, invalidation: InvalidationServiceDependency):
        return {"deleted": await invalidation.invalidate("like", {"article_slug": slug})}

    @app.get("/cache/key")
    async def show_key(slug: str, key_builder: KeyBuilderDependency):
        return {"key": key_builder.build_key("article", {"slug": slug})}

    @app.get("/cache/health")
    async def cache_health(platform: CachePlatformDependency):
        return await platform.health_check()

    return app


class TestCacheDependencies:
    """Test FastAPI dependency wiring."""

    def test_request_cycle(self, settings):
        """Test reads are cached across requests and purged by writes."""
        computes = []
        app = _create_app(settings, computes)

        with TestClient(app) as client:
            assert client.get("/articles", params={"page": 1}).json() == {"page": 1, "items": ["article-1"]}
            assert client.get("/articles", params={"page": 1}).status_code == 200
            assert computes == [1]

            assert client.post("/articles/intro/likes").json() == {"deleted": 1}
            client.get("/articles", params={"page": 1})
            assert computes == [1, 1]

            assert client.get("/cache/key", params={"slug": "a b"}).json() == {"key": "article:slug=a%20b:"}

            health = client.get("/cache/health").json()
            assert health["healthy"] is True
            assert health["metrics"]["hits"] == 1

        assert app.state.cache_platform is None

    def test_platform_missing_without_lifespan(self):
        """Test dependencies fail with 503 when the lifespan did not run."""
        app = FastAPI()

        @app.get("/cache/health")
        async def cache_health(platform: CachePlatformDependency):
            return await platform.health_check()

        with TestClient(app) as client:
            response = client.get("/cache/health")

        assert response.status_code == 503
