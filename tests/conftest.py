"""Pytest configuration and fixtures for quill-commons tests."""

import asyncio

import pytest
from loguru import logger

from quill_commons.config.settings import QuillSettings
from quill_commons.platform.cache.application.services.cache_store_adapter import CacheStoreAdapter
from quill_commons.platform.cache.application.services.event_publisher import CacheEventPublisher
from quill_commons.platform.cache.application.services.invalidation_service import InvalidationService
from quill_commons.platform.cache.application.services.key_builder import KeyBuilder
from quill_commons.platform.cache.application.services.read_through_cache import ReadThroughCache
from quill_commons.platform.cache.infrastructure.configuration.blog_namespaces import create_blog_registry
from quill_commons.platform.cache.infrastructure.repositories.memory_cache_store import MemoryCacheStore
from quill_commons.platform.cache.infrastructure.serializers.json_serializer import JSONCacheSerializer
from quill_commons.platform.cache.module import create_cache_platform


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Fake clock for TTL expiry."""
    return FakeClock()


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file."""
    return QuillSettings(_env_file=None, cache_backend="memory")


@pytest.fixture
def registry():
    """Default blog namespace registry."""
    return create_blog_registry()


@pytest.fixture
def key_builder(registry):
    """Strict key builder over the blog registry."""
    return KeyBuilder(registry)


@pytest.fixture
def memory_store(clock):
    """Memory cache store on the fake clock."""
    return MemoryCacheStore(clock=clock)


@pytest.fixture
def publisher():
    """Event publisher with metrics."""
    return CacheEventPublisher()


@pytest.fixture
def adapter(memory_store, publisher):
    """Cache store adapter over the memory store."""
    return CacheStoreAdapter(memory_store, publisher=publisher, batch_size=2)


@pytest.fixture
def serializer():
    """JSON payload serializer."""
    return JSONCacheSerializer()


@pytest.fixture
def read_cache(adapter, serializer, key_builder, registry, publisher):
    """Read-through cache wired to the memory store."""
    return ReadThroughCache(adapter, serializer, key_builder, registry, publisher=publisher)


@pytest.fixture
def invalidation(registry, key_builder, adapter, publisher):
    """Invalidation coordinator with fine granularity."""
    return InvalidationService(registry, key_builder, adapter, publisher=publisher)


@pytest.fixture
def platform(settings, clock):
    """Cache platform on the memory backend."""
    return create_cache_platform(settings=settings, store=MemoryCacheStore(clock=clock))


@pytest.fixture
def log_messages():
    """Capture loguru output as ``LEVEL|message`` strings."""
    messages = []
    sink_id = logger.add(lambda message: messages.append(message.rstrip("\n")), format="{level}|{message}")
    yield messages
    logger.remove(sink_id)


class Counter:
    """Async compute stub counting its calls."""

    def __init__(self, result=None, error=None, delay=None):
        self.calls = 0
        self.result = result
        self.error = error
        self.delay = delay

    async def __call__(self):
        self.calls += 1
        if self.delay is not None:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def counter_factory():
    """Factory for counting compute stubs."""
    return Counter
