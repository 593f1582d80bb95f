"""Tests for the cache event publisher."""

from quill_commons.platform.cache.application.services.event_publisher import (
    CacheEventPublisher, create_cache_event_publisher
)
from quill_commons.platform.cache.core.events import (
    CacheHit, CacheInvalidated, CacheMiss, CacheStoreFailure
)
from quill_commons.platform.cache.core.value_objects import InvalidationPattern


class TestCacheEventPublisher:
    """Test subscription and counters."""

    def test_subscribers_receive_their_event_type(self):
        """Test handlers only see the event class they subscribed to."""
        publisher = create_cache_event_publisher()
        hits, misses = [], []
        publisher.subscribe(CacheHit, hits.append)
        publisher.subscribe(CacheMiss, misses.append)

        publisher.publish(CacheHit(key="tags:", namespace="tags"))

        assert len(hits) == 1
        assert misses == []
        assert hits[0].get_event_type() == "cache.hit"

    def test_duplicate_subscription_ignored(self):
        """Test a handler registered twice runs once."""
        publisher = CacheEventPublisher()
        seen = []
        publisher.subscribe(CacheMiss, seen.append)
        publisher.subscribe(CacheMiss, seen.append)

        publisher.publish(CacheMiss(key="tags:", namespace="tags"))

        assert len(seen) == 1
        assert publisher.unsubscribe(CacheMiss, seen.append) is True
        assert publisher.unsubscribe(CacheMiss, seen.append) is False

    def test_failing_handler_is_logged_not_raised(self, log_messages):
        """Test a broken subscriber never breaks publishing."""
        publisher = CacheEventPublisher()
        seen = []

        def broken(event):
            raise RuntimeError("dashboard offline")

        publisher.subscribe(CacheHit, broken)
        publisher.subscribe(CacheHit, seen.append)

        publisher.publish(CacheHit(key="tags:", namespace="tags"))

        assert len(seen) == 1
        assert publisher.metrics.handler_errors == 1
        assert any(m.startswith("ERROR|Cache event handler") for m in log_messages)

    def test_metrics(self):
        """Test counters for every event kind."""
        publisher = CacheEventPublisher()
        publisher.publish(CacheHit(key="tags:", namespace="tags"))
        publisher.publish(CacheHit(key="tags:", namespace="tags"))
        publisher.publish(CacheMiss(key="trending:", namespace="trending"))
        publisher.publish(CacheMiss(key="trending:", namespace="trending", joined_in_flight=True))
        publisher.publish(CacheInvalidated(pattern=InvalidationPattern("articles:"), keys_deleted=7))
        publisher.publish(CacheStoreFailure(operation="get", target="tags:", error="timeout"))
        publisher.publish(CacheStoreFailure(
            operation="scan", target="articles:*", error="timeout", staleness_risk=True
        ))

        metrics = publisher.metrics.to_dict()

        assert metrics["hits"] == 2
        assert metrics["misses"] == 2
        assert metrics["hit_rate"] == 50.0
        assert metrics["joined_in_flight"] == 1
        assert metrics["invalidations"] == 1
        assert metrics["keys_invalidated"] == 7
        assert metrics["store_failures"] == 2
        assert metrics["staleness_risks"] == 1

        publisher.reset_metrics()
        assert publisher.metrics.hits == 0
        assert publisher.metrics.hit_rate == 0.0

    def test_metrics_disabled(self):
        """Test publishing still works without counters."""
        publisher = CacheEventPublisher(enable_metrics=False)
        seen = []
        publisher.subscribe(CacheHit, seen.append)

        publisher.publish(CacheHit(key="tags:", namespace="tags"))
        publisher.reset_metrics()

        assert publisher.metrics is None
        assert len(seen) == 1
