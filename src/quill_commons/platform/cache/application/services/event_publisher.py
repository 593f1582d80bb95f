"""Cache event publishing service.

ONLY event publishing - delivers cache domain events to in-process
subscribers and keeps hit/miss/failure counters for monitoring.

Publishing is synchronous: subscribers run inline and must not block. A
failing subscriber is logged and never breaks the cache operation that
published the event.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from loguru import logger

from ...core.events.cache_hit import CacheHit
from ...core.events.cache_miss import CacheMiss
from ...core.events.cache_invalidated import CacheInvalidated
from ...core.events.cache_store_failure import CacheStoreFailure

EventHandler = Callable[[Any], None]


@dataclass
class CacheMetrics:
    """Cache event counters."""

    hits: int = 0
    misses: int = 0
    joined_in_flight: int = 0
    store_failures: int = 0
    staleness_risks: int = 0
    invalidations: int = 0
    keys_invalidated: int = 0
    handler_errors: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate percentage."""
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return (self.hits / total) * 100.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(self.hit_rate, 2),
            "joined_in_flight": self.joined_in_flight,
            "store_failures": self.store_failures,
            "staleness_risks": self.staleness_risks,
            "invalidations": self.invalidations,
            "keys_invalidated": self.keys_invalidated,
            "handler_errors": self.handler_errors,
        }


class CacheEventPublisher:
    """Cache event publishing service.

    Subscribers register per event class. Metrics are updated before
    subscribers run so counters stay correct even when a subscriber fails.
    """

    def __init__(self, enable_metrics: bool = True):
        """Initialize cache event publisher.

        Args:
            enable_metrics: Whether to track event counters
        """
        self._handlers: Dict[Type, List[EventHandler]] = {}
        self._metrics = CacheMetrics() if enable_metrics else None

    @property
    def metrics(self) -> Optional[CacheMetrics]:
        """Current counters, None when metrics are disabled."""
        return self._metrics

    def subscribe(self, event_type: Type, handler: EventHandler) -> None:
        """Register a handler for one event class."""
        handlers = self._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, event_type: Type, handler: EventHandler) -> bool:
        """Remove a handler, returning whether it was registered."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def publish(self, event: Any) -> None:
        """Publish an event to its subscribers."""
        if self._metrics is not None:
            self._record(event)

        for handler in list(self._handlers.get(type(event), ())):
            try:
                handler(event)
            except Exception as e:
                if self._metrics is not None:
                    self._metrics.handler_errors += 1
                logger.opt(exception=e).error(
                    f"Cache event handler {getattr(handler, '__qualname__', handler)!r} "
                    f"failed on {event.get_event_type()}: {e}"
                )

    def reset_metrics(self) -> None:
        """Reset event counters."""
        if self._metrics is not None:
            self._metrics = CacheMetrics()

    def _record(self, event: Any) -> None:
        metrics = self._metrics
        if isinstance(event, CacheHit):
            metrics.hits += 1
        elif isinstance(event, CacheMiss):
            metrics.misses += 1
            if event.joined_in_flight:
                metrics.joined_in_flight += 1
        elif isinstance(event, CacheInvalidated):
            metrics.invalidations += 1
            metrics.keys_invalidated += event.keys_deleted
        elif isinstance(event, CacheStoreFailure):
            metrics.store_failures += 1
            if event.staleness_risk:
                metrics.staleness_risks += 1


def create_cache_event_publisher(enable_metrics: bool = True) -> CacheEventPublisher:
    """Create cache event publisher."""
    return CacheEventPublisher(enable_metrics=enable_metrics)
