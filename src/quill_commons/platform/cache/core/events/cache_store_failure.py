"""Cache store failure event.

ONLY store failure events - fired when the adapter absorbs a backend error so
silent degradation stays visible to monitoring.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4


@dataclass(frozen=True)
class CacheStoreFailure:
    """Cache store failure domain event.

    ``staleness_risk`` is True for failed deletes and purges: the cache may
    now serve data older than the last committed write until the TTL runs
    out.
    """

    operation: str
    target: str
    error: str
    staleness_risk: bool = False

    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def get_event_type(self) -> str:
        """Get event type identifier."""
        return "cache.store_failure"
