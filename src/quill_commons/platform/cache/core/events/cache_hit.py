"""Cache hit event.

ONLY hit events - fired when a read is served from the cache.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4


@dataclass(frozen=True)
class CacheHit:
    """Cache hit domain event."""

    key: str
    namespace: str
    lookup_time_ms: float = 0.0
    payload_size_bytes: int = 0

    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def get_event_type(self) -> str:
        """Get event type identifier."""
        return "cache.hit"
