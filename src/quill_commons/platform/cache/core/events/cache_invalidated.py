"""Cache invalidated event.

ONLY invalidation events - fired once per purged pattern with the write that
caused it.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from ..value_objects.invalidation_pattern import InvalidationPattern


@dataclass(frozen=True)
class CacheInvalidated:
    """Cache invalidated domain event.

    Used for invalidation tracking and for detaching in-flight computes whose
    keys the purge covered.
    """

    pattern: InvalidationPattern
    keys_deleted: int
    resource_type: Optional[str] = None
    scoped: bool = False

    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def get_event_type(self) -> str:
        """Get event type identifier."""
        return "cache.invalidated"

    def is_manual(self) -> bool:
        """Check if invalidation was an operational flush, not a write."""
        return self.resource_type is None
