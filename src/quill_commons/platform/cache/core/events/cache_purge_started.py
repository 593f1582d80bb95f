"""Cache purge started event.

ONLY purge start notifications - fired before a pattern purge enumerates
keys, so computes already in flight for covered keys are detached before
they can write a result read ahead of the committed change.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from ..value_objects.invalidation_pattern import InvalidationPattern


@dataclass(frozen=True)
class CachePurgeStarted:
    """Cache purge started domain event."""

    pattern: InvalidationPattern
    resource_type: Optional[str] = None

    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def get_event_type(self) -> str:
        """Get event type identifier."""
        return "cache.purge_started"
