"""Cache miss event.

ONLY miss events - fired when a read has to fall through to compute.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4


@dataclass(frozen=True)
class CacheMiss:
    """Cache miss domain event.

    ``joined_in_flight`` is set when the miss was served by a compute that
    another caller had already started for the same key.
    """

    key: str
    namespace: str
    joined_in_flight: bool = False

    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def get_event_type(self) -> str:
        """Get event type identifier."""
        return "cache.miss"
