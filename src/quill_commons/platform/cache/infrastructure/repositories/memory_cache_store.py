"""Memory cache store.

ONLY in-memory implementation - implements cache storage in process memory
for development, tests, and single-instance deployments.

Expiry is lazy: expired entries are dropped when read or enumerated. The
clock is injectable so TTL behaviour can be tested without sleeping.

Following maximum separation architecture - one file = one purpose.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

Clock = Callable[[], float]


@dataclass(frozen=True)
class _StoredEntry:
    payload: bytes
    expires_at: float


class MemoryCacheStore:
    """In-memory cache store.

    All operations are plain dict accesses with no suspension points, so
    they are atomic per key under a single event loop.
    """

    def __init__(self, clock: Optional[Clock] = None):
        """Initialize memory cache store.

        Args:
            clock: Monotonic clock in seconds, defaults to time.monotonic
        """
        self._clock: Clock = clock or time.monotonic
        self._entries: Dict[str, _StoredEntry] = {}
        self._stats = {
            "gets": 0,
            "sets": 0,
            "deletes": 0,
            "expired_cleanups": 0,
        }

    def _live(self, key: str) -> Optional[_StoredEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            del self._entries[key]
            self._stats["expired_cleanups"] += 1
            return None
        return entry

    async def get(self, key: str) -> Optional[bytes]:
        """Get payload by key."""
        self._stats["gets"] += 1
        entry = self._live(key)
        return entry.payload if entry else None

    async def set(self, key: str, payload: bytes, ttl_seconds: int) -> None:
        """Store payload, overwriting any existing entry."""
        self._entries[key] = _StoredEntry(
            payload=bytes(payload),
            expires_at=self._clock() + ttl_seconds,
        )
        self._stats["sets"] += 1

    async def delete(self, key: str) -> bool:
        """Delete key."""
        existed = self._live(key) is not None
        self._entries.pop(key, None)
        if existed:
            self._stats["deletes"] += 1
        return existed

    async def scan_prefix(self, prefix: str) -> List[str]:
        """List live keys starting with prefix."""
        return sorted(
            key for key in list(self._entries)
            if key.startswith(prefix) and self._live(key) is not None
        )

    async def delete_many(self, keys: Sequence[str]) -> int:
        """Delete keys, returning how many existed."""
        deleted = 0
        for key in keys:
            if await self.delete(key):
                deleted += 1
        return deleted

    async def exists(self, key: str) -> bool:
        """Check if key exists and is not expired."""
        return self._live(key) is not None

    async def ping(self) -> bool:
        """Health check - memory store is always responsive."""
        return True

    async def close(self) -> None:
        """Drop all entries."""
        self._entries.clear()

    async def cleanup_expired(self) -> int:
        """Remove all expired entries."""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]
        self._stats["expired_cleanups"] += len(expired)
        return len(expired)

    def get_stats(self) -> Dict[str, int]:
        """Get store statistics."""
        return {**self._stats, "total_keys": len(self._entries)}

    def __len__(self) -> int:
        return len(self._entries)


def create_memory_cache_store(clock: Optional[Clock] = None) -> MemoryCacheStore:
    """Create memory cache store."""
    return MemoryCacheStore(clock=clock)
