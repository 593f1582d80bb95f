"""Cache store protocol.

ONLY cache storage contract - the raw key-value operations a backend must
provide. Backends raise ``StoreUnavailable`` on failure; the failure policy
(degrade, log, publish) lives in the cache store adapter, not here.

Following maximum separation architecture - one file = one purpose.
"""

from typing import List, Optional, Sequence
from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Cache store protocol.

    Defines the interface for cache storage backends:
    - Basic operations (get, set with TTL, delete, exists)
    - Prefix enumeration and bulk delete for pattern purges
    - Health check and shutdown
    """

    async def get(self, key: str) -> Optional[bytes]:
        """Get payload by key.

        Returns None if the key doesn't exist or has expired.
        """
        ...

    async def set(self, key: str, payload: bytes, ttl_seconds: int) -> None:
        """Store payload under key, overwriting, expiring after ttl_seconds."""
        ...

    async def delete(self, key: str) -> bool:
        """Delete key.

        Returns True if the key existed.
        """
        ...

    async def scan_prefix(self, prefix: str) -> List[str]:
        """List live keys starting with prefix."""
        ...

    async def delete_many(self, keys: Sequence[str]) -> int:
        """Delete keys, returning how many existed."""
        ...

    async def exists(self, key: str) -> bool:
        """Check if key exists and is not expired."""
        ...

    async def ping(self) -> bool:
        """Health check - verify store is responsive."""
        ...

    async def close(self) -> None:
        """Release backend resources."""
        ...
