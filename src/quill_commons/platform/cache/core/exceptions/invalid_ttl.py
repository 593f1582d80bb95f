"""Invalid TTL exception."""

from typing import Any

from .....core.exceptions import CacheError


class InvalidTtl(CacheError):
    """TTL is not a positive whole number of seconds."""

    def __init__(self, ttl: Any):
        self.ttl = ttl
        super().__init__(
            f"Cache TTL must be a positive number of seconds, got {ttl!r}",
            error_code="CACHE_INVALID_TTL",
            details={"ttl": repr(ttl)},
        )
