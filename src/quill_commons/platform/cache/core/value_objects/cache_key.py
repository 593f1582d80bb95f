"""Cache key value object.

ONLY key structure - immutable ``namespace:name=value:...`` key with
validation of its namespace segment.

Following maximum separation architecture - one file = one purpose.
"""

import re
from dataclasses import dataclass
from typing import Sequence, Tuple

from ..exceptions.cache_key_invalid import CacheKeyInvalid

SEGMENT_SEPARATOR = ":"
PARAM_SEPARATOR = "="

NAMESPACE_PATTERN = re.compile(r"^[a-z][a-z0-9_-]*$")
PARAM_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class CacheKey:
    """Cache key value object.

    Features:
    - Namespace segment first, so ``namespace:*`` selects the whole family
    - Ordered ``name=value`` segments with pre-escaped values
    - Equality and hashing by string value
    """

    value: str

    # Keys longer than this have their parameter tail hashed by the builder
    MAX_LENGTH = 250

    def __post_init__(self):
        """Validate cache key on creation."""
        if not self.value:
            raise CacheKeyInvalid.empty_key()

        if not NAMESPACE_PATTERN.match(self.namespace):
            raise CacheKeyInvalid.invalid_namespace(self.namespace)

    @classmethod
    def from_segments(
        cls,
        namespace: str,
        scope_segments: Sequence[Tuple[str, str]] = (),
        segments: Sequence[Tuple[str, str]] = ()
    ) -> "CacheKey":
        """Create cache key from a namespace and encoded ``(name, value)`` pairs.

        The namespace and every scope segment are terminated by the
        separator, so ``namespace:`` and ``namespace:scope=v:`` are prefixes
        of every key they cover (``tags:``, ``article:slug=intro:``,
        ``user-articles:wallet=0xab:page=1``).
        """
        head = namespace + SEGMENT_SEPARATOR + "".join(
            f"{name}{PARAM_SEPARATOR}{value}{SEGMENT_SEPARATOR}" for name, value in scope_segments
        )
        tail = SEGMENT_SEPARATOR.join(f"{name}{PARAM_SEPARATOR}{value}" for name, value in segments)
        return cls(head + tail)

    @property
    def namespace(self) -> str:
        """Get namespace segment (text before the first colon)."""
        return self.value.split(SEGMENT_SEPARATOR, 1)[0]

    def __len__(self) -> int:
        return len(self.value)

    def __str__(self) -> str:
        """String representation."""
        return self.value
