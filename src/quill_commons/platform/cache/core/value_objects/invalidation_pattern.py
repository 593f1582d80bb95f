"""Invalidation pattern value object.

ONLY pattern matching - prefix patterns with a single trailing wildcard
(``articles:*``, ``user-articles:wallet=0xab:*``). Arbitrary globs and
regular expressions are rejected so purge cost stays bounded and the
behaviour is identical on every backend.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass

from ..exceptions.cache_key_invalid import CacheKeyInvalid

WILDCARD = "*"

# Characters with glob meaning in backends that enumerate by pattern.
_GLOB_SPECIALS = frozenset("*?[]\\")


@dataclass(frozen=True)
class InvalidationPattern:
    """Invalidation pattern value object.

    Holds the literal prefix; the trailing wildcard is implicit. Prefixes
    built by the key builder always end with ``:`` so a namespace pattern can
    never match a sibling namespace that shares leading characters.
    """

    prefix: str

    def __post_init__(self):
        """Validate invalidation pattern."""
        if not self.prefix:
            raise CacheKeyInvalid.invalid_pattern(WILDCARD, "empty prefix would match every key")

        found = _GLOB_SPECIALS.intersection(self.prefix)
        if found:
            raise CacheKeyInvalid.invalid_pattern(
                self.prefix + WILDCARD,
                f"prefix contains wildcard characters {sorted(found)}",
            )

    @classmethod
    def parse(cls, pattern: str) -> "InvalidationPattern":
        """Create pattern from its ``prefix*`` string form."""
        if not pattern.endswith(WILDCARD):
            raise CacheKeyInvalid.invalid_pattern(pattern, "pattern must end with a single '*'")
        return cls(pattern[:-1])

    @classmethod
    def namespace(cls, name: str) -> "InvalidationPattern":
        """Create pattern matching every key of a namespace."""
        return cls(f"{name}:")

    def matches(self, cache_key: str) -> bool:
        """Check if cache key matches this pattern."""
        return cache_key.startswith(self.prefix)

    def to_glob(self, key_prefix: str = "") -> str:
        """Render as an escaped glob for backends with glob enumeration."""
        escaped = "".join(
            f"\\{char}" if char in _GLOB_SPECIALS else char
            for char in key_prefix + self.prefix
        )
        return escaped + WILDCARD

    def covers(self, other: "InvalidationPattern") -> bool:
        """Check if every key matched by ``other`` is also matched by this."""
        return other.prefix.startswith(self.prefix)

    def __str__(self) -> str:
        """String representation."""
        return self.prefix + WILDCARD
