"""Cache namespace domain entity.

ONLY namespace entity - one family of cache keys (a resource list, a
singleton lookup) with its key prefix, default TTL and key shape.

Following maximum separation architecture - one file = one purpose.
"""

from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from ..value_objects.cache_key import NAMESPACE_PATTERN, PARAM_NAME_PATTERN
from ..value_objects.cache_ttl import CacheTTL
from ..value_objects.invalidation_pattern import InvalidationPattern


@dataclass(frozen=True)
class CacheNamespace:
    """Cache namespace domain entity.

    The namespace name is also the key prefix. Namespaces enable:
    - Collision-free keys across resource families
    - Whole-family purges through ``name:*``
    - Scoped purges through the leading scope parameters
      (``user-articles:wallet=0xab:*``)
    - Per-family default TTLs
    """

    # Core identity
    name: str
    description: str
    default_ttl: CacheTTL

    # Parameters emitted first, in this order, so scoped purges are prefixes
    scope_params: Tuple[str, ...] = ()

    # Full key shape; empty means any parameter names are accepted
    key_params: Tuple[str, ...] = ()

    def __post_init__(self):
        """Validate namespace configuration."""
        if not self.name or not NAMESPACE_PATTERN.match(self.name):
            raise ValueError(
                f"Namespace name '{self.name}' must match {NAMESPACE_PATTERN.pattern}"
            )

        for param in self.scope_params + self.key_params:
            if not PARAM_NAME_PATTERN.match(param):
                raise ValueError(f"Namespace '{self.name}' has invalid parameter name '{param}'")

        if len(set(self.scope_params)) != len(self.scope_params):
            raise ValueError(f"Namespace '{self.name}' repeats a scope parameter")

        if self.key_params:
            missing = [p for p in self.scope_params if p not in self.key_params]
            if missing:
                raise ValueError(
                    f"Namespace '{self.name}' scope parameters {missing} are not in key_params"
                )

    @property
    def is_scoped(self) -> bool:
        """Check if namespace supports scoped purges."""
        return bool(self.scope_params)

    def accepts_param(self, name: str) -> bool:
        """Check if a parameter name belongs to this namespace's key shape."""
        return not self.key_params or name in self.key_params

    def pattern(self) -> InvalidationPattern:
        """Pattern matching every key of this namespace."""
        return InvalidationPattern.namespace(self.name)

    def scoped_pattern(self, encoded_scope: Mapping[str, str]) -> Optional[InvalidationPattern]:
        """Pattern matching one scope of this namespace.

        Args:
            encoded_scope: Already-escaped values keyed by scope parameter

        Returns:
            Scoped pattern, or None when a scope value is missing
        """
        if not self.scope_params:
            return None

        segments = []
        for param in self.scope_params:
            if param not in encoded_scope:
                return None
            segments.append(f"{param}={encoded_scope[param]}")

        return InvalidationPattern(f"{self.name}:{':'.join(segments)}:")

    def __str__(self) -> str:
        """String representation of namespace."""
        return self.name
