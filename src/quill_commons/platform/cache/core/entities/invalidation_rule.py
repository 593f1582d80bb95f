"""Invalidation rule domain entity.

ONLY write-to-purge mapping - states which namespace a write on a resource
type makes stale, and which write context fields narrow the purge.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class InvalidationRule:
    """Invalidation rule domain entity.

    ``scope`` maps a scope parameter of the target namespace to the context
    field that carries its value, e.g. ``{"wallet": "author_wallet"}``. An
    empty scope always purges the whole namespace.
    """

    resource_type: str
    namespace: str
    scope: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Validate rule and freeze its scope mapping."""
        if not self.resource_type:
            raise ValueError("Invalidation rule resource_type cannot be empty")
        if not self.namespace:
            raise ValueError("Invalidation rule namespace cannot be empty")
        object.__setattr__(self, "scope", MappingProxyType(dict(self.scope)))

    @property
    def is_scoped(self) -> bool:
        """Check if rule can narrow its purge to one scope."""
        return bool(self.scope)

    def __hash__(self) -> int:
        return hash((self.resource_type, self.namespace, tuple(sorted(self.scope.items()))))

    def __eq__(self, other) -> bool:
        if not isinstance(other, InvalidationRule):
            return False
        return (
            self.resource_type == other.resource_type
            and self.namespace == other.namespace
            and dict(self.scope) == dict(other.scope)
        )
