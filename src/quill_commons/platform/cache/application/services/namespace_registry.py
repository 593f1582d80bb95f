"""Namespace registry service.

ONLY static namespace configuration - the set of cacheable resource families
and the invalidation rules between them. Built once at startup and read-only
afterwards; there is no runtime registration.

Following maximum separation architecture - one file = one purpose.
"""

from collections import defaultdict
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ...core.entities.cache_namespace import CacheNamespace
from ...core.entities.invalidation_rule import InvalidationRule
from ...core.exceptions.unknown_namespace import UnknownNamespace
from ...core.value_objects.cache_ttl import CacheTTL


class NamespaceRegistry:
    """Immutable registry of cache namespaces and invalidation rules.

    Validates at construction that:
    - Namespace names are unique
    - Every rule targets a registered namespace
    - Every scoped rule names scope parameters the namespace declares
    """

    def __init__(
        self,
        namespaces: Iterable[CacheNamespace],
        rules: Iterable[InvalidationRule] = (),
        ttl_overrides: Optional[Mapping[str, int]] = None
    ):
        """Initialize namespace registry.

        Args:
            namespaces: Namespace definitions
            rules: Invalidation rules between resource types and namespaces
            ttl_overrides: Optional namespace -> seconds deployment overrides
        """
        by_name: Dict[str, CacheNamespace] = {}
        for namespace in namespaces:
            if namespace.name in by_name:
                raise ValueError(f"Namespace '{namespace.name}' registered twice")
            by_name[namespace.name] = namespace

        by_resource: Dict[str, List[InvalidationRule]] = defaultdict(list)
        for rule in rules:
            target = by_name.get(rule.namespace)
            if target is None:
                raise UnknownNamespace(rule.namespace, by_name)
            unknown_scope = [p for p in rule.scope if p not in target.scope_params]
            if unknown_scope:
                raise ValueError(
                    f"Rule for '{rule.resource_type}' scopes namespace "
                    f"'{rule.namespace}' by undeclared parameters {unknown_scope}"
                )
            if rule not in by_resource[rule.resource_type]:
                by_resource[rule.resource_type].append(rule)

        ttls: Dict[str, CacheTTL] = {name: ns.default_ttl for name, ns in by_name.items()}
        for name, seconds in (ttl_overrides or {}).items():
            if name not in by_name:
                raise UnknownNamespace(name, by_name)
            ttls[name] = CacheTTL.of(seconds)

        self._namespaces: Mapping[str, CacheNamespace] = MappingProxyType(by_name)
        self._rules: Mapping[str, Tuple[InvalidationRule, ...]] = MappingProxyType(
            {resource: tuple(items) for resource, items in by_resource.items()}
        )
        self._ttls: Mapping[str, CacheTTL] = MappingProxyType(ttls)

    def get(self, name: str) -> CacheNamespace:
        """Get namespace by name.

        Raises:
            UnknownNamespace: If the namespace is not registered
        """
        try:
            return self._namespaces[name]
        except KeyError:
            raise UnknownNamespace(name, self._namespaces) from None

    def find(self, name: str) -> Optional[CacheNamespace]:
        """Get namespace by name, None if not registered."""
        return self._namespaces.get(name)

    def ttl_for(self, name: str) -> CacheTTL:
        """Effective TTL of a namespace, after deployment overrides."""
        self.get(name)
        return self._ttls[name]

    def rules_for(self, resource_type: str) -> Tuple[InvalidationRule, ...]:
        """Invalidation rules registered for a resource type."""
        return self._rules.get(resource_type, ())

    def resource_types(self) -> List[str]:
        """Resource types that have invalidation rules."""
        return sorted(self._rules)

    def names(self) -> List[str]:
        """Registered namespace names."""
        return sorted(self._namespaces)

    def __contains__(self, name: object) -> bool:
        return name in self._namespaces

    def __iter__(self):
        return iter(self._namespaces.values())

    def __len__(self) -> int:
        return len(self._namespaces)
