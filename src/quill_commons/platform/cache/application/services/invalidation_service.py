"""Cache invalidation coordinator service.

ONLY write-driven invalidation - after a write commits, purges every
namespace the registry's rules tie to the written resource type.

Must be called after the data-store commit; purging before the commit lets
a concurrent read repopulate the cache with the old row. ``invalidate_after``
enforces that ordering at call sites.

Following maximum separation architecture - one file = one purpose.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Tuple

from loguru import logger

from ...core.entities.invalidation_rule import InvalidationRule
from ...core.events.cache_invalidated import CacheInvalidated
from ...core.events.cache_purge_started import CachePurgeStarted
from ...core.value_objects.invalidation_pattern import InvalidationPattern
from .cache_store_adapter import CacheStoreAdapter
from .event_publisher import CacheEventPublisher
from .key_builder import KeyBuilder
from .namespace_registry import NamespaceRegistry

GRANULARITY_FINE = "fine"
GRANULARITY_COARSE = "coarse"


class InvalidationService:
    """Cache invalidation coordinator.

    With ``fine`` granularity a scoped rule purges only the scope named by
    the write context (one author's article list) when every scope value is
    present. With ``coarse`` granularity, or when the context lacks a scope
    value, the whole namespace is purged.
    """

    def __init__(
        self,
        registry: NamespaceRegistry,
        key_builder: KeyBuilder,
        adapter: CacheStoreAdapter,
        publisher: Optional[CacheEventPublisher] = None,
        granularity: str = GRANULARITY_FINE
    ):
        """Initialize invalidation service.

        Args:
            registry: Namespace registry with invalidation rules
            key_builder: Key builder used to render scoped patterns
            adapter: Cache store adapter performing the purges
            publisher: Event publisher for purge events
            granularity: ``fine`` or ``coarse``
        """
        if granularity not in (GRANULARITY_FINE, GRANULARITY_COARSE):
            raise ValueError(
                f"granularity must be '{GRANULARITY_FINE}' or '{GRANULARITY_COARSE}', "
                f"got {granularity!r}"
            )

        self._registry = registry
        self._key_builder = key_builder
        self._adapter = adapter
        self._publisher = publisher
        self._granularity = granularity

    @property
    def granularity(self) -> str:
        """Configured invalidation granularity."""
        return self._granularity

    async def invalidate(
        self,
        resource_type: str,
        context: Optional[Mapping[str, Any]] = None
    ) -> int:
        """Purge every namespace affected by a committed write.

        Args:
            resource_type: Written resource type (article, comment, like, ...)
            context: Write details used to narrow scoped purges

        Returns:
            Total number of keys deleted
        """
        rules = self._registry.rules_for(resource_type)
        if not rules:
            logger.warning(f"No invalidation rules for resource type '{resource_type}'")
            return 0

        total = 0
        for pattern, scoped in self.patterns_for(rules, context or {}):
            total += await self._purge(pattern, resource_type, scoped)

        logger.info(f"Invalidated {total} cache keys after '{resource_type}' write")
        return total

    @asynccontextmanager
    async def invalidate_after(
        self,
        resource_type: str,
        context: Optional[Mapping[str, Any]] = None
    ) -> AsyncIterator[Dict[str, Any]]:
        """Invalidate once the wrapped write block completes without error.

        Yields a mutable copy of the context so the block can add values only
        known after the write, such as a generated slug.

        Example:
            async with invalidation.invalidate_after("article", {"author_wallet": w}) as ctx:
                article = await repo.create(data)
                ctx["slug"] = article.slug
        """
        write_context: Dict[str, Any] = dict(context or {})
        yield write_context
        await self.invalidate(resource_type, write_context)

    async def invalidate_namespace(self, name: str) -> int:
        """Purge one whole namespace (operational flush).

        Raises:
            UnknownNamespace: If the namespace is not registered
        """
        namespace = self._registry.get(name)
        deleted = await self._purge(namespace.pattern(), None, False)
        logger.info(f"Flushed cache namespace '{name}': {deleted} keys")
        return deleted

    def patterns_for(
        self,
        rules: Tuple[InvalidationRule, ...],
        context: Mapping[str, Any]
    ) -> List[Tuple[InvalidationPattern, bool]]:
        """Resolve rules to de-duplicated purge patterns.

        Returns:
            (pattern, scoped) pairs in rule order; patterns covered by a
            broader pattern in the list are dropped
        """
        resolved: List[Tuple[InvalidationPattern, bool]] = []
        for rule in rules:
            pattern = None
            if rule.is_scoped and self._granularity == GRANULARITY_FINE:
                scope = {param: context.get(field) for param, field in rule.scope.items()}
                pattern = self._key_builder.scope_pattern(rule.namespace, scope)

            if pattern is None:
                resolved.append((self._registry.get(rule.namespace).pattern(), False))
            else:
                resolved.append((pattern, True))

        unique: List[Tuple[InvalidationPattern, bool]] = []
        for pattern, scoped in resolved:
            if any(other.covers(pattern) for other, _ in unique):
                continue
            unique = [(other, s) for other, s in unique if not pattern.covers(other)]
            unique.append((pattern, scoped))
        return unique

    async def _purge(
        self,
        pattern: InvalidationPattern,
        resource_type: Optional[str],
        scoped: bool
    ) -> int:
        self._publish(CachePurgeStarted(pattern=pattern, resource_type=resource_type))
        deleted = await self._adapter.delete_by_pattern(pattern)
        logger.debug(f"Purged '{pattern}': {deleted} keys")
        self._publish(CacheInvalidated(
            pattern=pattern,
            keys_deleted=deleted,
            resource_type=resource_type,
            scoped=scoped,
        ))
        return deleted

    def _publish(self, event: Any) -> None:
        if self._publisher is not None:
            self._publisher.publish(event)
