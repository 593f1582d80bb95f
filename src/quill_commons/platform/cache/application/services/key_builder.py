"""Cache key builder service.

ONLY key construction - turns a namespace and query parameters into a
deterministic ``namespace:name=value:...`` key.

Rules:
- Scope parameters of the namespace come first, in declared order, each
  terminated by ``:`` (``user-articles:wallet=0xab:page=1``)
- Remaining parameters are sorted by name, so insertion order never matters
- Declared parameters that are missing, and ``None`` values, render as
  ``name=`` so key shape is stable across call sites
- Values are percent-escaped; ``:``, ``=``, ``%`` and ``*`` never appear raw
- Keys over ``CacheKey.MAX_LENGTH`` keep namespace and scope, and replace the
  remaining tail with ``h=<sha256>``

Following maximum separation architecture - one file = one purpose.
"""

import hashlib
from typing import Any, List, Mapping, Optional, Tuple
from urllib.parse import quote

from ...core.entities.cache_namespace import CacheNamespace
from ...core.exceptions.cache_key_invalid import CacheKeyInvalid
from ...core.exceptions.unknown_namespace import UnknownNamespace
from ...core.exceptions.unserializable_param import UnserializableParam
from ...core.value_objects.cache_key import CacheKey, NAMESPACE_PATTERN, PARAM_NAME_PATTERN
from ...core.value_objects.invalidation_pattern import InvalidationPattern
from .namespace_registry import NamespaceRegistry

PLACEHOLDER = ""
HASH_PARAM = "h"


def encode_param_value(name: str, value: Any) -> str:
    """Render a primitive parameter value as an escaped key segment.

    Raises:
        UnserializableParam: If value is not str, int, float, bool or None
    """
    if value is None:
        return PLACEHOLDER
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        text = str(int(value))
    elif isinstance(value, float):
        text = repr(float(value))
    elif isinstance(value, str):
        text = value
    else:
        raise UnserializableParam(name, value)
    return quote(text, safe="")


class KeyBuilder:
    """Cache key builder.

    In strict mode every namespace must be registered. Permissive mode also
    accepts ad hoc namespaces for internal use, as long as the name is a
    valid identifier; those keys have no declared shape or scope.
    """

    def __init__(self, registry: NamespaceRegistry, strict: bool = True):
        """Initialize key builder.

        Args:
            registry: Namespace registry used to validate namespaces
            strict: Reject namespaces that are not registered
        """
        self._registry = registry
        self._strict = strict

    @property
    def strict(self) -> bool:
        """Whether unknown namespaces are rejected."""
        return self._strict

    def build_key(self, namespace: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Build the cache key for a namespace and its query parameters.

        Args:
            namespace: Registered namespace name (key prefix)
            params: Query parameters; values must be primitives

        Returns:
            Cache key string

        Raises:
            UnknownNamespace: Namespace not registered (strict mode)
            UnserializableParam: A parameter value is not a primitive
            CacheKeyInvalid: Malformed namespace or parameter name, or a
                parameter the namespace does not declare
        """
        definition = self._resolve(namespace)
        params = params or {}

        scope_segments, tail_segments = self._segments(namespace, definition, params)
        key = CacheKey.from_segments(namespace, scope_segments, tail_segments)

        if len(key) > CacheKey.MAX_LENGTH and tail_segments:
            digest = hashlib.sha256(
                ":".join(f"{name}={value}" for name, value in tail_segments).encode("utf-8")
            ).hexdigest()
            key = CacheKey.from_segments(namespace, scope_segments, [(HASH_PARAM, digest)])

        return str(key)

    def scope_pattern(
        self,
        namespace: str,
        scope: Mapping[str, Any]
    ) -> Optional[InvalidationPattern]:
        """Pattern covering every key of one namespace scope.

        Returns None when the namespace is unscoped or a scope value is
        missing from ``scope``.
        """
        definition = self._registry.get(namespace)
        encoded = {
            param: encode_param_value(param, scope[param])
            for param in definition.scope_params
            if param in scope and scope[param] is not None
        }
        return definition.scoped_pattern(encoded)

    def _resolve(self, namespace: str) -> Optional[CacheNamespace]:
        definition = self._registry.find(namespace)
        if definition is not None:
            return definition
        if self._strict:
            raise UnknownNamespace(namespace, self._registry.names())
        if not namespace or not NAMESPACE_PATTERN.match(namespace):
            raise CacheKeyInvalid.invalid_namespace(namespace)
        return None

    def _segments(
        self,
        namespace: str,
        definition: Optional[CacheNamespace],
        params: Mapping[str, Any]
    ) -> Tuple[List[Tuple[str, str]], List[Tuple[str, str]]]:
        for name in params:
            if not isinstance(name, str) or not PARAM_NAME_PATTERN.match(name):
                raise CacheKeyInvalid.invalid_param_name(namespace, str(name))
            if definition is not None and not definition.accepts_param(name):
                raise CacheKeyInvalid.unexpected_param(namespace, name)

        scope_params = definition.scope_params if definition else ()
        names = set(params)
        if definition is not None:
            names.update(definition.key_params)
            names.update(scope_params)

        scope_segments = [
            (name, encode_param_value(name, params.get(name))) for name in scope_params
        ]
        tail_segments = [
            (name, encode_param_value(name, params.get(name)))
            for name in sorted(names)
            if name not in scope_params
        ]
        return scope_segments, tail_segments
