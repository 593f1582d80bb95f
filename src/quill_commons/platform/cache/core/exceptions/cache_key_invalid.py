"""Cache key invalid exception.

ONLY key validation errors - exception raised when a cache key or an
invalidation pattern fails validation.

Following maximum separation architecture - one file = one purpose.
"""

from typing import Optional

from .....core.exceptions import CacheError


class CacheKeyInvalid(CacheError):
    """Cache key validation error.

    Raised when a cache key fails validation rules such as:
    - Empty key or empty namespace
    - Namespace with characters outside ``[a-z0-9_-]``
    - Parameter names that are not identifiers
    - Parameters a namespace does not declare
    - Wildcard patterns that are not a single trailing ``*``
    """

    def __init__(
        self,
        key: str,
        reason: str,
        error_code: Optional[str] = None,
        details: Optional[dict] = None
    ):
        """Initialize cache key validation error.

        Args:
            key: The invalid cache key, namespace or pattern
            reason: Human-readable reason for validation failure
            error_code: Optional machine-readable error code
            details: Optional additional error details
        """
        self.key = key
        self.reason = reason
        super().__init__(
            f"Invalid cache key '{key}': {reason}",
            error_code=error_code or "CACHE_KEY_INVALID",
            details=details,
        )

    @classmethod
    def empty_key(cls) -> "CacheKeyInvalid":
        """Create exception for empty cache key."""
        return cls(
            key="",
            reason="Cache key cannot be empty",
            error_code="CACHE_KEY_EMPTY"
        )

    @classmethod
    def invalid_namespace(cls, namespace: str) -> "CacheKeyInvalid":
        """Create exception for a malformed namespace identifier."""
        return cls(
            key=namespace,
            reason="Namespace must match [a-z][a-z0-9_-]*",
            error_code="CACHE_KEY_INVALID_NAMESPACE",
        )

    @classmethod
    def invalid_param_name(cls, key: str, name: str) -> "CacheKeyInvalid":
        """Create exception for a parameter name that is not an identifier."""
        return cls(
            key=key,
            reason=f"Parameter name '{name}' is not a valid identifier",
            error_code="CACHE_KEY_INVALID_PARAM_NAME",
            details={"param": name},
        )

    @classmethod
    def unexpected_param(cls, namespace: str, name: str) -> "CacheKeyInvalid":
        """Create exception for a parameter the namespace does not declare."""
        return cls(
            key=namespace,
            reason=f"Parameter '{name}' is not declared by namespace '{namespace}'",
            error_code="CACHE_KEY_UNEXPECTED_PARAM",
            details={"param": name, "namespace": namespace},
        )

    @classmethod
    def invalid_pattern(cls, pattern: str, issue: str) -> "CacheKeyInvalid":
        """Create exception for an unsupported invalidation pattern."""
        return cls(
            key=pattern,
            reason=f"Unsupported invalidation pattern: {issue}",
            error_code="CACHE_PATTERN_INVALID",
        )
