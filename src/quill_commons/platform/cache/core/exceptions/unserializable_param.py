"""Unserializable parameter exception.

ONLY key parameter errors - raised when a key parameter value is not a
primitive (str, int, float, bool or None).
"""

from typing import Any

from .....core.exceptions import CacheError


class UnserializableParam(CacheError):
    """Key parameter value cannot be rendered into a cache key."""

    def __init__(self, name: str, value: Any):
        self.name = name
        self.value_type = type(value).__name__
        super().__init__(
            f"Cache key parameter '{name}' has unsupported type {self.value_type}; "
            "only str, int, float, bool and None are allowed",
            error_code="CACHE_UNSERIALIZABLE_PARAM",
            details={"param": name, "value_type": self.value_type},
        )
