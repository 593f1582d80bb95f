"""Unknown namespace exception.

ONLY registry lookup errors - raised when a key is built for, or a rule
refers to, a namespace that is not registered.
"""

from typing import Iterable, Optional

from .....core.exceptions import CacheError


class UnknownNamespace(CacheError):
    """Namespace is not present in the namespace registry."""

    def __init__(self, namespace: str, known: Optional[Iterable[str]] = None):
        self.namespace = namespace
        known_names = sorted(known) if known is not None else []
        super().__init__(
            f"Unknown cache namespace '{namespace}'",
            error_code="CACHE_UNKNOWN_NAMESPACE",
            details={"namespace": namespace, "registered": known_names},
        )
