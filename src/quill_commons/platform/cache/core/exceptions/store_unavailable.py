"""Store unavailable exception.

ONLY backend availability errors - raised by cache store backends when the
underlying key-value store cannot be reached or rejects an operation.
The cache store adapter absorbs it; business code never sees it.
"""

from typing import Optional

from .....core.exceptions import CacheError


class StoreUnavailable(CacheError):
    """Backing cache store could not complete an operation."""

    def __init__(
        self,
        operation: str,
        target: str,
        original_error: Optional[BaseException] = None
    ):
        """Initialize store failure.

        Args:
            operation: Store operation that failed (get, set, scan, ...)
            target: Key or pattern the operation was applied to
            original_error: Backend exception, if any
        """
        self.operation = operation
        self.target = target
        self.original_error = original_error
        reason = f": {original_error}" if original_error else ""
        super().__init__(
            f"Cache store unavailable during {operation} on '{target}'{reason}",
            error_code="CACHE_STORE_UNAVAILABLE",
            details={
                "operation": operation,
                "target": target,
                "original_error": type(original_error).__name__ if original_error else None,
            },
        )
