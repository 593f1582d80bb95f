"""Serialization error exceptions.

ONLY payload codec errors - raised when a value cannot be encoded for the
cache or a cached payload cannot be decoded.
"""

from typing import Optional

from .....core.exceptions import CacheError


class SerializationError(CacheError):
    """Computed value could not be serialized for caching."""

    def __init__(
        self,
        message: str,
        serializer_type: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        self.serializer_type = serializer_type
        self.original_error = original_error
        super().__init__(
            message,
            error_code="CACHE_SERIALIZATION_ERROR",
            details={
                "serializer_type": serializer_type,
                "original_error": str(original_error) if original_error else None,
            },
        )


class DeserializationError(CacheError):
    """Cached payload could not be decoded."""

    def __init__(
        self,
        message: str,
        serializer_type: Optional[str] = None,
        original_error: Optional[Exception] = None,
        payload_size: Optional[int] = None
    ):
        self.serializer_type = serializer_type
        self.original_error = original_error
        self.payload_size = payload_size
        super().__init__(
            message,
            error_code="CACHE_DESERIALIZATION_ERROR",
            details={
                "serializer_type": serializer_type,
                "payload_size": payload_size,
                "original_error": str(original_error) if original_error else None,
            },
        )
