"""Cache serializer protocol.

ONLY payload codec contract - converts computed values to the opaque bytes
stored by a cache store and back.
"""

from typing import Any
from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class CacheSerializer(Protocol):
    """Cache serializer protocol."""

    def serialize(self, value: Any) -> bytes:
        """Serialize value to bytes.

        Raises SerializationError if the value cannot be encoded.
        """
        ...

    def deserialize(self, payload: bytes) -> Any:
        """Deserialize bytes to value.

        Raises DeserializationError if the payload cannot be decoded.
        """
        ...

    def get_content_type(self) -> str:
        """Get MIME content type of serialized payloads."""
        ...
