"""Cache domain exceptions.

One exception per file following maximum separation architecture.
"""

from .cache_key_invalid import CacheKeyInvalid
from .unknown_namespace import UnknownNamespace
from .unserializable_param import UnserializableParam
from .invalid_ttl import InvalidTtl
from .store_unavailable import StoreUnavailable
from .serialization_error import SerializationError, DeserializationError

__all__ = [
    "CacheKeyInvalid",
    "UnknownNamespace",
    "UnserializableParam",
    "InvalidTtl",
    "StoreUnavailable",
    "SerializationError",
    "DeserializationError",
]
