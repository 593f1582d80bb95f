"""Cache serializers."""

from .json_serializer import JSONCacheSerializer, create_json_serializer

__all__ = [
    "JSONCacheSerializer",
    "create_json_serializer",
]
