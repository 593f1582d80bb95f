"""JSON cache serializer.

ONLY JSON serialization - encodes computed query results as UTF-8 JSON with
type tags for the common non-JSON types an ORM row carries (datetimes,
decimals, UUIDs).

Following maximum separation architecture - one file = one purpose.
"""

import json
from dataclasses import dataclass, asdict, is_dataclass
from datetime import datetime, date
from decimal import Decimal
from typing import Any, Dict
from uuid import UUID

from pydantic import BaseModel

from ...core.exceptions.serialization_error import SerializationError, DeserializationError


DICT_TAG = "__dict__"
TYPE_TAGS = frozenset({"__datetime__", "__date__", "__decimal__", "__uuid__", "__set__", DICT_TAG})


def escape_tagged_dicts(obj: Any) -> Any:
    """Wrap plain dicts whose only key is a type tag so they decode as dicts.

    The wrapped dict is stored as a list of pairs, since the decoder runs
    bottom-up and would otherwise convert the inner dict first.
    """
    if isinstance(obj, dict):
        escaped = {key: escape_tagged_dicts(value) for key, value in obj.items()}
        if len(escaped) == 1 and next(iter(escaped)) in TYPE_TAGS:
            return {DICT_TAG: [[key, value] for key, value in escaped.items()]}
        return escaped
    if isinstance(obj, (list, tuple)):
        return [escape_tagged_dicts(item) for item in obj]
    return obj


@dataclass
class JSONSerializerStats:
    """JSON serializer statistics."""

    serialization_count: int = 0
    deserialization_count: int = 0
    total_bytes_serialized: int = 0
    error_count: int = 0


class CacheJSONEncoder(json.JSONEncoder):
    """JSON encoder for extended type support."""

    def default(self, obj: Any) -> Any:
        """Handle non-standard JSON types."""
        if isinstance(obj, datetime):
            return {"__datetime__": obj.isoformat()}
        elif isinstance(obj, date):
            return {"__date__": obj.isoformat()}
        elif isinstance(obj, Decimal):
            return {"__decimal__": str(obj)}
        elif isinstance(obj, UUID):
            return {"__uuid__": str(obj)}
        elif isinstance(obj, (set, frozenset)):
            return {"__set__": sorted(obj, key=repr)}
        elif isinstance(obj, BaseModel):
            return escape_tagged_dicts(obj.model_dump(mode="json"))
        elif is_dataclass(obj) and not isinstance(obj, type):
            return escape_tagged_dicts(asdict(obj))

        # Raises TypeError for anything else
        return super().default(obj)


def decode_json_object(obj: Dict[str, Any]) -> Any:
    """Decode tagged JSON objects back to Python types."""
    if len(obj) != 1:
        return obj
    if "__datetime__" in obj:
        return datetime.fromisoformat(obj["__datetime__"])
    elif "__date__" in obj:
        return date.fromisoformat(obj["__date__"])
    elif "__decimal__" in obj:
        return Decimal(obj["__decimal__"])
    elif "__uuid__" in obj:
        return UUID(obj["__uuid__"])
    elif "__set__" in obj:
        return set(obj["__set__"])
    elif DICT_TAG in obj:
        return dict(obj[DICT_TAG])
    return obj


class JSONCacheSerializer:
    """JSON cache serializer with extended type support.

    Pydantic models and dataclasses are stored as plain objects and come back
    as dicts; callers that need the model re-validate it.
    """

    CONTENT_TYPE = "application/json"

    def __init__(self, ensure_ascii: bool = False):
        """Initialize JSON serializer.

        Args:
            ensure_ascii: If True, escape non-ASCII characters
        """
        self._ensure_ascii = ensure_ascii
        self._stats = JSONSerializerStats()

    def serialize(self, value: Any) -> bytes:
        """Serialize value to JSON bytes."""
        try:
            payload = json.dumps(
                escape_tagged_dicts(value),
                cls=CacheJSONEncoder,
                ensure_ascii=self._ensure_ascii,
                separators=(",", ":"),
                allow_nan=False,
            ).encode("utf-8")
        except (TypeError, ValueError) as e:
            self._stats.error_count += 1
            raise SerializationError(
                f"Cannot serialize {type(value).__name__} to JSON: {e}",
                serializer_type="json",
                original_error=e,
            ) from e

        self._stats.serialization_count += 1
        self._stats.total_bytes_serialized += len(payload)
        return payload

    def deserialize(self, payload: bytes) -> Any:
        """Deserialize JSON bytes to value."""
        try:
            value = json.loads(payload, object_hook=decode_json_object)
        except (TypeError, ValueError) as e:
            self._stats.error_count += 1
            raise DeserializationError(
                f"Cannot decode cached JSON payload: {e}",
                serializer_type="json",
                original_error=e,
                payload_size=len(payload) if payload is not None else None,
            ) from e

        self._stats.deserialization_count += 1
        return value

    def get_content_type(self) -> str:
        """Get MIME content type."""
        return self.CONTENT_TYPE

    def get_stats(self) -> JSONSerializerStats:
        """Get serializer statistics."""
        return self._stats


def create_json_serializer(ensure_ascii: bool = False) -> JSONCacheSerializer:
    """Create JSON serializer."""
    return JSONCacheSerializer(ensure_ascii=ensure_ascii)
