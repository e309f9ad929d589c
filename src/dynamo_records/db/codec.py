from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Mapping
import base64

from boto3.dynamodb.types import Binary, TypeDeserializer, TypeSerializer

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def _to_store_py(value: Any) -> Any:
    # TypeSerializer refuses float; go through str to keep the literal digits.
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, Mapping):
        return {str(k): _to_store_py(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_store_py(v) for v in value]
    return value


def _to_plain(value: Any) -> Any:
    if isinstance(value, Decimal):
        if value == value.to_integral_value():
            return int(value)
        as_float = float(value)
        if Decimal(repr(as_float)) == value:
            return as_float
        # More digits than a float holds; keep the Decimal so cursors re-encode exactly.
        return value
    if isinstance(value, Binary):
        return base64.b64encode(value.value).decode("ascii")
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, set):
        return sorted(_to_plain(v) for v in value)
    if isinstance(value, Mapping):
        return {k: _to_plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_plain(v) for v in value]
    return value


def to_attribute_value(value: Any) -> Dict[str, Any]:
    """Python value -> DynamoDB wire AttributeValue (``{"S": ...}`` etc.)."""
    return _serializer.serialize(_to_store_py(value))


def to_item(values: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    return {str(k): to_attribute_value(v) for k, v in values.items()}


def from_item(item: Mapping[str, Any]) -> Dict[str, Any]:
    """DynamoDB wire item -> JSON-friendly dict.

    Raises whatever the deserializer raises on malformed attribute values.
    """
    if not isinstance(item, Mapping):
        raise TypeError(f"DynamoDB item must be a mapping, got {type(item).__name__}")
    return {k: _to_plain(_deserializer.deserialize(v)) for k, v in item.items()}
