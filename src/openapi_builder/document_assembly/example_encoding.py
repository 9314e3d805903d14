"""Encode sample values into JSON-compatible examples."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from openapi_builder.type_descriptors.descriptor_models import StructShape
from openapi_builder.type_descriptors.type_walker import describe_type, field_sample


def encode_example(value: Any) -> Any:
    """Encode `value` the way it travels on the wire, using serialized field names."""
    if isinstance(value, Enum):
        return encode_example(value.value)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    shape = describe_type(type(value))
    if isinstance(shape, StructShape) and not isinstance(value, Mapping):
        return _encode_struct(shape, value)
    if isinstance(value, Mapping):
        return {str(key): encode_example(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [encode_example(item) for item in value]
    return str(value)


def _encode_struct(shape: StructShape, value: Any) -> dict[str, Any]:
    encoded: dict[str, Any] = {}
    for descriptor in shape.fields:
        if not descriptor.is_serialized:
            continue
        item = encode_example(field_sample(value, descriptor))
        if descriptor.spec.inline and isinstance(item, dict):
            encoded.update(item)
            continue
        encoded[descriptor.serialized_name] = item
    return encoded
