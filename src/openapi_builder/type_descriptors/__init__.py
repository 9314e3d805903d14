"""Type descriptor exports."""

from .descriptor_models import (
    FieldDescriptor,
    Float32,
    Int32,
    MapShape,
    OptionalShape,
    ScalarKind,
    ScalarShape,
    SequenceShape,
    StructKind,
    StructShape,
    TypeShape,
)
from .field_metadata import FIELD_SPEC_KEY, FieldSpec, api_field
from .type_walker import annotation_for_value, describe_type, placeholder_value

__all__ = [
    "FIELD_SPEC_KEY",
    "FieldDescriptor",
    "FieldSpec",
    "Float32",
    "Int32",
    "MapShape",
    "OptionalShape",
    "ScalarKind",
    "ScalarShape",
    "SequenceShape",
    "StructKind",
    "StructShape",
    "TypeShape",
    "annotation_for_value",
    "api_field",
    "describe_type",
    "placeholder_value",
]
