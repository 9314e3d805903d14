"""Type descriptor entities: the closed set of shapes a type can take."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, NewType

from .field_metadata import FieldSpec

Int32 = NewType("Int32", int)
Float32 = NewType("Float32", float)


class ScalarKind(str, Enum):
    """Scalar kinds with a fixed schema type/format mapping."""

    INT32 = "int32"
    INT64 = "int64"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    OPAQUE = "opaque"


SCALAR_SCHEMA_TYPES: dict[ScalarKind, tuple[str, str]] = {
    ScalarKind.INT32: ("integer", "int32"),
    ScalarKind.INT64: ("integer", "int64"),
    ScalarKind.NUMBER: ("number", ""),
    ScalarKind.STRING: ("string", ""),
    ScalarKind.BOOLEAN: ("boolean", ""),
    ScalarKind.OPAQUE: ("object", ""),
}


class StructKind(str, Enum):
    """Python constructs treated as structs."""

    DATACLASS = "dataclass"
    TYPED_DICT = "typed_dict"
    NAMED_TUPLE = "named_tuple"


@dataclass(frozen=True)
class FieldDescriptor:
    """One struct field as seen by schema inference."""

    attribute: str
    serialized_name: str
    annotation: Any
    spec: FieldSpec

    @property
    def is_serialized(self) -> bool:
        return bool(self.serialized_name) and not self.spec.omit


@dataclass(frozen=True)
class ScalarShape:
    kind: ScalarKind

    def schema_type(self) -> tuple[str, str]:
        return SCALAR_SCHEMA_TYPES[self.kind]


@dataclass(frozen=True)
class StructShape:
    struct_type: type
    kind: StructKind
    fields: tuple[FieldDescriptor, ...]


@dataclass(frozen=True)
class SequenceShape:
    element: Any


@dataclass(frozen=True)
class MapShape:
    value: Any


@dataclass(frozen=True)
class OptionalShape:
    inner: Any


TypeShape = ScalarShape | StructShape | SequenceShape | MapShape | OptionalShape
