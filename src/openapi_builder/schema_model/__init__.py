"""Schema model exports."""

from .schema_nodes import (
    SCHEMA_REF_PREFIX,
    SUPPORTED_FORMATS,
    EmptyCompositionError,
    RequiredFlag,
    RequiredNames,
    RequiredSpec,
    Schema,
    SchemaLookup,
)

__all__ = [
    "SCHEMA_REF_PREFIX",
    "SUPPORTED_FORMATS",
    "EmptyCompositionError",
    "RequiredFlag",
    "RequiredNames",
    "RequiredSpec",
    "Schema",
    "SchemaLookup",
]
