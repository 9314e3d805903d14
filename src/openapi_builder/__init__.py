"""Build OpenAPI 3 documents from typed Python declarations."""

import logging

from .component_registry import ComponentRegistry, DuplicateRegistrationError, schema_key_for
from .document_assembly import (
    Contact,
    Info,
    License,
    OpenAPIDocument,
    Param,
    ParamLocation,
    Router,
    Server,
)
from .schema_inference import SchemaDoc, SchemaInferenceError, infer_schema
from .schema_model import RequiredFlag, RequiredNames, Schema
from .type_descriptors import FieldSpec, Float32, Int32, api_field

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ComponentRegistry",
    "Contact",
    "DuplicateRegistrationError",
    "FieldSpec",
    "Float32",
    "Info",
    "Int32",
    "License",
    "OpenAPIDocument",
    "Param",
    "ParamLocation",
    "RequiredFlag",
    "RequiredNames",
    "Router",
    "Schema",
    "SchemaDoc",
    "SchemaInferenceError",
    "Server",
    "api_field",
    "infer_schema",
    "schema_key_for",
]
