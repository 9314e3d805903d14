"""Schema inference exports."""

from .inference_engine import (
    DEFAULT_MAX_DEPTH,
    MAX_INFERENCE_DEPTH,
    SchemaDoc,
    SchemaInferrer,
    infer_schema,
)
from .inference_errors import (
    ConstraintParseFailureError,
    ConstraintTypeMismatchError,
    RecursionLimitError,
    SchemaInferenceError,
    UnsupportedShapeError,
)
from .tag_interpreter import apply_field_spec, coerce_tag_value, field_spec_from_tags

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "MAX_INFERENCE_DEPTH",
    "ConstraintParseFailureError",
    "ConstraintTypeMismatchError",
    "RecursionLimitError",
    "SchemaDoc",
    "SchemaInferenceError",
    "SchemaInferrer",
    "UnsupportedShapeError",
    "apply_field_spec",
    "coerce_tag_value",
    "field_spec_from_tags",
    "infer_schema",
]
