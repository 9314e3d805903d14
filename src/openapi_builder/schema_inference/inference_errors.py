"""Schema inference error kinds."""

from __future__ import annotations


class SchemaInferenceError(Exception):
    """Raised when a schema cannot be inferred; `path` names the offending field."""

    def __init__(self, message: str, *, path: str = "$") -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.reason = message


class UnsupportedShapeError(SchemaInferenceError):
    """Raised when a value cannot be mapped to any schema kind."""


class ConstraintTypeMismatchError(SchemaInferenceError):
    """Raised when a length/range or default instruction targets an incompatible type."""


class ConstraintParseFailureError(SchemaInferenceError):
    """Raised when a textual constraint or default value fails to parse."""


class RecursionLimitError(SchemaInferenceError):
    """Raised when a type graph nests deeper than the configured limit."""
