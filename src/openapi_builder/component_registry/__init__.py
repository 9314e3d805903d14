"""Component registry exports."""

from .schema_registry import (
    ARRAY_KEY_PREFIX,
    MAP_KEY_PREFIX,
    ComponentRegistry,
    DuplicateRegistrationError,
    schema_key_for,
)

__all__ = [
    "ARRAY_KEY_PREFIX",
    "MAP_KEY_PREFIX",
    "ComponentRegistry",
    "DuplicateRegistrationError",
    "schema_key_for",
]
