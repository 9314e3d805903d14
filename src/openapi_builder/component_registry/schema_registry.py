"""Component schema registry.

Stores at most one materialized schema per key for one document and hands out
`$ref` pointers to it. Keys are either supplied by the caller or derived from
the value's type name.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from openapi_builder.schema_inference.inference_engine import (
    DEFAULT_MAX_DEPTH,
    MAX_INFERENCE_DEPTH,
    SchemaInferrer,
    infer_schema,
)
from openapi_builder.schema_model.schema_nodes import Schema
from openapi_builder.type_descriptors.descriptor_models import (
    MapShape,
    OptionalShape,
    SequenceShape,
)
from openapi_builder.type_descriptors.type_walker import (
    annotation_for_value,
    describe_type,
    strip_annotated,
)

logger = logging.getLogger(__name__)

ARRAY_KEY_PREFIX = "array."
MAP_KEY_PREFIX = "map."


class DuplicateRegistrationError(Exception):
    """Raised when a key that must be unique is registered a second time."""


class ComponentRegistry:
    """Document-scoped mapping from component key to schema.

    All access goes through one re-entrant lock, so `must_get` never infers the
    same key twice even when document parts are built from several threads.
    """

    def __init__(
        self, *, infer: SchemaInferrer | None = None, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> None:
        if not 0 <= max_depth <= MAX_INFERENCE_DEPTH:
            raise ValueError(
                f"max_depth must be between 0 and {MAX_INFERENCE_DEPTH}, got {max_depth}."
            )
        self._schemas: dict[str, Schema] = {}
        self._lock = threading.RLock()
        self._max_depth = max_depth
        self._infer = infer or self._infer_with_depth_limit

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @property
    def schemas(self) -> Mapping[str, Schema]:
        return MappingProxyType(self._schemas)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._schemas

    def __len__(self) -> int:
        with self._lock:
            return len(self._schemas)

    def get(self, key: str) -> Schema | None:
        """Return the stored schema for `key`, if any."""
        with self._lock:
            return self._schemas.get(key)

    def reference(self, key: str) -> Schema | None:
        """Return a `$ref` node for `key` when it is registered."""
        with self._lock:
            if key not in self._schemas:
                return None
            return Schema.reference_to(key, root=self)

    def put(self, key: str, schema: Schema, *, replace: bool = True) -> Schema:
        """Store `schema` under `key` and return a reference to it.

        Overwriting is allowed by default; references handed out earlier then
        resolve to the new schema.

        Raises:
          DuplicateRegistrationError: If `replace` is False and `key` exists.
          ValueError: If `key` is empty or `schema` is a `$ref` pointer.
        """
        if not key:
            raise ValueError("Schema component key must not be empty.")
        if schema.is_reference:
            raise ValueError(f"Schema component {key} must be inline, got reference {schema.ref}.")
        with self._lock:
            if key in self._schemas:
                if not replace:
                    raise DuplicateRegistrationError(f"Schema component already exists: {key}")
                logger.info("Replacing schema component %s", key)
            return self._store(key, schema)

    def must_get(self, key: str, value: Any, annotation: Any = None) -> Schema:
        """Return a reference for `key`, inferring and storing the schema on first use.

        An empty key is derived from the value's type (see `schema_key_for`).
        A missing value without annotation yields a bare reference bound to
        this registry.
        """
        if value is None and annotation is None:
            return Schema(root=self)
        with self._lock:
            resolved_key = key or schema_key_for(value, annotation)
            if resolved_key in self._schemas:
                return Schema.reference_to(resolved_key, root=self)
            schema = self._infer(value, annotation)
            return self._store(resolved_key, schema)

    def to_dict(self) -> dict[str, Any]:
        with self._lock:
            return {key: schema.to_dict() for key, schema in self._schemas.items()}

    def _store(self, key: str, schema: Schema) -> Schema:
        schema.key = key
        schema.set_root(self)
        self._schemas[key] = schema
        logger.debug("Registered schema component %s", key)
        return Schema.reference_to(key, root=self)

    def _infer_with_depth_limit(self, value: Any, annotation: Any) -> Schema:
        return infer_schema(value, annotation, max_depth=self._max_depth)


def schema_key_for(value: Any, annotation: Any = None) -> str:
    """Derive a component key from a value's type.

    Optional wrappers are transparent, each sequence level adds `array.` and
    each mapping level adds `map.`; the base is `<module>.<TypeName>` using the
    last segment of the defining module.
    """
    current = annotation if annotation is not None else annotation_for_value(value)
    prefix = ""
    for _ in range(DEFAULT_MAX_DEPTH):
        shape = describe_type(current)
        if isinstance(shape, OptionalShape):
            current = shape.inner
        elif isinstance(shape, SequenceShape):
            prefix += ARRAY_KEY_PREFIX
            current = shape.element
        elif isinstance(shape, MapShape):
            prefix += MAP_KEY_PREFIX
            current = shape.value
        else:
            break
    return prefix + _base_key(strip_annotated(current))


def _base_key(annotation: Any) -> str:
    name = (
        getattr(annotation, "__qualname__", None)
        or getattr(annotation, "__name__", None)
        or getattr(annotation, "_name", None)
        or str(annotation)
    )
    module = getattr(annotation, "__module__", "") or ""
    if not module:
        return name
    return f"{module.rsplit('.', 1)[-1]}.{name}"
