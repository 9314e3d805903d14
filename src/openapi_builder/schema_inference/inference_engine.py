"""Schema inference engine.

Walks an annotation (and an optional sample value) down to scalar leaves and
builds one schema tree. A value that describes itself through `schema_doc()`
short-circuits the walk.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from openapi_builder.schema_model.schema_nodes import Schema
from openapi_builder.type_descriptors.descriptor_models import (
    MapShape,
    OptionalShape,
    ScalarShape,
    SequenceShape,
    StructShape,
)
from openapi_builder.type_descriptors.type_walker import (
    annotation_for_value,
    describe_type,
    field_sample,
    first_element,
    first_value,
    placeholder_value,
    strip_annotated,
)

from .inference_errors import RecursionLimitError, UnsupportedShapeError
from .tag_interpreter import apply_field_spec

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 64
MAX_INFERENCE_DEPTH = 256

SchemaInferrer = Callable[[Any, Any], Schema]


@runtime_checkable
class SchemaDoc(Protocol):
    """Values that provide their own schema instead of being inferred."""

    def schema_doc(self) -> Schema: ...


def infer_schema(
    value: Any = None, annotation: Any = None, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> Schema:
    """Infer a schema tree for `value`, typed by `annotation` when given.

    Without an annotation the type is derived from the value itself, so empty
    collections need an annotation to describe their elements. Schemas returned
    by `schema_doc()` hooks are copied, so metadata applied to one field never
    leaks into another use of the same hook result.

    Raises:
      UnsupportedShapeError: If a `schema_doc()` hook returns something other than a schema.
      ConstraintTypeMismatchError: If a field bound does not fit the field's type.
      ConstraintParseFailureError: If a textual bound or default cannot be parsed.
      RecursionLimitError: If the type graph nests deeper than `max_depth` or
        than the interpreter stack allows.
    """
    resolved = annotation if annotation is not None else annotation_for_value(value)
    try:
        schema = _SchemaWalk(max_depth).infer(resolved, value, path="$", depth=0)
    except RecursionError as exc:
        raise RecursionLimitError(
            f"type graph nests deeper than the interpreter stack allows (max_depth={max_depth})"
        ) from exc
    logger.debug("Inferred %s schema for %r", schema.type or "hooked", resolved)
    return schema


class _SchemaWalk:
    def __init__(self, max_depth: int) -> None:
        self._max_depth = max_depth

    def infer(self, annotation: Any, sample: Any, *, path: str, depth: int) -> Schema:
        if depth > self._max_depth:
            raise RecursionLimitError(
                f"type graph nests deeper than {self._max_depth} levels", path=path
            )
        if sample is not None and strip_annotated(annotation) in (Any, object):
            annotation = annotation_for_value(sample)

        provided = self._provided_schema(annotation, sample, path)
        if provided is not None:
            return provided

        shape = describe_type(annotation)
        if isinstance(shape, OptionalShape):
            return self.infer(shape.inner, sample, path=path, depth=depth + 1)
        if isinstance(shape, ScalarShape):
            schema_type, schema_format = shape.schema_type()
            return Schema(type=schema_type, format=schema_format)
        if isinstance(shape, SequenceShape):
            items = self.infer(
                shape.element, first_element(sample), path=f"{path}[]", depth=depth + 1
            )
            return Schema(type="array", items=items)
        if isinstance(shape, MapShape):
            values = self.infer(
                shape.value, first_value(sample), path=f"{path}{{}}", depth=depth + 1
            )
            return Schema(type="object", additional_properties=values)
        return self._infer_struct(shape, sample, path=path, depth=depth)

    def _infer_struct(self, shape: StructShape, sample: Any, *, path: str, depth: int) -> Schema:
        schema = Schema(type="object")
        for descriptor in shape.fields:
            if not descriptor.is_serialized:
                continue
            field_path = f"{path}.{descriptor.serialized_name}"
            child = self.infer(
                descriptor.annotation,
                field_sample(sample, descriptor),
                path=field_path,
                depth=depth + 1,
            )
            if descriptor.spec.inline:
                schema.all_of.append(child)
                continue
            required = apply_field_spec(descriptor.spec, child, path=field_path)
            schema.with_property(descriptor.serialized_name, required, child)
        return schema

    def _provided_schema(self, annotation: Any, sample: Any, path: str) -> Schema | None:
        if sample is not None:
            if isinstance(sample, SchemaDoc) and not isinstance(sample, type):
                return _checked_provided_schema(sample.schema_doc(), path)
            return None

        target = strip_annotated(annotation)
        if not isinstance(target, type) or not hasattr(target, "schema_doc"):
            return None
        hook = inspect.getattr_static(target, "schema_doc")
        if isinstance(hook, (classmethod, staticmethod)):
            return _checked_provided_schema(target.schema_doc(), path)  # type: ignore[call-arg]
        instance = placeholder_value(target)
        if instance is None:
            instance = _uninitialized_instance(target, path)
        return _checked_provided_schema(instance.schema_doc(), path)


def _uninitialized_instance(target: type, path: str) -> Any:
    # Zero value for classes whose constructor needs arguments.
    try:
        return target.__new__(target)
    except TypeError as exc:
        raise UnsupportedShapeError(
            f"cannot build a placeholder {target.__qualname__} to call schema_doc()",
            path=path,
        ) from exc


def _checked_provided_schema(provided: Any, path: str) -> Schema:
    if not isinstance(provided, Schema):
        raise UnsupportedShapeError(
            f"schema_doc() returned {type(provided).__name__}, expected Schema", path=path
        )
    return provided.clone()
