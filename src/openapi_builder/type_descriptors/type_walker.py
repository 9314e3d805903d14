"""Type descriptor walker.

Maps a Python annotation to exactly one shape variant. The walker only looks
one level deep: child annotations are returned unexpanded so callers control
recursion (and its depth).
"""

from __future__ import annotations

import collections.abc
import dataclasses
import logging
import types
import typing
from collections.abc import Mapping
from typing import Annotated, Any, Union, get_args, get_origin, is_typeddict

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
from .field_metadata import field_spec_from_metadata

logger = logging.getLogger(__name__)

_SEQUENCE_ORIGINS: tuple[Any, ...] = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Iterable,
    collections.abc.Collection,
)
_MAPPING_ORIGINS: tuple[Any, ...] = (
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)
# Checked in order: bool is an int subclass.
_SCALAR_BASES: tuple[tuple[type, ScalarKind], ...] = (
    (bool, ScalarKind.BOOLEAN),
    (int, ScalarKind.INT64),
    (float, ScalarKind.NUMBER),
    (str, ScalarKind.STRING),
)
_NAMED_SCALARS: dict[Any, ScalarKind] = {
    Int32: ScalarKind.INT32,
    Float32: ScalarKind.NUMBER,
}
_PLACEHOLDER_DEPTH = 32

OPAQUE_SHAPE = ScalarShape(kind=ScalarKind.OPAQUE)


def describe_type(annotation: Any) -> TypeShape:
    """Return the shape of one annotation; unknown annotations are opaque."""
    annotation = unwrap_named_types(strip_annotated(annotation))

    named = _named_scalar(annotation)
    if named is not None:
        return ScalarShape(kind=named)

    origin = get_origin(annotation)
    if origin in (Union, types.UnionType):
        return _describe_union(annotation)
    if origin is not None:
        return _describe_generic(origin, get_args(annotation))

    if annotation in _SEQUENCE_ORIGINS:
        return SequenceShape(element=Any)
    if annotation in _MAPPING_ORIGINS:
        return MapShape(value=Any)
    if not isinstance(annotation, type):
        return OPAQUE_SHAPE

    if dataclasses.is_dataclass(annotation):
        return _describe_dataclass(annotation)
    if is_typeddict(annotation):
        return _describe_annotated_class(annotation, StructKind.TYPED_DICT)
    if _is_named_tuple(annotation):
        return _describe_annotated_class(annotation, StructKind.NAMED_TUPLE)
    for base, kind in _SCALAR_BASES:
        if issubclass(annotation, base):
            return ScalarShape(kind=kind)
    return OPAQUE_SHAPE


def strip_annotated(annotation: Any) -> Any:
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def unwrap_named_types(annotation: Any) -> Any:
    """Follow `NewType` chains down to the first recognized or concrete type."""
    while _named_scalar(annotation) is None and hasattr(annotation, "__supertype__"):
        annotation = annotation.__supertype__
    return annotation


def _named_scalar(annotation: Any) -> ScalarKind | None:
    for named_type, kind in _NAMED_SCALARS.items():
        if annotation is named_type:
            return kind
    return None


def annotation_for_value(value: Any) -> Any:
    """Derive an annotation from a runtime value, looking at its first element."""
    if value is None:
        return type(None)
    if isinstance(value, (list, tuple, set, frozenset)) and not _is_named_tuple(type(value)):
        element = annotation_for_value(next(iter(value))) if value else Any
        if isinstance(value, tuple):
            return tuple[element, ...]  # type: ignore[valid-type]
        if isinstance(value, frozenset):
            return frozenset[element]  # type: ignore[valid-type]
        if isinstance(value, set):
            return set[element]  # type: ignore[valid-type]
        return list[element]  # type: ignore[valid-type]
    if isinstance(value, dict):
        item = annotation_for_value(next(iter(value.values()))) if value else Any
        return dict[str, item]  # type: ignore[valid-type]
    return type(value)


def first_element(sample: Any) -> Any:
    """Return the first element of a sample collection, or None when there is none."""
    if sample is None or isinstance(sample, (str, bytes)):
        return None
    try:
        return next(iter(sample), None)
    except TypeError:
        return None


def first_value(sample: Any) -> Any:
    if not isinstance(sample, Mapping) or not sample:
        return None
    return next(iter(sample.values()))


def field_sample(sample: Any, descriptor: FieldDescriptor) -> Any:
    if sample is None:
        return None
    if isinstance(sample, Mapping):
        return sample.get(descriptor.attribute)
    return getattr(sample, descriptor.attribute, None)


def placeholder_value(annotation: Any, _depth: int = 0) -> Any:
    """Synthesize a zero value for an annotation.

    Struct placeholders fill only the fields without defaults; optional and
    unknown shapes become None. Classes outside the shape set are called with
    no arguments when possible.
    """
    if _depth > _PLACEHOLDER_DEPTH:
        return None
    shape = describe_type(annotation)
    if isinstance(shape, ScalarShape):
        return _scalar_placeholder(shape.kind, strip_annotated(annotation))
    if isinstance(shape, SequenceShape):
        return []
    if isinstance(shape, MapShape):
        return {}
    if isinstance(shape, OptionalShape):
        return None
    return _struct_placeholder(shape, _depth)


def _describe_union(annotation: Any) -> TypeShape:
    members = get_args(annotation)
    concrete = [member for member in members if member is not type(None)]
    if len(concrete) == 1 and len(members) > 1:
        return OptionalShape(inner=concrete[0])
    return OPAQUE_SHAPE


def _describe_generic(origin: Any, args: tuple[Any, ...]) -> TypeShape:
    if origin in _SEQUENCE_ORIGINS:
        if origin is tuple:
            return SequenceShape(element=_homogeneous_tuple_element(args))
        return SequenceShape(element=args[0] if args else Any)
    if origin in _MAPPING_ORIGINS:
        return MapShape(value=args[1] if len(args) == 2 else Any)
    return OPAQUE_SHAPE


def _homogeneous_tuple_element(args: tuple[Any, ...]) -> Any:
    if len(args) == 2 and args[1] is Ellipsis:
        return args[0]
    if args and all(arg == args[0] for arg in args):
        return args[0]
    return Any


def _describe_dataclass(struct_type: type) -> StructShape:
    hints = _type_hints(struct_type)
    descriptors = []
    for dataclass_field in dataclasses.fields(struct_type):
        annotation = hints.get(dataclass_field.name, dataclass_field.type)
        descriptors.append(
            _field_descriptor(dataclass_field.name, annotation, dataclass_field.metadata)
        )
    return StructShape(
        struct_type=struct_type, kind=StructKind.DATACLASS, fields=tuple(descriptors)
    )


def _describe_annotated_class(struct_type: type, kind: StructKind) -> StructShape:
    hints = _type_hints(struct_type)
    if kind is StructKind.NAMED_TUPLE:
        names = tuple(struct_type._fields)  # type: ignore[attr-defined]
    else:
        names = tuple(hints)
    descriptors = tuple(_field_descriptor(name, hints.get(name, Any), {}) for name in names)
    return StructShape(struct_type=struct_type, kind=kind, fields=descriptors)


def _field_descriptor(attribute: str, annotation: Any, metadata: Any) -> FieldDescriptor:
    extras = get_args(annotation)[1:] if get_origin(annotation) is Annotated else ()
    spec = field_spec_from_metadata(metadata, extras)
    if spec.name:
        serialized_name = spec.name
    elif attribute.startswith("_"):
        serialized_name = ""
    else:
        serialized_name = attribute
    return FieldDescriptor(
        attribute=attribute,
        serialized_name=serialized_name,
        annotation=annotation,
        spec=spec,
    )


def _type_hints(struct_type: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(struct_type, include_extras=True)
    except (NameError, TypeError) as exc:
        logger.debug("Unresolved annotations on %s: %s", struct_type.__qualname__, exc)
        return dict(getattr(struct_type, "__annotations__", {}))


def _is_named_tuple(candidate: type) -> bool:
    return issubclass(candidate, tuple) and hasattr(candidate, "_fields")


def _scalar_placeholder(kind: ScalarKind, annotation: Any) -> Any:
    if kind is ScalarKind.OPAQUE:
        if isinstance(annotation, type) and annotation is not object:
            try:
                return annotation()
            except Exception:  # pylint: disable=broad-exception-caught
                return None
        return None
    concrete = unwrap_named_types(annotation)
    if isinstance(concrete, type):
        try:
            return concrete()
        except (TypeError, ValueError):
            pass
    return {
        ScalarKind.INT32: 0,
        ScalarKind.INT64: 0,
        ScalarKind.NUMBER: 0.0,
        ScalarKind.STRING: "",
        ScalarKind.BOOLEAN: False,
    }[kind]


def _struct_placeholder(shape: StructShape, depth: int) -> Any:
    if shape.kind is StructKind.TYPED_DICT:
        return {}
    if shape.kind is StructKind.NAMED_TUPLE:
        defaults = getattr(shape.struct_type, "_field_defaults", {})
        values = {
            descriptor.attribute: placeholder_value(descriptor.annotation, depth + 1)
            for descriptor in shape.fields
            if descriptor.attribute not in defaults
        }
        return shape.struct_type(**values)

    values = {}
    for dataclass_field in dataclasses.fields(shape.struct_type):
        if not dataclass_field.init:
            continue
        if (
            dataclass_field.default is not dataclasses.MISSING
            or dataclass_field.default_factory is not dataclasses.MISSING
        ):
            continue
        descriptor = next(d for d in shape.fields if d.attribute == dataclass_field.name)
        values[dataclass_field.name] = placeholder_value(descriptor.annotation, depth + 1)
    return shape.struct_type(**values)
