"""Field metadata interpreter.

Applies one `FieldSpec` to the schema node of a single field. Textual values
(from tag strings or configuration) are coerced to the node's declared type.
The required flag is returned rather than written, because required-ness is
recorded on the parent object.
"""

from __future__ import annotations

from typing import Any

from openapi_builder.schema_model.schema_nodes import SUPPORTED_FORMATS, Schema
from openapi_builder.type_descriptors.field_metadata import FieldSpec

from .inference_errors import ConstraintParseFailureError, ConstraintTypeMismatchError

_JSON_OMIT = "-"
_JSON_INLINE = ","


def apply_field_spec(spec: FieldSpec, schema: Schema, *, path: str = "$") -> bool:
    """Write a field spec's documentation and bounds onto `schema`; return its required flag."""
    apply_doc_metadata(spec, schema, path=path)
    return apply_validation_constraints(spec, schema, path=path)


def apply_doc_metadata(spec: FieldSpec, schema: Schema, *, path: str = "$") -> None:
    if spec.description:
        schema.description = spec.description
    if spec.format:
        if spec.format not in SUPPORTED_FORMATS:
            expected = ", ".join(SUPPORTED_FORMATS)
            raise ConstraintParseFailureError(
                f"unsupported format '{spec.format}', expected one of {expected}", path=path
            )
        schema.format = spec.format
    if spec.pattern:
        schema.pattern = spec.pattern
    if spec.enum:
        schema.enum = _enum_values(spec.enum, path)
    if spec.default is not None:
        schema.default = coerce_tag_value(schema.type, spec.default, path=path)


def apply_validation_constraints(spec: FieldSpec, schema: Schema, *, path: str = "$") -> bool:
    if spec.min is not None:
        _apply_bound(schema, spec.min, is_max=False, path=path)
    if spec.max is not None:
        _apply_bound(schema, spec.max, is_max=True, path=path)
    return spec.required


def coerce_tag_value(schema_type: str, value: Any, *, path: str = "$") -> Any:
    """Convert a textual (or native) value into the native type of `schema_type`."""
    if schema_type == "integer":
        return _to_int(value, schema_type, path)
    if schema_type == "number":
        return _to_float(value, schema_type, path)
    if schema_type == "boolean":
        if isinstance(value, bool):
            return value
        if value == "true":
            return True
        if value == "false":
            return False
        raise ConstraintParseFailureError(
            f"failed to parse value {value!r} as {schema_type}", path=path
        )
    if schema_type == "string":
        if isinstance(value, str):
            return value
        raise ConstraintTypeMismatchError(
            f"value {value!r} is not valid for type {schema_type}", path=path
        )
    if isinstance(value, str):
        raise ConstraintTypeMismatchError(
            f"unknown default value {value!r} for type {schema_type or 'untyped'}", path=path
        )
    return value


def field_spec_from_tags(
    *, json: str | None = None, doc: str | None = None, validate: str | None = None
) -> FieldSpec:
    """Build a field spec from the textual tag grammar.

    `json`: `name[,omitempty]`, `-` to omit, `,` to inline.
    `doc`: `key=value` pairs separated by `;` (format, pattern, enum, default, description).
    `validate`: comma separated `required`, `min=N`, `max=N`; other entries are ignored.
    """
    name: str | None = None
    omit = False
    inline = False
    if json is not None:
        if json == _JSON_OMIT:
            omit = True
        elif json == _JSON_INLINE:
            inline = True
        else:
            name = json.split(",", 1)[0] or None

    doc_values = parse_doc_tag(doc) if doc else {}
    required, minimum, maximum = parse_validate_tag(validate or "")
    enum_text = doc_values.get("enum")
    if enum_text is not None and not enum_text:
        raise ConstraintParseFailureError("no enum values")

    return FieldSpec(
        name=name,
        description=doc_values.get("description", ""),
        format=doc_values.get("format", ""),
        pattern=doc_values.get("pattern", ""),
        enum=enum_text or (),
        default=doc_values.get("default"),
        required=required,
        min=minimum,
        max=maximum,
        inline=inline,
        omit=omit,
    )


def parse_doc_tag(doc_tag: str) -> dict[str, str]:
    values: dict[str, str] = {}
    for part in doc_tag.split(";"):
        key, separator, value = part.partition("=")
        if not separator:
            raise ConstraintParseFailureError(f"error near {part!r}")
        values[key] = value
    return values


def parse_validate_tag(validate_tag: str) -> tuple[bool, str | None, str | None]:
    required = False
    minimum: str | None = None
    maximum: str | None = None
    if validate_tag in ("", "-"):
        return required, minimum, maximum
    for part in validate_tag.split(","):
        if part == "required":
            required = True
        elif part.startswith("max="):
            maximum = part.removeprefix("max=")
        elif part.startswith("min="):
            minimum = part.removeprefix("min=")
    return required, minimum, maximum


def _apply_bound(schema: Schema, raw: str | int | float, *, is_max: bool, path: str) -> None:
    if schema.type == "string":
        length = _to_int(raw, schema.type, path)
        if is_max:
            schema.max_length = length
        else:
            schema.min_length = length
    elif schema.type in ("integer", "number"):
        bound: int | float = (
            _to_int(raw, schema.type, path)
            if schema.type == "integer"
            else _to_float(raw, schema.type, path)
        )
        if is_max:
            schema.maximum = bound
        else:
            schema.minimum = bound
    else:
        label = "max" if is_max else "min"
        raise ConstraintTypeMismatchError(
            f"{label} value {raw!r} is not applicable to type {schema.type or 'untyped'}",
            path=path,
        )


def _to_int(value: Any, schema_type: str, path: str) -> int:
    if isinstance(value, bool):
        raise ConstraintParseFailureError(
            f"failed to parse value {value!r} as {schema_type}", path=path
        )
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    try:
        return int(str(value).strip(), 10)
    except ValueError as exc:
        raise ConstraintParseFailureError(
            f"failed to parse value {value!r} as {schema_type}: {exc}", path=path
        ) from exc


def _to_float(value: Any, schema_type: str, path: str) -> float:
    if isinstance(value, bool):
        raise ConstraintParseFailureError(
            f"failed to parse value {value!r} as {schema_type}", path=path
        )
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError as exc:
        raise ConstraintParseFailureError(
            f"failed to parse value {value!r} as {schema_type}: {exc}", path=path
        ) from exc


def _enum_values(enum: str | tuple[str, ...], path: str) -> list[str]:
    values = enum.split("|") if isinstance(enum, str) else [str(item) for item in enum]
    if not values:
        raise ConstraintParseFailureError("no enum values", path=path)
    return values
