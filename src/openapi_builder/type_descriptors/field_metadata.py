"""Per-field schema metadata attached to dataclass or annotated fields."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

FIELD_SPEC_KEY = "openapi_builder"


# pylint: disable=too-many-instance-attributes
@dataclass(frozen=True)
class FieldSpec:
    """Constraint instructions for one serialized field.

    `min`/`max` apply as length bounds on string fields and as value bounds on
    integer or number fields. `default` and textual `min`/`max` values are
    coerced to the field's schema type while the schema is built.
    """

    name: str | None = None
    description: str = ""
    format: str = ""
    pattern: str = ""
    enum: str | tuple[str, ...] = ()
    default: Any = None
    required: bool = False
    min: str | int | float | None = None
    max: str | int | float | None = None
    inline: bool = False
    omit: bool = False


EMPTY_FIELD_SPEC = FieldSpec()


# pylint: disable=too-many-arguments
def api_field(
    *,
    name: str | None = None,
    description: str = "",
    format: str = "",  # pylint: disable=redefined-builtin
    pattern: str = "",
    enum: str | tuple[str, ...] = (),
    schema_default: Any = None,
    required: bool = False,
    min: str | int | float | None = None,  # pylint: disable=redefined-builtin
    max: str | int | float | None = None,  # pylint: disable=redefined-builtin
    inline: bool = False,
    omit: bool = False,
    default: Any = dataclasses.MISSING,
    default_factory: Callable[[], Any] | Any = dataclasses.MISSING,
) -> Any:
    """Declare a dataclass field together with its schema metadata.

    `default`/`default_factory` are the dataclass defaults; `schema_default` is
    the documented default value rendered into the schema.
    """
    spec = FieldSpec(
        name=name,
        description=description,
        format=format,
        pattern=pattern,
        enum=enum,
        default=schema_default,
        required=required,
        min=min,
        max=max,
        inline=inline,
        omit=omit,
    )
    metadata = {FIELD_SPEC_KEY: spec}
    if default_factory is not dataclasses.MISSING:
        return dataclasses.field(default_factory=default_factory, metadata=metadata)
    return dataclasses.field(default=default, metadata=metadata)


def field_spec_from_metadata(
    metadata: Mapping[str, Any], extras: tuple[Any, ...] = ()
) -> FieldSpec:
    """Pick the field spec from `Annotated` extras first, then dataclass metadata."""
    for extra in extras:
        if isinstance(extra, FieldSpec):
            return extra
    spec = metadata.get(FIELD_SPEC_KEY)
    if isinstance(spec, FieldSpec):
        return spec
    return EMPTY_FIELD_SPEC
