"""Field metadata interpreter tests."""

from __future__ import annotations

from typing import Any

import pytest
from openapi_builder.schema_inference.inference_errors import (
    ConstraintParseFailureError,
    ConstraintTypeMismatchError,
)
from openapi_builder.schema_inference.tag_interpreter import (
    apply_field_spec,
    coerce_tag_value,
    field_spec_from_tags,
    parse_validate_tag,
)
from openapi_builder.schema_model.schema_nodes import Schema
from openapi_builder.type_descriptors.field_metadata import FieldSpec


def test_string_bounds_become_integer_lengths() -> None:
    schema = Schema(type="string")

    required = apply_field_spec(FieldSpec(min="5", max="128", required=True), schema)

    assert required is True
    assert schema.min_length == 5
    assert schema.max_length == 128
    assert isinstance(schema.max_length, int)
    assert schema.minimum is None
    assert schema.required is None


def test_integer_bounds_become_integer_values() -> None:
    schema = Schema(type="integer", format="int64")

    apply_field_spec(FieldSpec(min="0", max=150), schema)

    assert schema.minimum == 0
    assert schema.maximum == 150
    assert isinstance(schema.minimum, int)


def test_number_bounds_become_floats() -> None:
    schema = Schema(type="number")

    apply_field_spec(FieldSpec(min="60", max="250.5"), schema)

    assert schema.minimum == 60.0
    assert isinstance(schema.minimum, float)
    assert schema.maximum == 250.5


@pytest.mark.parametrize("schema_type", ["boolean", "array", "object"])
def test_bounds_on_other_types_are_rejected(schema_type: str) -> None:
    with pytest.raises(ConstraintTypeMismatchError) as excinfo:
        apply_field_spec(FieldSpec(max="3"), Schema(type=schema_type), path="$.flag")

    assert excinfo.value.path == "$.flag"
    assert schema_type in str(excinfo.value)


def test_unparsable_bound_reports_value_and_type() -> None:
    with pytest.raises(ConstraintParseFailureError) as excinfo:
        apply_field_spec(FieldSpec(max="lots"), Schema(type="integer"), path="$.age")

    assert "'lots'" in str(excinfo.value)
    assert "integer" in str(excinfo.value)
    assert str(excinfo.value).startswith("$.age: ")


@pytest.mark.parametrize(
    ("schema_type", "raw", "expected"),
    [
        ("integer", "42", 42),
        ("number", "1.5", 1.5),
        ("boolean", "true", True),
        ("boolean", "false", False),
        ("boolean", True, True),
        ("string", "draft", "draft"),
        ("object", {"a": 1}, {"a": 1}),
    ],
)
def test_defaults_are_coerced_to_schema_type(schema_type: str, raw: Any, expected: Any) -> None:
    assert coerce_tag_value(schema_type, raw) == expected


@pytest.mark.parametrize(
    ("schema_type", "raw", "error"),
    [
        ("integer", "abc", ConstraintParseFailureError),
        ("number", "1,5", ConstraintParseFailureError),
        ("boolean", "yes", ConstraintParseFailureError),
        ("string", 7, ConstraintTypeMismatchError),
        ("array", "[]", ConstraintTypeMismatchError),
    ],
)
def test_invalid_defaults_are_rejected(schema_type: str, raw: Any, error: type) -> None:
    with pytest.raises(error):
        coerce_tag_value(schema_type, raw, path="$.field")


def test_doc_metadata_writes_description_format_enum_and_default() -> None:
    schema = Schema(type="string")

    apply_field_spec(
        FieldSpec(
            description="Publication state",
            format="date",
            pattern="^[a-z]+$",
            enum="draft|published",
            default="draft",
        ),
        schema,
    )

    assert schema.to_dict() == {
        "type": "string",
        "format": "date",
        "description": "Publication state",
        "default": "draft",
        "pattern": "^[a-z]+$",
        "enum": ["draft", "published"],
    }


def test_enum_tuple_is_kept_in_order() -> None:
    schema = Schema(type="string")

    apply_field_spec(FieldSpec(enum=("b", "a")), schema)

    assert schema.enum == ["b", "a"]


def test_unknown_format_is_rejected() -> None:
    with pytest.raises(ConstraintParseFailureError):
        apply_field_spec(FieldSpec(format="isbn"), Schema(type="string"))


def test_json_tag_controls_name_omission_and_inlining() -> None:
    assert field_spec_from_tags(json="title,omitempty").name == "title"
    assert field_spec_from_tags(json="-").omit is True
    assert field_spec_from_tags(json=",").inline is True
    assert field_spec_from_tags(json=",omitempty").name is None


def test_doc_and_validate_tags_are_parsed() -> None:
    spec = field_spec_from_tags(
        doc="format=date;description=Publish date",
        validate="required,min=1,max=128,email",
    )

    assert spec.format == "date"
    assert spec.description == "Publish date"
    assert spec.required is True
    assert spec.min == "1"
    assert spec.max == "128"


def test_doc_tag_without_assignment_is_rejected() -> None:
    with pytest.raises(ConstraintParseFailureError) as excinfo:
        field_spec_from_tags(doc="format=date;garbage")

    assert "error near 'garbage'" in str(excinfo.value)


def test_empty_enum_tag_is_rejected() -> None:
    with pytest.raises(ConstraintParseFailureError):
        field_spec_from_tags(doc="enum=")


@pytest.mark.parametrize("tag", ["", "-"])
def test_empty_validate_tag_has_no_instructions(tag: str) -> None:
    assert parse_validate_tag(tag) == (False, None, None)
