"""Document root, path and operation tests."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum

import pytest
import yaml
from openapi_builder.component_registry.schema_registry import (
    ComponentRegistry,
    DuplicateRegistrationError,
)
from openapi_builder.document_assembly.api_document import OpenAPIDocument
from openapi_builder.document_assembly.document_models import (
    MIME_YAML,
    Contact,
    Info,
    InvalidDocumentError,
    InvalidParamLocationError,
    License,
    MissingComponentError,
    Param,
    ParamLocation,
    Server,
    ServerVariable,
)
from openapi_builder.document_assembly.example_encoding import encode_example
from openapi_builder.schema_inference.inference_errors import RecursionLimitError
from openapi_builder.schema_model.schema_nodes import Schema
from openapi_builder.type_descriptors.field_metadata import api_field


class Shelf(Enum):
    FICTION = "fiction"


@dataclass
class Metadata:
    created_by: str = "system"


@dataclass
class Book:
    name: str = api_field(required=True, default="")
    shelf: Shelf = Shelf.FICTION
    meta: Metadata = api_field(inline=True, default_factory=Metadata)
    secret: str = api_field(omit=True, default="hidden")


def _document(**kwargs) -> OpenAPIDocument:
    return OpenAPIDocument(Info(title="Library", version="v1"), **kwargs)


def test_only_openapi_3_versions_are_accepted() -> None:
    with pytest.raises(InvalidDocumentError):
        _document(version="2.0")

    assert _document(version="3.1.0").to_dict()["openapi"] == "3.1.0"


@pytest.mark.parametrize(
    "info",
    [
        Info(title="", version="v1"),
        Info(title="Library", version=" "),
        Info(title="Library", version="v1", license=License(name="")),
    ],
)
def test_incomplete_info_is_rejected(info: Info) -> None:
    with pytest.raises(InvalidDocumentError):
        OpenAPIDocument(info)


def test_server_variables_need_defaults() -> None:
    with pytest.raises(InvalidDocumentError):
        _document(servers=[Server(url="https://{host}", variables={"host": ServerVariable("")})])


def test_document_renders_info_and_servers() -> None:
    document = OpenAPIDocument(
        Info(
            title="Library",
            version="v1",
            terms_of_service="tos",
            contact=Contact(name="Ops", email="ops@example.com"),
            license=License(name="MIT"),
        ),
        servers=[
            Server(
                url="https://{host}/api",
                variables={"host": ServerVariable("example.com", enum=("example.com",))},
            )
        ],
    )

    assert document.to_dict() == {
        "openapi": "3.0.0",
        "info": {
            "title": "Library",
            "version": "v1",
            "termsOfService": "tos",
            "contact": {"name": "Ops", "email": "ops@example.com"},
            "license": {"name": "MIT"},
        },
        "servers": [
            {
                "url": "https://{host}/api",
                "variables": {"host": {"enum": ["example.com"], "default": "example.com"}},
            }
        ],
        "paths": {},
    }


def test_add_path_rejects_duplicates() -> None:
    document = _document()
    document.add_path("/books")

    with pytest.raises(DuplicateRegistrationError):
        document.add_path("/books")


def test_operation_methods_and_status_codes_are_unique() -> None:
    operation = _document().add_path("/books").add_operation("GET")
    operation.returns(200, "ok", "book", Book())

    with pytest.raises(DuplicateRegistrationError):
        operation.api_path.add_operation("get")
    with pytest.raises(DuplicateRegistrationError):
        operation.returns(200, "again", "book", Book())


def test_metadata_generates_operation_id_from_path() -> None:
    operation = _document().add_path("/books/{id}").add_operation("get")

    operation.metadata(summary="Get book", description="Single book")

    assert operation.operation_id == "getBooksById"
    assert operation.to_dict() == {
        "summary": "Get book",
        "description": "Single book",
        "operationId": "getBooksById",
        "responses": {},
    }


def test_explicit_operation_id_and_disabled_generator() -> None:
    document = _document(operation_id_generator=None)
    operation = document.add_path("/books").add_operation("get")

    operation.metadata()
    assert operation.operation_id == ""

    operation.metadata("listBooks")
    assert operation.operation_id == "listBooks"


def test_json_responses_register_components_with_examples() -> None:
    document = _document()
    operation = document.add_path("/books").add_operation("post")

    operation.read_json("Book to add", True, "book", Book(name="Dune"))
    operation.returns(201, "Created", "book", Book())
    operation.return_default("Unexpected error", "", "oops")

    rendered = operation.to_dict()
    assert rendered["requestBody"] == {
        "description": "Book to add",
        "content": {
            "application/json": {
                "schema": {"$ref": "#/components/schemas/book"},
                "example": {"name": "Dune", "shelf": "fiction", "created_by": "system"},
            }
        },
        "required": True,
    }
    assert rendered["responses"]["default"]["content"]["application/json"] == {
        "schema": {"$ref": "#/components/schemas/builtins.str"},
        "example": "oops",
    }
    assert set(document.registry.schemas) == {"book", "builtins.str"}


def test_non_json_response_and_raw_body() -> None:
    operation = _document().add_path("/export").add_operation("get")

    operation.read("Raw upload", False, "text/csv", example="a,b")
    operation.returns_non_json(200, "Spec", MIME_YAML, schema=Schema(type="string"))

    assert operation.to_dict()["requestBody"] == {
        "description": "Raw upload",
        "content": {"text/csv": {"example": "a,b"}},
    }
    assert operation.to_dict()["responses"]["200"] == {
        "description": "Spec",
        "content": {"application/yaml": {"schema": {"type": "string"}}},
    }


@pytest.mark.parametrize("location", ["body", "", "PATH"])
def test_invalid_param_locations_are_rejected(location: str) -> None:
    operation = _document().add_path("/books").add_operation("get")

    with pytest.raises(InvalidParamLocationError):
        operation.add_param(location, "id")
    with pytest.raises(InvalidParamLocationError):
        Param(name="id", location=location)


def test_add_param_by_location() -> None:
    operation = _document().add_path("/books/{id}").add_operation("get")

    path_param = operation.add_param("path", "id", "Book id")
    header_param = operation.add_param(ParamLocation.HEADER, "X-Trace")

    assert path_param.required is True
    assert path_param.schema is not None and path_param.schema.type == "string"
    assert header_param.to_dict() == {"name": "X-Trace", "in": "header", "required": False}


@pytest.mark.parametrize(
    ("example", "schema_type"),
    [(10, "integer"), (1.5, "number"), (True, "boolean"), ("x", "string"), ([1], "object")],
)
def test_query_param_type_follows_example(example: object, schema_type: str) -> None:
    operation = _document().add_path("/books").add_operation("get")

    operation.with_query_param("limit", "Page size", example)

    param = operation.parameters[0]
    assert param.location is ParamLocation.QUERY
    assert param.schema is not None and param.schema.type == schema_type
    assert param.example == example


def test_param_with_struct_uses_inline_schema() -> None:
    document = _document()

    param = Param(name="filter", location="query").with_struct(Metadata()).set_required()

    assert param.to_dict()["schema"] == {
        "type": "object",
        "properties": {"created_by": {"type": "string"}},
    }
    assert len(document.registry) == 0


def test_struct_param_uses_document_depth_limit() -> None:
    shallow = _document(registry=ComponentRegistry(max_depth=0)).add_path("/books")
    operation = _document().add_path("/books").add_operation("get")

    param = operation.add_struct_param("query", "filter", Metadata())

    assert param.schema is not None and param.schema.properties["created_by"].type == "string"
    assert operation.parameters == [param]
    with pytest.raises(RecursionLimitError):
        shallow.add_operation("get").add_struct_param("query", "filter", Metadata())


def test_param_and_header_components() -> None:
    document = _document()

    param_ref = document.add_param("pageSize", Param(name="size", location="query"))
    header_ref = document.add_header("traceId", Param(name="X-Trace", location="query"))

    assert param_ref == "#/components/parameters/pageSize"
    assert header_ref == "#/components/headers/traceId"
    assert document.get_header("traceId").location is ParamLocation.HEADER
    assert document.get_param("pageSize").name == "size"
    assert set(document.to_dict()["components"]) == {"parameters", "headers"}
    with pytest.raises(MissingComponentError):
        document.get_param("missing")
    with pytest.raises(LookupError):
        document.get_header("missing")


def test_schema_components_by_key() -> None:
    document = _document()

    assert document.get_schema("error") is None
    reference = document.add_schema("error", Schema(type="object"))

    assert reference.to_dict() == {"$ref": "#/components/schemas/error"}
    assert document.get_schema("error") is not None
    assert document.to_dict()["components"] == {"schemas": {"error": {"type": "object"}}}


def test_deprecated_operation_is_rendered() -> None:
    operation = _document().add_path("/old").add_operation("get").set_deprecated()

    assert operation.to_dict()["deprecated"] is True


def test_json_and_yaml_rendering_match_dict() -> None:
    document = _document()
    document.add_path("/books", "Books").add_operation("get").returns(
        200, "Books", "", [Book()]
    )

    expected = document.to_dict()

    assert json.loads(document.to_json(indent=2)) == expected
    assert yaml.safe_load(document.to_yaml()) == expected


def test_example_encoding_uses_wire_names() -> None:
    assert encode_example([Book(name="Dune")]) == [
        {"name": "Dune", "shelf": "fiction", "created_by": "system"}
    ]
    assert encode_example({"total": 3, "tags": ("a",)}) == {"total": 3, "tags": ["a"]}
