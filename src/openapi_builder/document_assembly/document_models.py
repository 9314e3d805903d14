"""Document assembly entities and their serialized form."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from openapi_builder.schema_inference.inference_engine import DEFAULT_MAX_DEPTH, infer_schema
from openapi_builder.schema_model.schema_nodes import Schema
from openapi_builder.type_descriptors.descriptor_models import ScalarShape
from openapi_builder.type_descriptors.type_walker import describe_type

MIME_JSON = "application/json"
MIME_YAML = "application/yaml"


class DocumentError(Exception):
    """Raised for document construction mistakes."""


class InvalidDocumentError(DocumentError):
    """Raised when document metadata is incomplete or unsupported."""


class InvalidParamLocationError(DocumentError):
    """Raised when a parameter location is not path, query, header or cookie."""


class MissingComponentError(DocumentError, LookupError):
    """Raised when a named component is looked up but was never added."""


class ParamLocation(str, Enum):
    """Where a parameter is carried in the request."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


def coerce_param_location(location: ParamLocation | str) -> ParamLocation:
    try:
        return ParamLocation(location)
    except ValueError as exc:
        raise InvalidParamLocationError(f"invalid param location: {location}") from exc


@dataclass(frozen=True)
class Contact:
    name: str = ""
    url: str = ""
    email: str = ""

    def to_dict(self) -> dict[str, Any]:
        return _without_empty({"name": self.name, "url": self.url, "email": self.email})


@dataclass(frozen=True)
class License:
    name: str
    url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, **_without_empty({"url": self.url})}


@dataclass(frozen=True)
class Info:
    """Document-level metadata; title and version are mandatory."""

    title: str
    version: str
    terms_of_service: str = ""
    contact: Contact | None = None
    license: License | None = None

    def validate(self) -> None:
        _require_non_empty(self.title, "info.title")
        _require_non_empty(self.version, "info.version")
        if self.license is not None:
            _require_non_empty(self.license.name, "info.license.name")

    def to_dict(self) -> dict[str, Any]:
        rendered: dict[str, Any] = {"title": self.title, "version": self.version}
        if self.terms_of_service:
            rendered["termsOfService"] = self.terms_of_service
        if self.contact is not None:
            rendered["contact"] = self.contact.to_dict()
        if self.license is not None:
            rendered["license"] = self.license.to_dict()
        return rendered


@dataclass(frozen=True)
class ServerVariable:
    default: str
    enum: tuple[str, ...] = ()
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        rendered = _without_empty({"enum": list(self.enum), "description": self.description})
        rendered["default"] = self.default
        return rendered


@dataclass(frozen=True)
class Server:
    url: str
    description: str = ""
    variables: dict[str, ServerVariable] = field(default_factory=dict)

    def validate(self) -> None:
        _require_non_empty(self.url, "server.url")
        for name, variable in self.variables.items():
            _require_non_empty(variable.default, f"server.variables.{name}.default")

    def to_dict(self) -> dict[str, Any]:
        rendered: dict[str, Any] = {"url": self.url}
        if self.description:
            rendered["description"] = self.description
        if self.variables:
            rendered["variables"] = {k: v.to_dict() for k, v in self.variables.items()}
        return rendered


@dataclass
class Example:
    value: Any
    summary: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        rendered = _without_empty({"summary": self.summary, "description": self.description})
        rendered["value"] = self.value
        return rendered


# pylint: disable=too-many-instance-attributes
@dataclass
class Param:
    """One request parameter; path parameters are always required."""

    name: str
    location: ParamLocation | str
    description: str = ""
    required: bool = False
    deprecated: bool = False
    allow_empty_value: bool = False
    schema: Schema | None = None
    example: Any = None
    examples: dict[str, Example] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.location = coerce_param_location(self.location)

    def set_required(self) -> Param:
        self.required = True
        return self

    def allow_empty(self) -> Param:
        self.allow_empty_value = True
        return self

    def set_deprecated(self) -> Param:
        self.deprecated = True
        return self

    def with_struct(
        self, value: Any, annotation: Any = None, *, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> Param:
        """Use an inline schema inferred from `value` instead of a component reference.

        `Operation.add_struct_param` passes the owning document's depth limit.
        """
        self.schema = infer_schema(value, annotation, max_depth=max_depth)
        return self

    def with_schema(self, schema: Schema) -> Param:
        self.schema = schema
        return self

    def to_dict(self) -> dict[str, Any]:
        location = coerce_param_location(self.location)
        rendered: dict[str, Any] = {"name": self.name, "in": location.value}
        if self.description:
            rendered["description"] = self.description
        rendered["required"] = self.required
        if self.deprecated:
            rendered["deprecated"] = True
        if self.allow_empty_value:
            rendered["allowEmptyValue"] = True
        if self.schema is not None:
            rendered["schema"] = self.schema.to_dict()
        if self.example is not None:
            rendered["example"] = self.example
        if self.examples:
            rendered["examples"] = {k: v.to_dict() for k, v in self.examples.items()}
        return rendered


def new_path_param(name: str, description: str = "") -> Param:
    return Param(
        name=name,
        location=ParamLocation.PATH,
        description=description,
        required=True,
        schema=Schema(type="string"),
    )


def new_query_param(name: str, description: str, example: Any) -> Param:
    """Build a scalar query parameter typed after its example value."""
    return Param(
        name=name,
        location=ParamLocation.QUERY,
        description=description,
        example=example,
        schema=Schema(type=example_schema_type(example)),
    )


def example_schema_type(example: Any) -> str:
    shape = describe_type(type(example))
    if isinstance(shape, ScalarShape):
        return shape.schema_type()[0]
    return "object"


@dataclass
class MediaType:
    schema: Schema | None = None
    example: Any = None
    examples: dict[str, Example] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        rendered: dict[str, Any] = {}
        if self.schema is not None:
            rendered["schema"] = self.schema.to_dict()
        if self.example is not None:
            rendered["example"] = self.example
        if self.examples:
            rendered["examples"] = {k: v.to_dict() for k, v in self.examples.items()}
        return rendered


@dataclass
class RequestBody:
    content: dict[str, MediaType]
    description: str = ""
    required: bool = False

    def to_dict(self) -> dict[str, Any]:
        rendered: dict[str, Any] = {}
        if self.description:
            rendered["description"] = self.description
        rendered["content"] = {mime: media.to_dict() for mime, media in self.content.items()}
        if self.required:
            rendered["required"] = True
        return rendered


@dataclass
class Response:
    description: str
    headers: dict[str, Param] = field(default_factory=dict)
    content: dict[str, MediaType] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        rendered: dict[str, Any] = {"description": self.description}
        if self.headers:
            rendered["headers"] = {k: v.to_dict() for k, v in self.headers.items()}
        if self.content:
            rendered["content"] = {mime: media.to_dict() for mime, media in self.content.items()}
        return rendered


@dataclass
class Link:
    operation_ref: str = ""
    operation_id: str = ""
    parameters: dict[str, Any] = field(default_factory=dict)
    request_body: Any = None
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        rendered = _without_empty(
            {
                "operationRef": self.operation_ref,
                "operationId": self.operation_id,
                "parameters": dict(self.parameters),
                "description": self.description,
            }
        )
        if self.request_body is not None:
            rendered["requestBody"] = self.request_body
        return rendered


def _without_empty(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value}


def _require_non_empty(value: Any, field_name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidDocumentError(f"{field_name} must be a non-empty string.")
