"""Paths and operations of a document.

Methods named `add_*` return the object they just created; methods named
`with_*` return the receiver so calls can be chained.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from openapi_builder.component_registry.schema_registry import DuplicateRegistrationError
from openapi_builder.schema_model.schema_nodes import Schema

from .document_models import (
    MIME_JSON,
    MediaType,
    Param,
    ParamLocation,
    RequestBody,
    Response,
    coerce_param_location,
    new_path_param,
    new_query_param,
)
from .example_encoding import encode_example

if TYPE_CHECKING:
    from .api_document import OpenAPIDocument


@dataclass(eq=False)
class ApiPath:
    """Path item holding one operation per HTTP method."""

    root: OpenAPIDocument = field(repr=False)
    path: str
    summary: str = ""
    description: str = ""
    parameters: list[Param] = field(default_factory=list)
    operations: dict[str, Operation] = field(default_factory=dict)

    def add_operation(self, method: str) -> Operation:
        """Create the operation for `method` on this path.

        Raises:
          DuplicateRegistrationError: If the path already has this method.
        """
        method = method.lower()
        if method in self.operations:
            raise DuplicateRegistrationError(
                f"operation for path {self.path} already exists for method {method}"
            )
        operation = Operation(method=method, api_path=self)
        self.operations[method] = operation
        return operation

    def to_dict(self) -> dict[str, Any]:
        rendered: dict[str, Any] = {"summary": self.summary, "description": self.description}
        if self.parameters:
            rendered["parameters"] = [param.to_dict() for param in self.parameters]
        for method, operation in self.operations.items():
            rendered[method] = operation.to_dict()
        return rendered


# pylint: disable=too-many-instance-attributes
@dataclass(eq=False)
class Operation:
    """One HTTP method on one path."""

    method: str
    api_path: ApiPath = field(repr=False)
    tags: list[str] = field(default_factory=list)
    summary: str = ""
    description: str = ""
    operation_id: str = ""
    parameters: list[Param] = field(default_factory=list)
    request_body: RequestBody | None = None
    responses: dict[str, Response] = field(default_factory=dict)
    deprecated: bool = False

    @property
    def root(self) -> OpenAPIDocument:
        return self.api_path.root

    def metadata(
        self, operation_id: str = "", summary: str = "", description: str = ""
    ) -> Operation:
        """Set id, summary and description; a missing id comes from the document's generator."""
        generator = self.root.operation_id_generator
        if not operation_id and generator is not None:
            operation_id = generator(self.method, self.api_path.path)
        if operation_id:
            self.operation_id = operation_id
        self.summary = summary
        self.description = description
        return self

    def returns(
        self, code: int, description: str, key: str, value: Any, annotation: Any = None
    ) -> Operation:
        """Add a JSON response whose schema is registered under `key`."""
        status = self._unused_status(code)
        self.responses[status] = self._json_response(description, key, value, annotation)
        return self

    # pylint: disable=too-many-arguments
    def returns_non_json(
        self,
        code: int,
        description: str,
        mime_type: str,
        headers: Mapping[str, Param] | None = None,
        schema: Schema | None = None,
        example: Any = None,
    ) -> Operation:
        status = self._unused_status(code)
        self.responses[status] = Response(
            description=description,
            headers=dict(headers or {}),
            content={mime_type: MediaType(schema=schema, example=example)},
        )
        return self

    def return_default(
        self, description: str, key: str, value: Any, annotation: Any = None
    ) -> Operation:
        """Set the response used when no declared status code matches."""
        self.responses["default"] = self._json_response(description, key, value, annotation)
        return self

    def read_json(
        self, description: str, required: bool, key: str, value: Any, annotation: Any = None
    ) -> Operation:
        """Declare a JSON request body whose schema is registered under `key`."""
        schema = self.root.must_get_schema(key, value, annotation)
        self.request_body = RequestBody(
            description=description,
            required=required,
            content={MIME_JSON: MediaType(schema=schema, example=encode_example(value))},
        )
        return self

    def read(
        self, description: str, required: bool, mime_type: str, example: Any = None
    ) -> Operation:
        """Declare a raw request body of any media type."""
        self.request_body = RequestBody(
            description=description,
            required=required,
            content={mime_type: MediaType(example=example)},
        )
        return self

    def add_param(self, location: ParamLocation | str, name: str, description: str = "") -> Param:
        resolved = coerce_param_location(location)
        if resolved is ParamLocation.PATH:
            param = new_path_param(name, description)
        else:
            param = Param(name=name, location=resolved, description=description)
        self.parameters.append(param)
        return param

    # pylint: disable=too-many-arguments
    def add_struct_param(
        self,
        location: ParamLocation | str,
        name: str,
        value: Any,
        annotation: Any = None,
        description: str = "",
    ) -> Param:
        """Add a parameter whose inline schema is inferred with the document's depth limit."""
        return self.add_param(location, name, description).with_struct(
            value, annotation, max_depth=self.root.registry.max_depth
        )

    def with_param(self, param: Param) -> Operation:
        coerce_param_location(param.location)
        self.parameters.append(param)
        return self

    def with_path_param(self, name: str, description: str = "") -> Operation:
        return self.with_param(new_path_param(name, description))

    def with_query_param(self, name: str, description: str, example: Any) -> Operation:
        """Add a scalar query parameter; structured query values are not described."""
        return self.with_param(new_query_param(name, description, example))

    def with_tags(self, *tags: str) -> Operation:
        self.tags.extend(tags)
        return self

    def set_deprecated(self) -> Operation:
        self.deprecated = True
        return self

    def to_dict(self) -> dict[str, Any]:
        rendered: dict[str, Any] = {}
        if self.tags:
            rendered["tags"] = list(self.tags)
        if self.summary:
            rendered["summary"] = self.summary
        if self.description:
            rendered["description"] = self.description
        if self.operation_id:
            rendered["operationId"] = self.operation_id
        if self.parameters:
            rendered["parameters"] = [param.to_dict() for param in self.parameters]
        if self.request_body is not None:
            rendered["requestBody"] = self.request_body.to_dict()
        rendered["responses"] = {code: resp.to_dict() for code, resp in self.responses.items()}
        if self.deprecated:
            rendered["deprecated"] = True
        return rendered

    def _unused_status(self, code: int) -> str:
        status = str(code)
        if status in self.responses:
            raise DuplicateRegistrationError(
                f"operation {self.operation_id or self.method + ' ' + self.api_path.path} "
                f"already returns code {status}"
            )
        return status

    def _json_response(self, description: str, key: str, value: Any, annotation: Any) -> Response:
        schema = self.root.must_get_schema(key, value, annotation)
        return Response(
            description=description,
            content={MIME_JSON: MediaType(schema=schema, example=encode_example(value))},
        )
