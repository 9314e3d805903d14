"""OpenAPI document root."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import yaml

from openapi_builder.component_registry.schema_registry import (
    ComponentRegistry,
    DuplicateRegistrationError,
)
from openapi_builder.schema_model.schema_nodes import Schema

from .document_models import (
    Example,
    Info,
    InvalidDocumentError,
    Link,
    MissingComponentError,
    Param,
    ParamLocation,
    RequestBody,
    Response,
    Server,
)
from .operation_ids import OperationIdGenerator, default_operation_id
from .operations import ApiPath

logger = logging.getLogger(__name__)

DEFAULT_OPENAPI_VERSION = "3.0.0"
PARAM_REF_PREFIX = "#/components/parameters/"
HEADER_REF_PREFIX = "#/components/headers/"


# pylint: disable=too-many-instance-attributes
@dataclass
class Components:
    """Reusable objects of one document; schemas live in the registry."""

    schemas: ComponentRegistry
    responses: dict[str, Response] = field(default_factory=dict)
    parameters: dict[str, Param] = field(default_factory=dict)
    examples: dict[str, Example] = field(default_factory=dict)
    request_bodies: dict[str, RequestBody] = field(default_factory=dict)
    headers: dict[str, Param] = field(default_factory=dict)
    links: dict[str, Link] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        sections = (
            ("schemas", self.schemas.to_dict()),
            ("responses", {k: v.to_dict() for k, v in self.responses.items()}),
            ("parameters", {k: v.to_dict() for k, v in self.parameters.items()}),
            ("examples", {k: v.to_dict() for k, v in self.examples.items()}),
            ("requestBodies", {k: v.to_dict() for k, v in self.request_bodies.items()}),
            ("headers", {k: v.to_dict() for k, v in self.headers.items()}),
            ("links", {k: v.to_dict() for k, v in self.links.items()}),
        )
        return {name: section for name, section in sections if section}


class OpenAPIDocument:
    """Root of one OpenAPI 3.x document.

    The schema registry is owned by the document: every reference handed out by
    `must_get_schema` resolves against it.
    """

    # pylint: disable=too-many-arguments
    def __init__(
        self,
        info: Info,
        *,
        version: str = DEFAULT_OPENAPI_VERSION,
        servers: Sequence[Server] = (),
        registry: ComponentRegistry | None = None,
        operation_id_generator: OperationIdGenerator | None = default_operation_id,
    ) -> None:
        if not version.startswith("3."):
            raise InvalidDocumentError(f"only openapi 3.x is supported, got {version!r}")
        info.validate()
        for server in servers:
            server.validate()
        self.version = version
        self.info = info
        self.servers = list(servers)
        self.paths: dict[str, ApiPath] = {}
        self.components = Components(schemas=registry or ComponentRegistry())
        self.operation_id_generator = operation_id_generator

    @property
    def registry(self) -> ComponentRegistry:
        return self.components.schemas

    def get_schema(self, key: str) -> Schema | None:
        """Return a reference to the schema registered as `key`, if any."""
        return self.registry.reference(key)

    def must_get_schema(self, key: str, value: Any, annotation: Any = None) -> Schema:
        """Return a reference, inferring and registering the schema on first use."""
        return self.registry.must_get(key, value, annotation)

    def add_schema(self, key: str, schema: Schema) -> Schema:
        """Register a hand-written schema (replacing any previous one) and return a reference."""
        return self.registry.put(key, schema)

    def add_param(self, key: str, param: Param) -> str:
        self.components.parameters[key] = param
        return PARAM_REF_PREFIX + key

    def get_param(self, key: str) -> Param:
        try:
            return self.components.parameters[key]
        except KeyError as exc:
            raise MissingComponentError(f"failed to find param with key: {key}") from exc

    def add_header(self, key: str, param: Param) -> str:
        param.location = ParamLocation.HEADER
        self.components.headers[key] = param
        return HEADER_REF_PREFIX + key

    def get_header(self, key: str) -> Param:
        try:
            return self.components.headers[key]
        except KeyError as exc:
            raise MissingComponentError(f"failed to find header with key: {key}") from exc

    def add_path(self, path: str, summary: str = "", description: str = "") -> ApiPath:
        """Create a path item.

        Raises:
          DuplicateRegistrationError: If the path already exists.
        """
        if path in self.paths:
            raise DuplicateRegistrationError(f"path already exists: {path}")
        api_path = ApiPath(root=self, path=path, summary=summary, description=description)
        self.paths[path] = api_path
        logger.debug("Added path %s", path)
        return api_path

    def to_dict(self) -> dict[str, Any]:
        rendered: dict[str, Any] = {"openapi": self.version, "info": self.info.to_dict()}
        if self.servers:
            rendered["servers"] = [server.to_dict() for server in self.servers]
        rendered["paths"] = {path: item.to_dict() for path, item in self.paths.items()}
        components = self.components.to_dict()
        if components:
            rendered["components"] = components
        return rendered

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False, allow_unicode=True)
