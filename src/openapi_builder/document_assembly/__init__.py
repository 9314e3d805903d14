"""Document assembly exports."""

from .api_document import DEFAULT_OPENAPI_VERSION, Components, OpenAPIDocument
from .document_models import (
    MIME_JSON,
    MIME_YAML,
    Contact,
    DocumentError,
    Example,
    Info,
    InvalidDocumentError,
    InvalidParamLocationError,
    License,
    Link,
    MediaType,
    MissingComponentError,
    Param,
    ParamLocation,
    RequestBody,
    Response,
    Server,
    ServerVariable,
    new_path_param,
    new_query_param,
)
from .example_encoding import encode_example
from .operation_ids import OperationIdGenerator, default_operation_id
from .operations import ApiPath, Operation
from .routing import Router, join_path_parts

__all__ = [
    "DEFAULT_OPENAPI_VERSION",
    "MIME_JSON",
    "MIME_YAML",
    "ApiPath",
    "Components",
    "Contact",
    "DocumentError",
    "Example",
    "Info",
    "InvalidDocumentError",
    "InvalidParamLocationError",
    "License",
    "Link",
    "MediaType",
    "MissingComponentError",
    "OpenAPIDocument",
    "Operation",
    "OperationIdGenerator",
    "Param",
    "ParamLocation",
    "RequestBody",
    "Response",
    "Router",
    "Server",
    "ServerVariable",
    "default_operation_id",
    "encode_example",
    "join_path_parts",
    "new_path_param",
    "new_query_param",
]
