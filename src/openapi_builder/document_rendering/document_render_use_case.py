"""Document render use-case service."""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable
from pathlib import Path

from openapi_builder.component_registry.schema_registry import (
    ComponentRegistry,
    DuplicateRegistrationError,
)
from openapi_builder.configuration import (
    BuildConfiguration,
    ConfigurationError,
    OutputFormat,
    load_configuration,
)
from openapi_builder.document_assembly.api_document import OpenAPIDocument
from openapi_builder.document_assembly.document_models import DocumentError
from openapi_builder.schema_inference.inference_errors import SchemaInferenceError

from .render_contracts import DocumentBuilder, RenderOutcome, RenderRequest

logger = logging.getLogger(__name__)


class RenderExecutionError(Exception):
    """Raised when a document cannot be built or rendered."""


class BuilderImportError(RenderExecutionError):
    """Raised when the configured builder callable cannot be loaded."""


def execute_document_render(
    request: RenderRequest,
    *,
    builder_loader: Callable[[str], DocumentBuilder] | None = None,
) -> RenderOutcome:
    """Build the configured document, render it and write it when an output path is known."""
    try:
        configuration = load_configuration(request.config_path)
    except ConfigurationError as exc:
        raise RenderExecutionError(str(exc)) from exc

    output_format = _resolve_output_format(request.output_format, configuration.output.format)
    document = create_document(configuration)
    builder = (builder_loader or load_builder)(configuration.builder)
    logger.info("Building document with %s", configuration.builder)
    try:
        builder(document)
    except (
        SchemaInferenceError,
        DocumentError,
        DuplicateRegistrationError,
        LookupError,
        ValueError,
    ) as exc:
        raise RenderExecutionError(f"Document builder failed: {exc}") from exc

    text = render_document(document, output_format, indent=configuration.output.indent)
    output_path = Path(request.output_path) if request.output_path else configuration.output.path
    if output_path is not None:
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise RenderExecutionError(f"Failed to write document: {exc}") from exc
        output_path = output_path.resolve()
        logger.info("Wrote %s document to %s", output_format.value, output_path)

    return RenderOutcome(
        text=text,
        output_path=output_path,
        path_count=len(document.paths),
        schema_count=len(document.registry),
    )


def create_document(configuration: BuildConfiguration) -> OpenAPIDocument:
    """Create an empty document from configured metadata."""
    try:
        return OpenAPIDocument(
            configuration.info,
            version=configuration.openapi_version,
            servers=configuration.servers,
            registry=ComponentRegistry(max_depth=configuration.inference.max_depth),
        )
    except DocumentError as exc:
        raise RenderExecutionError(str(exc)) from exc


def load_builder(target: str) -> DocumentBuilder:
    """Import a `package.module:callable` target."""
    module_name, _, attribute_path = target.partition(":")
    try:
        resolved: object = importlib.import_module(module_name)
    except ImportError as exc:
        raise BuilderImportError(f"Cannot import builder module '{module_name}': {exc}") from exc
    for attribute in attribute_path.split("."):
        try:
            resolved = getattr(resolved, attribute)
        except AttributeError as exc:
            raise BuilderImportError(f"Builder '{target}' does not exist.") from exc
    if not callable(resolved):
        raise BuilderImportError(f"Builder '{target}' is not callable.")
    return resolved


def render_document(
    document: OpenAPIDocument, output_format: OutputFormat, *, indent: int | None = None
) -> str:
    if output_format is OutputFormat.JSON:
        return document.to_json(indent=indent) + "\n"
    return document.to_yaml()


def _resolve_output_format(requested: str | None, configured: OutputFormat) -> OutputFormat:
    if requested is None:
        return configured
    try:
        return OutputFormat(requested.lower())
    except ValueError as exc:
        raise RenderExecutionError(f"Unsupported output format: {requested}") from exc
