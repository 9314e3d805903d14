"""Document rendering exports."""

from .document_render_use_case import (
    BuilderImportError,
    RenderExecutionError,
    create_document,
    execute_document_render,
    load_builder,
    render_document,
)
from .render_contracts import DocumentBuilder, RenderOutcome, RenderRequest

__all__ = [
    "BuilderImportError",
    "DocumentBuilder",
    "RenderExecutionError",
    "RenderOutcome",
    "RenderRequest",
    "create_document",
    "execute_document_render",
    "load_builder",
    "render_document",
]
