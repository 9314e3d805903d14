"""Document rendering entities."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from openapi_builder.document_assembly.api_document import OpenAPIDocument

DocumentBuilder = Callable[[OpenAPIDocument], object]


@dataclass(frozen=True)
class RenderRequest:
    """Input contract for rendering one document."""

    config_path: str
    output_path: str | None = None
    output_format: str | None = None


@dataclass(frozen=True)
class RenderOutcome:
    """Output contract for one rendered document."""

    text: str
    output_path: Path | None
    path_count: int
    schema_count: int
