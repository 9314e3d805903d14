"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from openapi_builder.document_assembly.document_models import Info, Server


class OutputFormat(str, Enum):
    """Rendered document formats."""

    YAML = "yaml"
    JSON = "json"


@dataclass(frozen=True)
class OutputSettings:
    """Where and how the rendered document is written."""

    format: OutputFormat
    path: Path | None
    indent: int | None


@dataclass(frozen=True)
class InferenceSettings:
    """Limits applied while inferring schemas."""

    max_depth: int


@dataclass(frozen=True)
class BuildConfiguration:
    """Top-level configuration aggregate."""

    path: Path
    openapi_version: str
    info: Info
    servers: tuple[Server, ...]
    builder: str
    output: OutputSettings
    inference: InferenceSettings
