"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "openapi-builder.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Build configuration template for openapi-builder.
# Replace every <REQUIRED> placeholder before running render.
# Replace <OPTIONAL> placeholders only when your document needs them.

# OpenAPI version of the rendered document; only 3.x is supported.
openapi: "3.0.0"

info:
  title: "<REQUIRED>"
  version: "<REQUIRED>"
  terms_of_service: "<OPTIONAL>"
  contact:
    name: "<OPTIONAL>"
    url: "<OPTIONAL>"
    email: "<OPTIONAL>"
  license:
    name: "<OPTIONAL>"
    url: "<OPTIONAL>"

servers:
  - url: "<OPTIONAL>"
    description: "<OPTIONAL>"

# Callable that receives the document and declares routes, operations and schemas.
builder: "<REQUIRED: package.module:callable>"

output:
  # Choose yaml or json.
  format: "yaml"
  # Omit path to print the document to standard output.
  # path: "<OPTIONAL>"
  # indent: "<OPTIONAL>"

inference:
  # Maximum nesting depth before schema inference gives up on a type graph.
  max_depth: 64
"""


def build_placeholder_configuration() -> str:
    """Build a YAML build configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder build configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Build configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
