"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from openapi_builder.document_assembly.api_document import DEFAULT_OPENAPI_VERSION
from openapi_builder.document_assembly.document_models import (
    Contact,
    Info,
    License,
    Server,
    ServerVariable,
)
from openapi_builder.schema_inference.inference_engine import (
    DEFAULT_MAX_DEPTH,
    MAX_INFERENCE_DEPTH,
)

from .runtime_settings import BuildConfiguration, InferenceSettings, OutputFormat, OutputSettings


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> BuildConfiguration:
    """Load and validate the configuration file (YAML or JSON)."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return BuildConfiguration(
        path=path,
        openapi_version=_parse_openapi_version(parsed.get("openapi", DEFAULT_OPENAPI_VERSION)),
        info=_parse_info_section(parsed.get("info")),
        servers=_parse_servers_section(parsed.get("servers")),
        builder=_parse_builder_target(parsed.get("builder")),
        output=_parse_output_section(parsed.get("output"), path.parent),
        inference=_parse_inference_section(parsed.get("inference")),
    )


def _parse_openapi_version(value: Any) -> str:
    version = _require_non_empty_string(_stringify(value), "openapi")
    if not version.startswith("3."):
        raise ConfigurationError(f"openapi '{version}' is not supported; use a 3.x version.")
    return version


def _parse_info_section(value: Any) -> Info:
    section = _require_mapping(value, "info")
    contact = section.get("contact")
    license_section = section.get("license")
    return Info(
        title=_require_non_empty_string(section.get("title"), "info.title"),
        version=_require_non_empty_string(_stringify(section.get("version")), "info.version"),
        terms_of_service=_optional_string(section.get("terms_of_service"), "info.terms_of_service")
        or "",
        contact=_parse_contact(contact) if contact is not None else None,
        license=_parse_license(license_section) if license_section is not None else None,
    )


def _parse_contact(value: Any) -> Contact:
    section = _require_mapping(value, "info.contact")
    return Contact(
        name=_optional_string(section.get("name"), "info.contact.name") or "",
        url=_optional_string(section.get("url"), "info.contact.url") or "",
        email=_optional_string(section.get("email"), "info.contact.email") or "",
    )


def _parse_license(value: Any) -> License:
    section = _require_mapping(value, "info.license")
    return License(
        name=_require_non_empty_string(section.get("name"), "info.license.name"),
        url=_optional_string(section.get("url"), "info.license.url") or "",
    )


def _parse_servers_section(value: Any) -> tuple[Server, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ConfigurationError("servers must be a list of server mappings.")
    servers = []
    for index, item in enumerate(value):
        label = f"servers[{index}]"
        section = _require_mapping(item, label)
        servers.append(
            Server(
                url=_require_non_empty_string(section.get("url"), f"{label}.url"),
                description=_optional_string(section.get("description"), f"{label}.description")
                or "",
                variables=_parse_server_variables(section.get("variables"), label),
            )
        )
    return tuple(servers)


def _parse_server_variables(value: Any, label: str) -> dict[str, ServerVariable]:
    if value is None:
        return {}
    section = _require_mapping(value, f"{label}.variables")
    variables = {}
    for name, raw in section.items():
        variable_label = f"{label}.variables.{name}"
        variable = _require_mapping(raw, variable_label)
        variables[str(name)] = ServerVariable(
            default=_require_non_empty_string(
                _stringify(variable.get("default")), f"{variable_label}.default"
            ),
            enum=_normalize_string_sequence(variable.get("enum"), f"{variable_label}.enum"),
            description=_optional_string(
                variable.get("description"), f"{variable_label}.description"
            )
            or "",
        )
    return variables


def _parse_builder_target(value: Any) -> str:
    target = _require_non_empty_string(value, "builder")
    module_name, separator, attribute = target.partition(":")
    if not separator or not module_name.strip() or not attribute.strip():
        raise ConfigurationError("builder must use the form 'package.module:callable'.")
    return target


def _parse_output_section(value: Any, base_path: Path) -> OutputSettings:
    if value is None:
        return OutputSettings(format=OutputFormat.YAML, path=None, indent=None)
    section = _require_mapping(value, "output")
    format_raw = _require_non_empty_string(section.get("format", "yaml"), "output.format").lower()
    try:
        output_format = OutputFormat(format_raw)
    except ValueError as exc:
        raise ConfigurationError("output.format must be 'yaml' or 'json'.") from exc
    path_value = _optional_string(section.get("path"), "output.path")
    indent = section.get("indent")
    if indent is not None:
        indent = _require_positive_int(indent, "output.indent")
    return OutputSettings(
        format=output_format,
        path=_resolve_path(base_path, path_value) if path_value else None,
        indent=indent,
    )


def _parse_inference_section(value: Any) -> InferenceSettings:
    if value is None:
        return InferenceSettings(max_depth=DEFAULT_MAX_DEPTH)
    section = _require_mapping(value, "inference")
    max_depth = _require_positive_int(
        section.get("max_depth", DEFAULT_MAX_DEPTH), "inference.max_depth"
    )
    if max_depth > MAX_INFERENCE_DEPTH:
        raise ConfigurationError(f"inference.max_depth must be at most {MAX_INFERENCE_DEPTH}.")
    return InferenceSettings(max_depth=max_depth)


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _stringify(value: Any) -> Any:
    # YAML reads `version: 1.0` as a float.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
