"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from contract_validators.schema_loading.document_loader import (
    SUPPORTED_FORMATS,
    format_from_suffix,
)

from .runtime_settings import Configuration, OutputConfig, SchemaSourceConfig


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigurationError(f"Configuration file is not valid UTF-8: {exc}") from exc
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    schema = _parse_schema_section(parsed.get("schema"), path.parent)
    output = _parse_output_section(parsed.get("output"), path.parent)
    return Configuration(path=path, schema=schema, output=output)


def _parse_schema_section(value: Any, base_path: Path) -> SchemaSourceConfig:
    section = _require_mapping(value, "schema")
    inline = section.get("inline")
    path_value = section.get("path")
    if inline and path_value:
        raise ConfigurationError("Schema definition must not set both inline and path.")

    inline_text: str | None = None
    source_path: Path | None = None
    if inline:
        if not isinstance(inline, str):
            raise ConfigurationError("schema.inline must be a string.")
        if not inline.strip():
            raise ConfigurationError("Schema text cannot be empty.")
        inline_text = inline
    elif path_value:
        if not isinstance(path_value, str):
            raise ConfigurationError("schema.path must be a string.")
        source_path = _resolve_path(base_path, path_value)
    else:
        raise ConfigurationError("Schema definition requires either inline or path.")

    document_format = _optional_string(section.get("format"), "schema.format")
    if document_format is not None:
        document_format = document_format.lower()
        if document_format not in SUPPORTED_FORMATS:
            raise ConfigurationError(
                f"schema.format must be one of: {', '.join(SUPPORTED_FORMATS)}."
            )
    if document_format is None and source_path is not None:
        document_format = format_from_suffix(source_path)

    return SchemaSourceConfig(
        inline_text=inline_text,
        source_path=source_path,
        document_format=document_format,
        collection_path=_optional_string(section.get("collection"), "schema.collection"),
    )


def _parse_output_section(value: Any, base_path: Path) -> OutputConfig:
    section = _require_mapping(value, "output")
    raw_path = _require_non_empty_string(section.get("path"), "output.path")
    output_path = _resolve_path(base_path, raw_path)
    if output_path.suffix != ".py":
        raise ConfigurationError("output.path must point to a .py module.")
    return OutputConfig(
        path=output_path,
        module_doc=_optional_string(section.get("module_doc"), "output.module_doc"),
    )


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
