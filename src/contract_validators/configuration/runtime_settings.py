"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SchemaSourceConfig:
    """Normalized schema document settings."""

    inline_text: str | None
    source_path: Path | None
    document_format: str | None
    collection_path: str | None


@dataclass(frozen=True)
class OutputConfig:
    """Destination of the generated validator module."""

    path: Path
    module_doc: str | None


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    schema: SchemaSourceConfig
    output: OutputConfig
