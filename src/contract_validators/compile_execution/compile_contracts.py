"""Compile execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CompileRequest:
    """Input contract for one compile run."""

    config_path: str
    output_path: str | None = None


@dataclass(frozen=True)
class CompileOutcome:
    """Output contract for one completed compile run."""

    output_path: Path
    validated_schemas: tuple[str, ...]
    skipped_schemas: int
