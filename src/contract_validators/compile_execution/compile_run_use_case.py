"""Compile run use-case service."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from contract_validators.configuration import ConfigurationError, load_configuration
from contract_validators.constraint_extraction import (
    StructureError,
    extract_field_validations,
    read_schema_definitions,
)
from contract_validators.configuration.runtime_settings import SchemaSourceConfig
from contract_validators.schema_loading import ParseError, load_schema_document, read_schema_text
from contract_validators.validator_emission import render_validator_module

from .compile_contracts import CompileOutcome, CompileRequest

logger = logging.getLogger(__name__)


class CompilationError(Exception):
    """Raised when a compile run cannot be completed."""


def execute_compile_run(request: CompileRequest) -> CompileOutcome:
    """Compile the configured schema document into a validator module.

    A failed run removes any previously generated module at the output path.
    """
    try:
        configuration = load_configuration(request.config_path)
    except (ConfigurationError, OSError) as exc:
        if request.output_path:
            _remove_stale_output(Path(request.output_path).resolve())
        raise CompilationError(str(exc)) from exc

    output_path = (
        Path(request.output_path).resolve()
        if request.output_path
        else configuration.output.path
    )
    schema = configuration.schema
    try:
        document = load_schema_document(
            _read_schema_source(schema), document_format=schema.document_format
        )
        definitions = read_schema_definitions(document, collection_path=schema.collection_path)
        extraction = extract_field_validations(document, collection_path=schema.collection_path)
        source = render_validator_module(extraction, module_doc=configuration.output.module_doc)
        _write_atomically(output_path, source)
    except (ParseError, StructureError, OSError) as exc:
        _remove_stale_output(output_path)
        raise CompilationError(str(exc)) from exc

    logger.info(
        "Wrote %d validators to %s (%d object schemas without constraints)",
        len(extraction),
        output_path,
        len(definitions) - len(extraction),
    )
    return CompileOutcome(
        output_path=output_path,
        validated_schemas=tuple(extraction),
        skipped_schemas=len(definitions) - len(extraction),
    )


def _read_schema_source(schema: SchemaSourceConfig) -> str:
    if schema.source_path is None:
        return schema.inline_text or ""
    return read_schema_text(schema.source_path)


def _write_atomically(destination: Path, text: str) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(
        dir=destination.parent, prefix=f".{destination.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.replace(temp_name, destination)
    except OSError:
        Path(temp_name).unlink(missing_ok=True)
        raise


def _remove_stale_output(output_path: Path) -> None:
    if output_path.exists():
        logger.warning("Removing stale validator module %s", output_path)
        output_path.unlink()
