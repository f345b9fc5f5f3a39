"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
import yaml

from contract_validators.compile_execution import (
    CompilationError,
    CompileRequest,
    execute_compile_run,
)
from contract_validators.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from contract_validators.constraint_extraction import (
    FieldValidation,
    StructureError,
    extract_field_validations,
    read_schema_definitions,
)
from contract_validators.logging_setup import configure_split_stream_logging
from contract_validators.schema_loading import (
    ParseError,
    SchemaDocument,
    format_from_suffix,
    load_schema_document,
    read_schema_text,
)
from contract_validators.validator_emission import ValidationError, compile_validators


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="contract-validators")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Schema-driven validator compiler."""
    if verbose:
        configure_split_stream_logging(level=logging.DEBUG)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML compile configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML compile configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="compile")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON compile configuration file",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Override the generated module path from the configuration",
)
def compile_schema(config_path: str, output_path: str | None) -> None:
    """Compile schema constraints into a Python validator module."""
    try:
        outcome = execute_compile_run(
            CompileRequest(config_path=config_path, output_path=output_path)
        )
    except CompilationError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(outcome.output_path))


@cli.command(name="describe")
@click.option(
    "--schema",
    "schema_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML/JSON schema document",
)
@click.option(
    "--collection",
    "collection_path",
    required=False,
    help="Dotted path to the named schema collection",
)
def describe(schema_path: str, collection_path: str | None) -> None:
    """Print the ordered checks extracted for every schema."""
    document = _load_document(schema_path)
    try:
        extraction = extract_field_validations(document, collection_path=collection_path)
    except StructureError as exc:
        raise CliError(str(exc)) from exc
    if not extraction:
        click.echo("No constrained schemas found.")
        return
    for schema_name, fields in extraction.items():
        click.echo(schema_name)
        for field in fields:
            click.echo(f"  {_describe_field(field)}")


@cli.command(name="check")
@click.option(
    "--schema",
    "schema_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML/JSON schema document",
)
@click.option("--name", "schema_name", required=True, help="Schema name to validate against")
@click.option(
    "--instance",
    "instance_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a YAML/JSON instance document",
)
@click.option(
    "--collection",
    "collection_path",
    required=False,
    help="Dotted path to the named schema collection",
)
def check(
    schema_path: str, schema_name: str, instance_path: str, collection_path: str | None
) -> None:
    """Validate one instance document against a named schema."""
    document = _load_document(schema_path)
    try:
        known_schemas = {
            definition.name
            for definition in read_schema_definitions(document, collection_path=collection_path)
        }
        validators = compile_validators(
            extract_field_validations(document, collection_path=collection_path)
        )
    except StructureError as exc:
        raise CliError(str(exc)) from exc
    if schema_name not in known_schemas:
        raise CliError(f"Unknown object schema: {schema_name}")

    instance = _load_instance(instance_path)
    try:
        validators.validate(schema_name, instance)
    except ValidationError as exc:
        raise CliError(str(exc)) from exc
    click.echo("valid")


def _load_document(schema_path: str) -> SchemaDocument:
    path = Path(schema_path)
    try:
        text = read_schema_text(path)
        return load_schema_document(text, document_format=format_from_suffix(path))
    except (ParseError, OSError) as exc:
        raise CliError(str(exc)) from exc


def _load_instance(instance_path: str) -> object:
    try:
        text = Path(instance_path).read_text(encoding="utf-8")
        instance = yaml.safe_load(text)
    except (yaml.YAMLError, OSError, ValueError) as exc:
        raise CliError(f"Failed to read instance document: {exc}") from exc
    if not isinstance(instance, dict):
        raise CliError("Instance document root must be a mapping.")
    return instance


def _describe_field(field: FieldValidation) -> str:
    presence = "nullable" if field.is_nullable else "required"
    checks = ", ".join(repr(check) for check in field.ordered_checks)
    return f"{field.name} ({field.base_type.value}, {presence}): {checks}"


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
