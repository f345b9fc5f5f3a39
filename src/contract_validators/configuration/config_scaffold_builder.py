"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "validators.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Compile configuration template for contract-validators.
# Replace every <REQUIRED> placeholder before running compile.
# Replace <OPTIONAL> placeholders only when your setup needs them.

schema:
  # Provide either an inline schema document or a schema document path.
  path: "<REQUIRED>"
  # inline: "<OPTIONAL>"
  # yaml or json; detected from the file suffix or the document text when omitted.
  # format: "<OPTIONAL>"
  # Dotted path to the named schema collection.
  # Defaults to the first of components.schemas, definitions, $defs.
  # collection: "<OPTIONAL>"

output:
  # Generated Python module; relative paths resolve against this file.
  path: "<REQUIRED>"
  # module_doc: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML compile configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder compile configuration template to the requested output path.

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
        raise FileExistsError(f"Compile configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
