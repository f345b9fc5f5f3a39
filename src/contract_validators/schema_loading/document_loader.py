"""Schema document loading service."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml

from .schema_tree import SchemaDocument, build_tree

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("yaml", "json")


class ParseError(Exception):
    """Raised when schema text is not well-formed."""


def load_schema_document(text: str, *, document_format: str | None = None) -> SchemaDocument:
    """Parse YAML or JSON schema text into an order-preserving tree.

    Args:
      text: Serialized schema document.
      document_format: ``"yaml"`` or ``"json"``; detected from the text when omitted.

    Returns:
      The parsed document.

    Raises:
      ParseError: If the text is empty or not well-formed for its format.
    """
    if not text.strip():
        raise ParseError("Schema document is empty.")

    resolved_format = document_format or detect_document_format(text)
    if resolved_format not in SUPPORTED_FORMATS:
        raise ParseError(f"Unsupported schema document format: {resolved_format}")

    try:
        if resolved_format == "json":
            try:
                parsed = json.loads(text)
            except json.JSONDecodeError as exc:
                raise ParseError(f"Invalid json schema document: {exc}") from exc
        else:
            try:
                parsed = yaml.safe_load(text)
            except yaml.YAMLError as exc:
                raise ParseError(f"Invalid yaml schema document: {exc}") from exc
        root = build_tree(parsed)
    except RecursionError as exc:
        raise ParseError(
            f"Invalid {resolved_format} schema document: nesting is too deep or recursive"
        ) from exc

    logger.debug("Parsed %s schema document (%d characters)", resolved_format, len(text))
    return SchemaDocument(document_format=resolved_format, root=root)


def read_schema_text(path: Path) -> str:
    """Read a UTF-8 schema document from disk.

    Raises:
      ParseError: If the file is not valid UTF-8.
      OSError: If the file cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(f"Schema document {path} is not valid UTF-8: {exc}") from exc


def detect_document_format(text: str) -> str:
    """Return ``json`` for text starting with a brace or bracket, otherwise ``yaml``."""
    stripped = text.lstrip()
    if stripped.startswith(("{", "[")):
        return "json"
    return "yaml"


def format_from_suffix(path: Path) -> str | None:
    """Return the document format implied by a file suffix, if any."""
    suffix = path.suffix.lower()
    if suffix == ".json":
        return "json"
    if suffix in (".yaml", ".yml"):
        return "yaml"
    return None
