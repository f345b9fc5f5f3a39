"""Schema document loader tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from contract_validators.schema_loading import (
    ParseError,
    TreeMapping,
    TreeScalar,
    TreeSequence,
    format_from_suffix,
    load_schema_document,
    read_schema_text,
    to_python,
)


def test_yaml_document_preserves_mapping_order() -> None:
    text = """
components:
  schemas:
    Zeta:
      type: object
    Alpha:
      type: object
    Mid:
      type: object
"""

    document = load_schema_document(text)

    assert document.document_format == "yaml"
    schemas = document.root.find("components.schemas")
    assert isinstance(schemas, TreeMapping)
    assert schemas.keys() == ("Zeta", "Alpha", "Mid")


def test_json_document_is_detected_from_leading_brace() -> None:
    text = '{"definitions": {"B": {"type": "object"}, "A": {"type": "object"}}}'

    document = load_schema_document(text)

    assert document.document_format == "json"
    definitions = document.root.find("definitions")
    assert isinstance(definitions, TreeMapping)
    assert definitions.keys() == ("B", "A")


def test_sequences_keep_element_order_and_scalars_keep_values() -> None:
    document = load_schema_document("required: [id, name, 3]\nnullable: true\n")

    assert isinstance(document.root, TreeMapping)
    required = document.root.get("required")
    assert isinstance(required, TreeSequence)
    assert required.scalar_values() == ("id", "name", 3)
    assert document.root.get("nullable") == TreeScalar(value=True)


def test_integer_mapping_keys_are_converted_to_strings() -> None:
    document = load_schema_document("responses:\n  200:\n    description: ok\n")

    responses = document.root.find("responses")
    assert isinstance(responses, TreeMapping)
    assert responses.keys() == ("200",)


def test_to_python_round_trips_plain_values() -> None:
    document = load_schema_document('{"a": [1, {"b": null}], "c": "d"}')

    assert to_python(document.root) == {"a": [1, {"b": None}], "c": "d"}


def test_find_returns_none_for_missing_or_non_mapping_segments() -> None:
    document = load_schema_document("a:\n  b: 1\n")

    assert isinstance(document.root, TreeMapping)
    assert document.root.find("a.c") is None
    assert document.root.find("a.b.c") is None


@pytest.mark.parametrize(
    ("text", "document_format"),
    [
        ("{not-valid-json}", "json"),
        ("key: [unclosed", "yaml"),
        ("key: value\n- item\n", None),
    ],
)
def test_malformed_text_raises_parse_error(text: str, document_format: str | None) -> None:
    with pytest.raises(ParseError):
        load_schema_document(text, document_format=document_format)


def test_empty_text_raises_parse_error() -> None:
    with pytest.raises(ParseError, match="empty"):
        load_schema_document("   \n")


def test_unsupported_format_raises_parse_error() -> None:
    with pytest.raises(ParseError, match="Unsupported"):
        load_schema_document("a: 1", document_format="toml")


def test_format_from_suffix() -> None:
    assert format_from_suffix(Path("api.json")) == "json"
    assert format_from_suffix(Path("api.YML")) == "yaml"
    assert format_from_suffix(Path("api.yaml")) == "yaml"
    assert format_from_suffix(Path("api.txt")) is None


@pytest.mark.parametrize(
    ("text", "document_format"),
    [
        ("[" * 100000, "json"),
        ("a: &loop [*loop]\n", "yaml"),
    ],
)
def test_too_deep_or_recursive_documents_raise_parse_error(
    text: str, document_format: str
) -> None:
    with pytest.raises(ParseError, match="too deep or recursive"):
        load_schema_document(text, document_format=document_format)


def test_read_schema_text_rejects_invalid_utf8(tmp_path: Path) -> None:
    schema_path = tmp_path / "api.yaml"
    schema_path.write_bytes(b"\xff\xfe garbage")

    with pytest.raises(ParseError, match="not valid UTF-8"):
        read_schema_text(schema_path)


def test_read_schema_text_returns_file_contents(tmp_path: Path) -> None:
    schema_path = tmp_path / "api.yaml"
    schema_path.write_text("definitions: {}\n", encoding="utf-8")

    assert read_schema_text(schema_path) == "definitions: {}\n"
