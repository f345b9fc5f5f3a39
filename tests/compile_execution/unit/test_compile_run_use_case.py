"""Compile run use-case tests."""

from __future__ import annotations

import ast
from pathlib import Path

import pytest
from contract_validators.compile_execution import (
    CompilationError,
    CompileRequest,
    execute_compile_run,
)

_SCHEMA = """
components:
  schemas:
    CreateTenantRequest:
      type: object
      required: [id, name]
      properties:
        id:
          type: string
          minLength: 3
          maxLength: 63
        name:
          type: string
          minLength: 1
          maxLength: 255
    ErrorResponse:
      type: object
      properties:
        message: {type: string}
"""


def _write_config(tmp_path: Path, schema_text: str = _SCHEMA, output: str = "out/validators.py"):
    (tmp_path / "api.yaml").write_text(schema_text, encoding="utf-8")
    config_path = tmp_path / "validators.yaml"
    config_path.write_text(
        f"schema:\n  path: api.yaml\noutput:\n  path: {output}\n  module_doc: Tenant API.\n",
        encoding="utf-8",
    )
    return config_path


def test_compile_run_writes_generated_module(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)

    outcome = execute_compile_run(CompileRequest(config_path=str(config_path)))

    expected_path = (tmp_path / "out" / "validators.py").resolve()
    assert outcome.output_path == expected_path
    assert outcome.validated_schemas == ("CreateTenantRequest",)
    assert outcome.skipped_schemas == 1
    source = expected_path.read_text(encoding="utf-8")
    tree = ast.parse(source)
    assert ast.get_docstring(tree) == "Tenant API."
    assert "def validate_create_tenant_request(instance):" in source
    assert "validate_error_response" not in source
    assert not list(expected_path.parent.glob("*.tmp"))


def test_output_override_takes_precedence(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    override = tmp_path / "elsewhere" / "generated.py"

    outcome = execute_compile_run(
        CompileRequest(config_path=str(config_path), output_path=str(override))
    )

    assert outcome.output_path == override.resolve()
    assert override.exists()
    assert not (tmp_path / "out" / "validators.py").exists()


def test_parse_failure_removes_stale_output(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path, schema_text="components: [unclosed")
    stale = tmp_path / "out" / "validators.py"
    stale.parent.mkdir()
    stale.write_text("VALIDATORS = {}\n", encoding="utf-8")

    with pytest.raises(CompilationError, match="Invalid yaml schema document"):
        execute_compile_run(CompileRequest(config_path=str(config_path)))

    assert not stale.exists()


def test_structure_failure_removes_stale_output(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path, schema_text="openapi: 3.1.0\npaths: {}\n")
    stale = tmp_path / "out" / "validators.py"
    stale.parent.mkdir()
    stale.write_text("VALIDATORS = {}\n", encoding="utf-8")

    with pytest.raises(CompilationError, match="no named schema collection"):
        execute_compile_run(CompileRequest(config_path=str(config_path)))

    assert not stale.exists()


def test_configuration_failure_removes_stale_override_output(tmp_path: Path) -> None:
    stale = tmp_path / "generated.py"
    stale.write_text("VALIDATORS = {}\n", encoding="utf-8")

    with pytest.raises(CompilationError, match="not found"):
        execute_compile_run(
            CompileRequest(config_path=str(tmp_path / "missing.yaml"), output_path=str(stale))
        )

    assert not stale.exists()


def test_recompiling_replaces_previous_output(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    execute_compile_run(CompileRequest(config_path=str(config_path)))
    (tmp_path / "api.yaml").write_text(
        _SCHEMA.replace("maxLength: 63", "maxLength: 30"), encoding="utf-8"
    )

    outcome = execute_compile_run(CompileRequest(config_path=str(config_path)))

    source = outcome.output_path.read_text(encoding="utf-8")
    assert "length must be between 3 and 30" in source
    assert "length must be between 3 and 63" not in source


def test_missing_schema_file_removes_previous_output(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    first = execute_compile_run(CompileRequest(config_path=str(config_path)))
    assert first.output_path.exists()
    (tmp_path / "api.yaml").unlink()

    with pytest.raises(CompilationError, match="api.yaml"):
        execute_compile_run(CompileRequest(config_path=str(config_path)))

    assert not first.output_path.exists()


def test_schema_file_with_invalid_utf8_removes_stale_output(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    (tmp_path / "api.yaml").write_bytes(b"\xff\xfe garbage")
    stale = tmp_path / "out" / "validators.py"
    stale.parent.mkdir()
    stale.write_text("VALIDATORS = {}\n", encoding="utf-8")

    with pytest.raises(CompilationError, match="not valid UTF-8"):
        execute_compile_run(CompileRequest(config_path=str(config_path)))

    assert not stale.exists()


def test_module_doc_with_trailing_quote_compiles_to_parsable_module(tmp_path: Path) -> None:
    (tmp_path / "api.yaml").write_text(_SCHEMA, encoding="utf-8")
    config_path = tmp_path / "validators.yaml"
    config_path.write_text(
        "schema:\n  path: api.yaml\noutput:\n  path: out.py\n"
        "  module_doc: 'Validators for \"Tenant\"'\n",
        encoding="utf-8",
    )

    outcome = execute_compile_run(CompileRequest(config_path=str(config_path)))

    tree = ast.parse(outcome.output_path.read_text(encoding="utf-8"))
    assert ast.get_docstring(tree) == 'Validators for "Tenant"'
