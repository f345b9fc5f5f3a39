"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

from contract_validators.cli import main


def test_missing_required_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["compile"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--config" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["describe", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option" in captured.err
    assert "--bogus" in captured.err
    assert "Traceback" not in captured.err


def test_domain_error_returns_exit_code_one(tmp_path: Path, capsys) -> None:
    exit_code = main(["compile", "--config", str(tmp_path / "missing.yaml")])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Configuration file not found" in captured.err
    assert "Traceback" not in captured.err


def test_unparsable_schema_returns_exit_code_one(tmp_path: Path, capsys) -> None:
    schema_path = tmp_path / "api.json"
    schema_path.write_text("{not-json", encoding="utf-8")

    exit_code = main(["describe", "--schema", str(schema_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Invalid json schema document" in captured.err


def test_schema_with_invalid_utf8_returns_exit_code_one(tmp_path: Path, capsys) -> None:
    schema_path = tmp_path / "api.yaml"
    schema_path.write_bytes(b"\xff\xfe garbage")

    exit_code = main(["describe", "--schema", str(schema_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "not valid UTF-8" in captured.err
    assert "Traceback" not in captured.err


def test_instance_with_invalid_utf8_returns_exit_code_one(tmp_path: Path, capsys) -> None:
    schema_path = tmp_path / "api.yaml"
    schema_path.write_text(
        "definitions:\n  Tenant:\n    type: object\n    properties:\n"
        "      id: {type: string, minLength: 3}\n",
        encoding="utf-8",
    )
    instance_path = tmp_path / "tenant.json"
    instance_path.write_bytes(b'{"id": "\xff"}')

    exit_code = main(
        [
            "check",
            "--schema",
            str(schema_path),
            "--name",
            "Tenant",
            "--instance",
            str(instance_path),
        ]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Failed to read instance document" in captured.err
