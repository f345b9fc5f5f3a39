"""Python source rendering for validator modules."""

from __future__ import annotations

import re
from collections.abc import Mapping

from contract_validators.constraint_extraction.constraint_models import (
    ArrayMinItems,
    BaseType,
    Check,
    FieldValidation,
    IntegerRange,
    StringLengthRange,
    StringPattern,
)

from .check_evaluation import NULL_VIOLATION, TYPE_VIOLATIONS

DEFAULT_MODULE_DOC = "Generated schema validators. Do not edit."

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_NON_IDENTIFIER = re.compile(r"[^0-9a-zA-Z]+")

_TYPE_CONDITIONS = {
    BaseType.STRING: "not isinstance(value, str)",
    BaseType.INTEGER: "not isinstance(value, int) or isinstance(value, bool)",
    BaseType.ARRAY: (
        "not isinstance(value, (Sequence, Set)) or isinstance(value, (str, bytes, bytearray))"
    ),
}

_MODULE_PREAMBLE = '''from __future__ import annotations

import re
from collections.abc import Mapping, Sequence, Set


class ValidationError(ValueError):
    """Raised for the first violated check of an instance."""

    def __init__(self, field, violation):
        super().__init__(f"{field}: {violation}")
        self.field = field
        self.violation = violation


def _read(instance, field_name):
    if isinstance(instance, Mapping):
        return instance.get(field_name)
    return getattr(instance, field_name, None)
'''


def validator_function_name(schema_name: str) -> str:
    """Return the stable generated function name for a schema, e.g. ``validate_tenant_dto``."""
    snake = _CAMEL_BOUNDARY.sub("_", schema_name)
    snake = _NON_IDENTIFIER.sub("_", snake).strip("_").lower()
    return f"validate_{snake or 'schema'}"


def render_validator_module(
    extraction: Mapping[str, tuple[FieldValidation, ...]], *, module_doc: str | None = None
) -> str:
    """Render a standalone Python module with one validator function per schema."""
    patterns = _collect_patterns(extraction)
    function_names = _assign_function_names(extraction)

    parts = [f'"""{_escape_docstring(module_doc or DEFAULT_MODULE_DOC)}"""\n', _MODULE_PREAMBLE]
    if patterns:
        parts.append(
            "\n"
            + "".join(
                f"{constant} = re.compile({regex!r})\n" for regex, constant in patterns.items()
            )
        )
    for schema_name, fields in extraction.items():
        if not fields:
            continue
        parts.append(
            "\n\n" + _render_function(function_names[schema_name], schema_name, fields, patterns)
        )
    parts.append("\n\nVALIDATORS = {\n")
    parts.extend(
        f"    {schema_name!r}: {function_names[schema_name]},\n"
        for schema_name, fields in extraction.items()
        if fields
    )
    parts.append("}\n")
    return "".join(parts)


def _assign_function_names(
    extraction: Mapping[str, tuple[FieldValidation, ...]],
) -> dict[str, str]:
    names: dict[str, str] = {}
    taken: set[str] = set()
    for schema_name in extraction:
        base = validator_function_name(schema_name)
        candidate = base
        suffix = 2
        while candidate in taken:
            candidate = f"{base}_{suffix}"
            suffix += 1
        taken.add(candidate)
        names[schema_name] = candidate
    return names


def _collect_patterns(extraction: Mapping[str, tuple[FieldValidation, ...]]) -> dict[str, str]:
    patterns: dict[str, str] = {}
    for fields in extraction.values():
        for field in fields:
            for check in field.ordered_checks:
                if isinstance(check, StringPattern) and check.regex not in patterns:
                    patterns[check.regex] = f"_PATTERN_{len(patterns)}"
    return patterns


def _render_function(
    function_name: str,
    schema_name: str,
    fields: tuple[FieldValidation, ...],
    patterns: Mapping[str, str],
) -> str:
    lines = [
        f"def {function_name}(instance):",
        f'    """Validate a {_escape_docstring(schema_name)} instance and return it unchanged."""',
    ]
    for field in fields:
        lines.append(f"    value = _read(instance, {field.name!r})")
        if field.is_nullable:
            lines.append("    if value is not None:")
            indent = "        "
        else:
            lines.append("    if value is None:")
            lines.append(f"        {_raise(field.name, NULL_VIOLATION)}")
            indent = "    "
        lines.extend(indent + line for line in _render_field_checks(field, patterns))
    lines.append("    return instance")
    return "\n".join(lines) + "\n"


def _render_field_checks(field: FieldValidation, patterns: Mapping[str, str]) -> list[str]:
    lines = []
    type_message = TYPE_VIOLATIONS.get(field.base_type)
    if type_message is not None:
        lines.append(f"if {_TYPE_CONDITIONS[field.base_type]}:")
        lines.append(f"    {_raise(field.name, type_message)}")
    for check in field.ordered_checks:
        condition, message = _check_condition(check, patterns)
        lines.append(f"if {condition}:")
        lines.append(f"    {_raise(field.name, message)}")
    return lines


def _check_condition(check: Check, patterns: Mapping[str, str]) -> tuple[str, str]:
    if isinstance(check, StringLengthRange):
        return _range_condition("len(value)", check.min, check.max, prefix="length ")
    if isinstance(check, StringPattern):
        return (
            f"{patterns[check.regex]}.fullmatch(value) is None",
            f"must match pattern {check.regex}",
        )
    if isinstance(check, IntegerRange):
        return _range_condition("value", check.min, check.max, prefix="")
    if isinstance(check, ArrayMinItems):
        return f"len(value) < {check.n}", f"must have at least {check.n} item(s)"
    raise TypeError(f"Unsupported check: {check!r}")


def _range_condition(
    measured: str, lower: int | None, upper: int | None, *, prefix: str
) -> tuple[str, str]:
    if lower is not None and upper is not None:
        return (
            f"not {lower} <= {measured} <= {upper}",
            f"{prefix}must be between {lower} and {upper}",
        )
    if lower is not None:
        return f"{measured} < {lower}", f"{prefix}must be at least {lower}"
    return f"{measured} > {upper}", f"{prefix}must be at most {upper}"


def _raise(field_name: str, violation: str) -> str:
    return f"raise ValidationError({field_name!r}, {violation!r})"


def _escape_docstring(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')
