"""Closure-based validators built from extracted field validations."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from contract_validators.constraint_extraction.constraint_models import (
    Check,
    FieldValidation,
    StringPattern,
)

from .check_evaluation import NULL_VIOLATION, ValidationError, check_violation, type_violation

logger = logging.getLogger(__name__)

InstanceT = TypeVar("InstanceT")


@dataclass(frozen=True)
class _CompiledCheck:
    check: Check
    pattern: re.Pattern[str] | None


@dataclass(frozen=True)
class _CompiledField:
    validation: FieldValidation
    checks: tuple[_CompiledCheck, ...]


class SchemaValidator:
    """Fail-fast validator for one schema.

    Fields are checked in declaration order and the first violated check raises
    ``ValidationError``. Validators hold only immutable check data and can be
    shared between threads.
    """

    def __init__(self, schema_name: str, fields: tuple[FieldValidation, ...]) -> None:
        self.schema_name = schema_name
        self._fields = tuple(_compile_field(field) for field in fields)

    @property
    def fields(self) -> tuple[FieldValidation, ...]:
        return tuple(compiled.validation for compiled in self._fields)

    def validate(self, instance: InstanceT) -> InstanceT:
        """Return `instance` unchanged when every check passes."""
        for compiled in self._fields:
            field = compiled.validation
            value = read_field(instance, field.name)
            if value is None:
                if field.is_nullable:
                    continue
                raise ValidationError(field.name, NULL_VIOLATION)

            violation = type_violation(field.base_type, value)
            if violation is not None:
                raise ValidationError(field.name, violation)

            for compiled_check in compiled.checks:
                violation = check_violation(compiled_check.check, value, compiled_check.pattern)
                if violation is not None:
                    raise ValidationError(field.name, violation)
        return instance

    __call__ = validate

    def __repr__(self) -> str:
        return f"SchemaValidator({self.schema_name!r}, fields={len(self._fields)})"


class ValidatorSet(Mapping[str, SchemaValidator]):
    """Read-only mapping of schema name to its validator."""

    def __init__(self, validators: Mapping[str, SchemaValidator]) -> None:
        self._validators = dict(validators)

    def __getitem__(self, schema_name: str) -> SchemaValidator:
        return self._validators[schema_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._validators)

    def __len__(self) -> int:
        return len(self._validators)

    def validate(self, schema_name: str, instance: InstanceT) -> InstanceT:
        """Validate `instance` as `schema_name`; schemas without a validator always pass."""
        validator = self._validators.get(schema_name)
        if validator is None:
            return instance
        return validator.validate(instance)


def compile_validators(extraction: Mapping[str, tuple[FieldValidation, ...]]) -> ValidatorSet:
    """Build one validator per schema that has at least one constrained field."""
    validators = {
        schema_name: SchemaValidator(schema_name, fields)
        for schema_name, fields in extraction.items()
        if fields
    }
    logger.debug("Compiled %d schema validators", len(validators))
    return ValidatorSet(validators)


def read_field(instance: Any, field_name: str) -> Any:
    """Read a field from a mapping or an attribute-bearing object."""
    if isinstance(instance, Mapping):
        return instance.get(field_name)
    return getattr(instance, field_name, None)


def _compile_field(field: FieldValidation) -> _CompiledField:
    return _CompiledField(
        validation=field,
        checks=tuple(
            _CompiledCheck(
                check=check,
                pattern=re.compile(check.regex) if isinstance(check, StringPattern) else None,
            )
            for check in field.ordered_checks
        ),
    )
