"""Violation rules shared by compiled and generated validators."""

from __future__ import annotations

import re
from collections.abc import Sequence, Set

from contract_validators.constraint_extraction.constraint_models import (
    ArrayMinItems,
    BaseType,
    Check,
    IntegerRange,
    StringLengthRange,
    StringPattern,
)

NULL_VIOLATION = "must not be null"
TYPE_VIOLATIONS = {
    BaseType.STRING: "must be a string",
    BaseType.INTEGER: "must be an integer",
    BaseType.ARRAY: "must be an array",
}


class ValidationError(ValueError):
    """Raised by a validator for the first violated check of an instance."""

    def __init__(self, field: str, violation: str) -> None:
        super().__init__(f"{field}: {violation}")
        self.field = field
        self.violation = violation


def type_violation(base_type: BaseType, value: object) -> str | None:
    """Return the violation text when `value` has the wrong shape for `base_type`."""
    if base_type is BaseType.STRING:
        matches = isinstance(value, str)
    elif base_type is BaseType.INTEGER:
        matches = isinstance(value, int) and not isinstance(value, bool)
    elif base_type is BaseType.ARRAY:
        matches = isinstance(value, (Sequence, Set)) and not isinstance(
            value, (str, bytes, bytearray)
        )
    else:
        return None
    return None if matches else TYPE_VIOLATIONS[base_type]


def check_violation(
    check: Check, value, compiled_pattern: re.Pattern[str] | None = None
) -> str | None:
    """Return the violation text for `check`, or None when `value` satisfies it."""
    if isinstance(check, StringLengthRange):
        return _range_violation(len(value), check.min, check.max, prefix="length ")
    if isinstance(check, StringPattern):
        pattern = compiled_pattern or re.compile(check.regex)
        if pattern.fullmatch(value) is None:
            return f"must match pattern {check.regex}"
        return None
    if isinstance(check, IntegerRange):
        return _range_violation(value, check.min, check.max, prefix="")
    if isinstance(check, ArrayMinItems):
        if len(value) < check.n:
            return f"must have at least {check.n} item(s)"
        return None
    raise TypeError(f"Unsupported check: {check!r}")


def _range_violation(
    measured: int, lower: int | None, upper: int | None, *, prefix: str
) -> str | None:
    if lower is not None and upper is not None:
        if not lower <= measured <= upper:
            return f"{prefix}must be between {lower} and {upper}"
        return None
    if lower is not None and measured < lower:
        return f"{prefix}must be at least {lower}"
    if upper is not None and measured > upper:
        return f"{prefix}must be at most {upper}"
    return None
