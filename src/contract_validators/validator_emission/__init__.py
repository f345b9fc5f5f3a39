"""Validator emission exports."""

from .check_evaluation import ValidationError, check_violation, type_violation
from .compiled_validators import SchemaValidator, ValidatorSet, compile_validators
from .source_renderer import render_validator_module, validator_function_name

__all__ = [
    "SchemaValidator",
    "ValidationError",
    "ValidatorSet",
    "check_violation",
    "compile_validators",
    "render_validator_module",
    "type_violation",
    "validator_function_name",
]
