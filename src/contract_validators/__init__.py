"""Schema-driven validator compiler."""

from .constraint_extraction import StructureError, extract_field_validations
from .schema_loading import ParseError, load_schema_document
from .validator_emission import (
    ValidationError,
    ValidatorSet,
    compile_validators,
    render_validator_module,
)

__all__ = [
    "ParseError",
    "StructureError",
    "ValidationError",
    "ValidatorSet",
    "compile_validators",
    "extract_field_validations",
    "load_schema_document",
    "render_validator_module",
]
