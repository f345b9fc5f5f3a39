"""Constraint extraction exports."""

from .constraint_extractor import (
    DEFAULT_COLLECTION_PATHS,
    StructureError,
    extract_field_validations,
    read_schema_definitions,
)
from .constraint_models import (
    ArrayMinItems,
    BaseType,
    Check,
    FieldValidation,
    IntegerRange,
    PropertyDefinition,
    SchemaDefinition,
    StringLengthRange,
    StringPattern,
)

__all__ = [
    "ArrayMinItems",
    "BaseType",
    "Check",
    "DEFAULT_COLLECTION_PATHS",
    "FieldValidation",
    "IntegerRange",
    "PropertyDefinition",
    "SchemaDefinition",
    "StringLengthRange",
    "StringPattern",
    "StructureError",
    "extract_field_validations",
    "read_schema_definitions",
]
