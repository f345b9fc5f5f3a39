"""Constraint extraction entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class BaseType(str, Enum):
    """Property types that carry checks."""

    STRING = "string"
    INTEGER = "integer"
    ARRAY = "array"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_keyword(cls, keyword: object) -> BaseType:
        for member in (cls.STRING, cls.INTEGER, cls.ARRAY):
            if keyword == member.value:
                return member
        return cls.UNSUPPORTED


@dataclass(frozen=True)
class PropertyDefinition:
    """One declared field of a named schema."""

    base_type: BaseType
    is_reference: bool
    declared_constraints: Mapping[str, Any]
    is_nullable: bool


@dataclass(frozen=True)
class SchemaDefinition:
    """Named object schema with its properties in declaration order."""

    name: str
    required_fields: frozenset[str]
    properties: tuple[tuple[str, PropertyDefinition], ...]


@dataclass(frozen=True)
class StringLengthRange:
    """Length bounds for a string value; either side may be open."""

    min: int | None = None
    max: int | None = None


@dataclass(frozen=True)
class StringPattern:
    """Regular expression the whole string value must match."""

    regex: str


@dataclass(frozen=True)
class IntegerRange:
    """Inclusive bounds for an integer value; either side may be open."""

    min: int | None = None
    max: int | None = None


@dataclass(frozen=True)
class ArrayMinItems:
    """Minimum element count for an array value."""

    n: int


Check = StringLengthRange | StringPattern | IntegerRange | ArrayMinItems


@dataclass(frozen=True)
class FieldValidation:
    """Ordered checks for one field of a schema."""

    name: str
    base_type: BaseType
    is_nullable: bool
    ordered_checks: tuple[Check, ...]
