"""Constraint extraction service."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

from contract_validators.schema_loading.schema_tree import (
    SchemaDocument,
    TreeMapping,
    TreeNode,
    TreeScalar,
    TreeSequence,
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

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION_PATHS = ("components.schemas", "definitions", "$defs")
CONSTRAINT_KEYWORDS = ("pattern", "minLength", "maxLength", "minimum", "maximum", "minItems")
_COMPOSITION_KEYWORDS = ("allOf", "oneOf", "anyOf")
_NULL_MARKERS = ("null", None)


class StructureError(Exception):
    """Raised when a document lacks a usable named schema collection."""


def extract_field_validations(
    document: SchemaDocument, *, collection_path: str | None = None
) -> dict[str, tuple[FieldValidation, ...]]:
    """Return ordered field validations keyed by schema name.

    Schemas without a single constrained field have no entry.
    """
    extracted: dict[str, tuple[FieldValidation, ...]] = {}
    for definition in read_schema_definitions(document, collection_path=collection_path):
        validations = tuple(_schema_field_validations(definition))
        if not validations:
            logger.debug("Schema %s has no constrained fields; no validator", definition.name)
            continue
        extracted[definition.name] = validations
    return extracted


def read_schema_definitions(
    document: SchemaDocument, *, collection_path: str | None = None
) -> tuple[SchemaDefinition, ...]:
    """Return the object schemas of the document in declaration order."""
    collection = _locate_collection(document.root, collection_path)
    definitions: list[SchemaDefinition] = []
    for name, node in collection.items():
        definition = _read_schema_definition(name, node)
        if definition is None:
            logger.debug("Skipping schema %s: not an object with properties", name)
            continue
        definitions.append(definition)
    return tuple(definitions)


def _locate_collection(root: TreeNode, collection_path: str | None) -> TreeMapping:
    if not isinstance(root, TreeMapping):
        raise StructureError("Schema document root must be a mapping.")

    if collection_path:
        candidates: Sequence[str] = (collection_path,)
    else:
        candidates = DEFAULT_COLLECTION_PATHS

    for path in candidates:
        collection = root.find(path)
        if collection is None:
            continue
        if not isinstance(collection, TreeMapping):
            raise StructureError(f"Schema collection '{path}' must be a mapping.")
        logger.debug("Using schema collection %s (%d entries)", path, len(collection))
        return collection

    if collection_path:
        raise StructureError(f"Schema collection '{collection_path}' not found.")
    raise StructureError(
        "Schema document has no named schema collection "
        f"(looked for {', '.join(DEFAULT_COLLECTION_PATHS)})."
    )


def _read_schema_definition(name: str, node: TreeNode) -> SchemaDefinition | None:
    if not isinstance(node, TreeMapping) or node.scalar("type") != "object":
        return None
    properties = node.get("properties")
    if not isinstance(properties, TreeMapping) or len(properties) == 0:
        return None

    required_fields = _required_fields(node.get("required"))
    resolved: list[tuple[str, PropertyDefinition]] = []
    for field_name, property_node in properties.items():
        resolved.append(
            (field_name, _read_property_definition(field_name, property_node, required_fields))
        )
    return SchemaDefinition(
        name=name,
        required_fields=required_fields,
        properties=tuple(resolved),
    )


def _required_fields(node: TreeNode | None) -> frozenset[str]:
    if not isinstance(node, TreeSequence):
        return frozenset()
    return frozenset(value for value in node.scalar_values() if isinstance(value, str))


def _read_property_definition(
    field_name: str, node: TreeNode, required_fields: frozenset[str]
) -> PropertyDefinition:
    if not isinstance(node, TreeMapping):
        return PropertyDefinition(
            base_type=BaseType.UNSUPPORTED,
            is_reference=False,
            declared_constraints={},
            is_nullable=field_name not in required_fields,
        )

    base_type, nullable_type = _resolve_type(node.get("type"))
    declared_constraints = {
        keyword: node.scalar(keyword) for keyword in CONSTRAINT_KEYWORDS if keyword in node
    }
    return PropertyDefinition(
        base_type=base_type,
        is_reference=_is_reference(node),
        declared_constraints=declared_constraints,
        is_nullable=(
            nullable_type
            or node.scalar("nullable") is True
            or field_name not in required_fields
        ),
    )


def _resolve_type(node: TreeNode | None) -> tuple[BaseType, bool]:
    if isinstance(node, TreeScalar):
        return BaseType.from_keyword(node.value), False
    if isinstance(node, TreeSequence):
        members = node.scalar_values()
        non_null = [member for member in members if member not in _NULL_MARKERS]
        has_null = len(non_null) != len(members)
        if not non_null:
            return BaseType.UNSUPPORTED, has_null
        return BaseType.from_keyword(non_null[0]), has_null
    return BaseType.UNSUPPORTED, False


def _is_reference(node: TreeMapping) -> bool:
    if "$ref" in node:
        return True
    for keyword in _COMPOSITION_KEYWORDS:
        members = node.get(keyword)
        if (
            isinstance(members, TreeSequence)
            and len(members) > 0
            and all(isinstance(member, TreeMapping) and "$ref" in member for member in members)
        ):
            return True
    return False


def _schema_field_validations(definition: SchemaDefinition) -> list[FieldValidation]:
    validations: list[FieldValidation] = []
    for field_name, prop in definition.properties:
        if prop.is_reference:
            logger.debug("Skipping %s.%s: schema reference", definition.name, field_name)
            continue
        if prop.base_type is BaseType.UNSUPPORTED:
            logger.debug("Skipping %s.%s: unsupported type", definition.name, field_name)
            continue
        checks = _normalize_checks(definition.name, field_name, prop)
        if not checks:
            continue
        validations.append(
            FieldValidation(
                name=field_name,
                base_type=prop.base_type,
                is_nullable=prop.is_nullable,
                ordered_checks=checks,
            )
        )
    return validations


def _normalize_checks(
    schema_name: str, field_name: str, prop: PropertyDefinition
) -> tuple[Check, ...]:
    constraints = prop.declared_constraints
    checks: list[Check] = []

    if prop.base_type is BaseType.STRING:
        min_length = _bound(constraints, "minLength")
        max_length = _bound(constraints, "maxLength")
        if min_length is not None or max_length is not None:
            checks.append(StringLengthRange(min=min_length, max=max_length))
        pattern = constraints.get("pattern")
        if isinstance(pattern, str):
            _ensure_compilable(schema_name, field_name, pattern)
            checks.append(StringPattern(regex=pattern))
    elif prop.base_type is BaseType.INTEGER:
        minimum = _bound(constraints, "minimum")
        maximum = _bound(constraints, "maximum")
        if minimum is not None or maximum is not None:
            checks.append(IntegerRange(min=minimum, max=maximum))
    elif prop.base_type is BaseType.ARRAY:
        min_items = _bound(constraints, "minItems")
        if min_items is not None:
            checks.append(ArrayMinItems(n=min_items))

    return tuple(checks)


def _bound(constraints: Mapping[str, Any], keyword: str) -> int | None:
    value = constraints.get(keyword)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if value is not None:
        logger.debug("Ignoring non-integer %s bound: %r", keyword, value)
    return None


def _ensure_compilable(schema_name: str, field_name: str, pattern: str) -> None:
    try:
        re.compile(pattern)
    except re.error as exc:
        raise StructureError(
            f"Invalid pattern for {schema_name}.{field_name}: {pattern} ({exc})"
        ) from exc
