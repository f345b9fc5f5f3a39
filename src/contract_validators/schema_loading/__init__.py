"""Schema loading exports."""

from .document_loader import (
    ParseError,
    format_from_suffix,
    load_schema_document,
    read_schema_text,
)
from .schema_tree import (
    SchemaDocument,
    TreeMapping,
    TreeNode,
    TreeScalar,
    TreeSequence,
    to_python,
)

__all__ = [
    "ParseError",
    "SchemaDocument",
    "TreeMapping",
    "TreeNode",
    "TreeScalar",
    "TreeSequence",
    "format_from_suffix",
    "load_schema_document",
    "read_schema_text",
    "to_python",
]
