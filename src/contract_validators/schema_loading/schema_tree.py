"""Order-preserving schema document tree."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TreeScalar:
    """Leaf value: string, number, boolean or null."""

    value: Any


@dataclass(frozen=True)
class TreeSequence:
    """Ordered list of child nodes."""

    items: tuple[TreeNode, ...]

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def scalar_values(self) -> tuple[Any, ...]:
        """Return raw values of the scalar members, skipping nested nodes."""
        return tuple(item.value for item in self.items if isinstance(item, TreeScalar))


@dataclass(frozen=True)
class TreeMapping:
    """Mapping node keeping the source key order."""

    entries: tuple[tuple[str, TreeNode], ...]

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return any(name == key for name, _ in self.entries)

    def keys(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.entries)

    def items(self) -> tuple[tuple[str, TreeNode], ...]:
        return self.entries

    def get(self, key: str) -> TreeNode | None:
        for name, node in self.entries:
            if name == key:
                return node
        return None

    def scalar(self, key: str) -> Any:
        """Return the raw value stored under `key`, or None when it is not a scalar."""
        node = self.get(key)
        if isinstance(node, TreeScalar):
            return node.value
        return None

    def find(self, dotted_path: str) -> TreeNode | None:
        """Walk nested mappings along a dotted path such as `components.schemas`."""
        node: TreeNode | None = self
        for segment in dotted_path.split("."):
            if not isinstance(node, TreeMapping):
                return None
            node = node.get(segment)
        return node


TreeNode = TreeMapping | TreeSequence | TreeScalar


@dataclass(frozen=True)
class SchemaDocument:
    """Parsed schema document with its detected serialization format."""

    document_format: str
    root: TreeNode


def build_tree(value: Any) -> TreeNode:
    """Convert parsed YAML/JSON values into tree nodes."""
    if isinstance(value, Mapping):
        return TreeMapping(
            entries=tuple((str(key), build_tree(child)) for key, child in value.items())
        )
    if isinstance(value, (list, tuple)):
        return TreeSequence(items=tuple(build_tree(child) for child in value))
    return TreeScalar(value=value)


def to_python(node: TreeNode) -> Any:
    """Convert a tree back into plain dicts, lists and scalars."""
    if isinstance(node, TreeMapping):
        return {key: to_python(child) for key, child in node.entries}
    if isinstance(node, TreeSequence):
        return [to_python(child) for child in node.items]
    return node.value
