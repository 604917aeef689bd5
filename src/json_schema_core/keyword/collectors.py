"""Pointer-collector helpers for the common keyword shapes.

A pointer collector tells the analyzer which parts of a keyword's value are
schemas themselves. Most keywords fall into one of four shapes, each covered
here:

- ``SchemaPointerCollector``: ``"not": {...}``
- ``SchemaMapPointerCollector``: ``"properties": {"a": {...}, ...}``
- ``SchemaArrayPointerCollector``: ``"allOf": [{...}, ...]``
- ``SchemaOrSchemaArrayPointerCollector``: ``"items": {...}`` or ``[{...}, ...]``

Collected pointers are relative to the schema holding the keyword, e.g.
``/properties/a``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from json_schema_core.ref import JsonPointer

if TYPE_CHECKING:
    from json_schema_core.tree import SchemaTree
    from json_schema_core.walk import PointerSet

__all__ = [
    "AbstractPointerCollector",
    "SchemaArrayPointerCollector",
    "SchemaMapPointerCollector",
    "SchemaOrSchemaArrayPointerCollector",
    "SchemaPointerCollector",
]


class AbstractPointerCollector(ABC):
    """Base class for collectors of one keyword.

    Args:
        keyword: The keyword this collector handles.
    """

    def __init__(self, keyword: str) -> None:
        self.keyword = keyword
        self.base_pointer = JsonPointer.of(keyword)

    def get_node(self, tree: SchemaTree) -> Any:
        """Return the keyword's value in the tree's current node."""
        return tree.node.get(self.keyword)

    @abstractmethod
    def collect(self, pointers: PointerSet, tree: SchemaTree) -> None:
        """Add the pointers of the keyword's sub-schemas to ``pointers``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.keyword!r})"


class SchemaPointerCollector(AbstractPointerCollector):
    """The keyword's value is a schema."""

    def collect(self, pointers: PointerSet, tree: SchemaTree) -> None:
        pointers.add(self.base_pointer)


class SchemaMapPointerCollector(AbstractPointerCollector):
    """The keyword's value is an object whose members are schemas."""

    def collect(self, pointers: PointerSet, tree: SchemaTree) -> None:
        node = self.get_node(tree)
        if isinstance(node, dict):
            pointers.update(self.base_pointer.append(name) for name in sorted(node))


class SchemaArrayPointerCollector(AbstractPointerCollector):
    """The keyword's value is an array of schemas."""

    def collect(self, pointers: PointerSet, tree: SchemaTree) -> None:
        node = self.get_node(tree)
        if isinstance(node, list):
            pointers.update(self.base_pointer.append(index) for index in range(len(node)))


class SchemaOrSchemaArrayPointerCollector(AbstractPointerCollector):
    """The keyword's value is a schema or an array of schemas."""

    def collect(self, pointers: PointerSet, tree: SchemaTree) -> None:
        node = self.get_node(tree)
        if isinstance(node, list):
            pointers.update(self.base_pointer.append(index) for index in range(len(node)))
        else:
            pointers.add(self.base_pointer)
