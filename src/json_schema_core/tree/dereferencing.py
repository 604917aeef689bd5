"""Dereferencing: which kind of tree a loader builds."""

from __future__ import annotations

from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any

from json_schema_core.tree.inline import InlineSchemaTree
from json_schema_core.tree.schema_tree import CanonicalSchemaTree, SchemaTree

if TYPE_CHECKING:
    from json_schema_core.load import SchemaLoader
    from json_schema_core.ref import JsonRef
    from json_schema_core.report import ProcessingReport

__all__ = ["Dereferencing"]


class Dereferencing(StrEnum):
    """How references are resolved.

    - ``CANONICAL``: follow references on demand, never copy (default).
    - ``INLINE``: substitute every reference when the tree is built.
    """

    CANONICAL = auto()
    INLINE = auto()

    def new_tree(
        self,
        node: Any,
        loading_ref: str | JsonRef | None = None,
        *,
        loader: SchemaLoader | None = None,
        report: ProcessingReport | None = None,
    ) -> SchemaTree:
        """Build a tree of this kind. ``report`` only matters for ``INLINE``."""
        if self is Dereferencing.INLINE:
            return InlineSchemaTree(node, loading_ref, loader=loader, report=report)
        return CanonicalSchemaTree(node, loading_ref, loader=loader)
