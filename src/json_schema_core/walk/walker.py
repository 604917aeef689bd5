"""TreeWalker: recursive descent over a JSON value, driven by a visitor.

For every node:

1. ``visit_node`` is called; a non-``CONTINUE`` result ends the walk.
2. Scalars stop there.
3. Objects and arrays get their pre-hook, with an empty ``PointerSet`` the
   hook fills with the children to visit. A non-``CONTINUE`` pre-hook result
   ends the walk without calling the post-hook.
4. Selected children are walked in set order; the first non-``CONTINUE``
   child result ends the walk.
5. The post-hook runs (also when no child was selected) and its result is
   the node's result.

The walk never raises to stop early: termination travels back up as a
return value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from json_schema_core.ref import JsonPointer
from json_schema_core.walk.visitor import PointerSet, TreeVisitor, VisitResult

if TYPE_CHECKING:
    from json_schema_core.report import ProcessingReport
    from json_schema_core.tree import SchemaTree

__all__ = ["TreeWalker"]


class TreeWalker:
    """Walks JSON values on behalf of one visitor.

    Example::

        walker = TreeWalker(MyVisitor())
        result = walker.walk({"a": [1, 2]}, report)
    """

    def __init__(self, visitor: TreeVisitor) -> None:
        self._visitor = visitor

    @property
    def visitor(self) -> TreeVisitor:
        return self._visitor

    def walk(
        self,
        node: Any,
        report: ProcessingReport,
        pointer: JsonPointer | None = None,
    ) -> VisitResult:
        """Walk ``node``, reporting its position as ``pointer`` (root by default)."""
        return self._walk(pointer if pointer is not None else JsonPointer.empty(), node, report)

    def walk_tree(self, tree: SchemaTree, report: ProcessingReport) -> VisitResult:
        """Walk the current node of ``tree`` from its current pointer."""
        return self._walk(tree.pointer, tree.node, report)

    def _walk(self, pointer: JsonPointer, node: Any, report: ProcessingReport) -> VisitResult:
        result = self._visitor.visit_node(pointer, node, report)
        if result is not VisitResult.CONTINUE:
            return result
        if isinstance(node, dict):
            return self._walk_container(pointer, node, report, is_object=True)
        if isinstance(node, list):
            return self._walk_container(pointer, node, report, is_object=False)
        return result

    def _walk_container(
        self,
        pointer: JsonPointer,
        node: dict[str, Any] | list[Any],
        report: ProcessingReport,
        *,
        is_object: bool,
    ) -> VisitResult:
        visitor = self._visitor
        if is_object:
            pre, post = visitor.pre_visit_object, visitor.post_visit_object
        else:
            pre, post = visitor.pre_visit_array, visitor.post_visit_array
        children = PointerSet()
        result = pre(pointer, node, children, report)
        if result is not VisitResult.CONTINUE:
            return result

        for child in children:
            result = self._walk(pointer.append(child), child.get(node), report)
            if result is not VisitResult.CONTINUE:
                return result

        return post(pointer, report)
