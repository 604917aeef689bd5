"""InlineSchemaTree: a tree whose references are substituted up front.

At construction the document is copied with a ``TreeWalker``; every
``{"$ref": ...}`` object met on the way is replaced by a copy of the value it
designates, itself inlined the same way. Targets in other documents are
read through the loader's ``load_document`` (raw, not as trees), which
serves them from the loader's document cache when it is enabled.

Inside name maps (``properties``, ``definitions`` and the like) every member
is a sub-schema, even one called ``default`` or ``enum``; inside a schema
those keywords hold data and are copied untouched.

A target whose inlined value cut no reference cycle is inlined once per
construction: later references to it share that value. The result is a
read-only value graph, so the sharing is not observable through the tree.

Reference cycles
----------------
Every substitution runs with the stack of references currently being
substituted. A reference already on that stack is not expanded again: the
node becomes the marker ``{"$ref": "<absolute reference>"}`` and a WARNING
``ref.loop`` message is recorded. A self-referencing schema is therefore
unrolled exactly once::

    tree = InlineSchemaTree({"properties": {"next": {"$ref": "#"}}})
    tree.node
    # {"properties": {"next": {"properties": {"next": {"$ref": "#"}}}}}

Failures (dangling pointers, fetch errors) go to the construction report,
at ERROR level or FATAL for a scheme no fetcher handles, and leave the
reference node as it was; without a report they raise ``LoadingError``.
Loop warnings without a report are logged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from json_schema_core.exceptions import (
    InvalidReferenceError,
    LoadingError,
    PointerNotFoundError,
)
from json_schema_core.json_utils import deep_copy
from json_schema_core.messages import CORE_BUNDLE
from json_schema_core.ref import JsonPointer, JsonRef
from json_schema_core.report import (
    ListProcessingReport,
    LogLevel,
    ProcessingMessage,
    ProcessingReport,
)
from json_schema_core.tree.schema_tree import SchemaTree, loading_error, report_loading_error
from json_schema_core.tree.scope import SchemaLayout, ScopeIndex, rebase, walked_members
from json_schema_core.walk import PointerSet, TreeVisitor, TreeWalker, VisitResult

if TYPE_CHECKING:
    from json_schema_core.load import SchemaLoader

__all__ = ["InlineSchemaTree"]

logger = logging.getLogger(__name__)

_Stack = tuple[JsonRef, ...]


def _is_reference(node: Any) -> bool:
    return isinstance(node, dict) and isinstance(node.get("$ref"), str)


class _Substitution:
    """One inlining run over a root document."""

    def __init__(
        self,
        node: Any,
        loading_ref: JsonRef,
        loader: SchemaLoader | None,
        report: ProcessingReport | None,
    ) -> None:
        self._loader = loader
        self._report = report
        self._sink = report if report is not None else ListProcessingReport()
        self._root = (node, ScopeIndex.build(node, loading_ref))
        self._documents: dict[JsonRef, tuple[Any, ScopeIndex]] = {}
        self._inlined: dict[JsonRef, Any] = {}
        self._markers = 0

    def run(self) -> Any:
        node, index = self._root
        return self.copy(node, index.loading_ref, ())

    def copy(self, value: Any, base: JsonRef, stack: _Stack) -> Any:
        visitor = _InliningVisitor(self, base, stack)
        TreeWalker(visitor).walk(value, self._sink)
        return visitor.result

    def substitute(self, scope: JsonRef, node: dict[str, Any], stack: _Stack) -> Any:
        """Return the inlined value ``node`` refers to, or a marker."""
        text = node["$ref"]
        try:
            target = scope.resolve(text)
        except InvalidReferenceError:
            self._fail(loading_error("ref.invalid", text))
            return deep_copy(node)
        if target in stack:
            self._markers += 1
            self._warn_loop(target, stack)
            return {"$ref": str(target)}
        if target in self._inlined:
            return self._inlined[target]
        try:
            value, base = self._lookup(target)
        except LoadingError as exc:
            self._fail(exc)
            return deep_copy(node)
        markers = self._markers
        inlined = self.copy(value, base, (*stack, target))
        if self._markers == markers:
            # No cycle was cut below this target: its value is the same on any stack.
            self._inlined[target] = inlined
        return inlined

    def _lookup(self, target: JsonRef) -> tuple[Any, JsonRef]:
        document, index = self._root
        if not (index.owns(target.locator) or index.locate(target) is not None):
            document, index = self._document(target.locator)
        pointer = index.locate(target)
        if pointer is None:
            raise loading_error("ref.danglingRef", target)
        try:
            value = pointer.get(document)
        except PointerNotFoundError:
            raise loading_error("ref.danglingRef", target) from None
        if pointer.is_empty():
            return value, index.loading_ref
        return value, index.scope_of(pointer.parent())

    def _document(self, locator: JsonRef) -> tuple[Any, ScopeIndex]:
        cached = self._documents.get(locator)
        if cached is None:
            if self._loader is None:
                raise loading_error("ref.noLoader", locator)
            value = self._loader.load_document(locator)
            cached = (value, ScopeIndex.build(value, locator))
            self._documents[locator] = cached
        return cached

    def _fail(self, exc: LoadingError) -> None:
        if self._report is None:
            raise exc
        report_loading_error(self._report, exc)

    def _warn_loop(self, target: JsonRef, stack: _Stack) -> None:
        message = (
            ProcessingMessage()
            .set_log_level(LogLevel.WARNING)
            .set_message(CORE_BUNDLE.get_message("ref.loop"))
            .put("ref", str(target))
            .put("path", [str(ref) for ref in stack])
        )
        if self._report is None:
            logger.warning("%s", message)
        else:
            self._report.warn(message)


class _InliningVisitor(TreeVisitor):
    """Copies the walked value, substituting reference nodes."""

    def __init__(self, substitution: _Substitution, base: JsonRef, stack: _Stack) -> None:
        self._substitution = substitution
        self._stack = stack
        self._scopes = [base]
        self._containers: list[dict[str, Any] | list[Any] | None] = []
        self._layout = SchemaLayout()
        self._substituted = False
        self.result: Any = None

    def visit_node(self, pointer: JsonPointer, node: Any, report: ProcessingReport) -> VisitResult:
        if _is_reference(node) and not self._layout.is_name_map(pointer):
            value = self._substitution.substitute(self._scopes[-1], node, self._stack)
            self._attach(pointer, value)
            self._substituted = True
        elif not isinstance(node, (dict, list)):
            self._attach(pointer, node)
        return VisitResult.CONTINUE

    def pre_visit_object(
        self,
        pointer: JsonPointer,
        node: dict[str, Any],
        pointers: PointerSet,
        report: ProcessingReport,
    ) -> VisitResult:
        if self._substituted:
            # Already replaced in visit_node; nothing below it to copy.
            self._substituted = False
            self._containers.append(None)
            self._scopes.append(self._scopes[-1])
            self._layout.push(schema=True)
            return VisitResult.CONTINUE
        name_map = self._layout.is_name_map(pointer)
        scope = self._scopes[-1] if name_map else rebase(self._scopes[-1], node)[0]
        copy: dict[str, Any] = dict.fromkeys(node)
        self._attach(pointer, copy)
        walked = set(walked_members(node, name_map))
        for key, value in node.items():
            if key in walked:
                pointers.add(JsonPointer.of(key))
            else:
                copy[key] = deep_copy(value)
        self._containers.append(copy)
        self._scopes.append(scope)
        self._layout.push(schema=not name_map)
        return VisitResult.CONTINUE

    def post_visit_object(self, pointer: JsonPointer, report: ProcessingReport) -> VisitResult:
        self._containers.pop()
        self._scopes.pop()
        self._layout.pop()
        return VisitResult.CONTINUE

    def pre_visit_array(
        self,
        pointer: JsonPointer,
        node: list[Any],
        pointers: PointerSet,
        report: ProcessingReport,
    ) -> VisitResult:
        copy: list[Any] = []
        self._attach(pointer, copy)
        self._containers.append(copy)
        self._layout.push(schema=False)
        pointers.update(JsonPointer.of(index) for index in range(len(node)))
        return VisitResult.CONTINUE

    def post_visit_array(self, pointer: JsonPointer, report: ProcessingReport) -> VisitResult:
        self._containers.pop()
        self._layout.pop()
        return VisitResult.CONTINUE

    def _attach(self, pointer: JsonPointer, value: Any) -> None:
        if not self._containers:
            self.result = value
            return
        container = self._containers[-1]
        if isinstance(container, dict):
            container[pointer.tokens[-1]] = value
        elif container is not None:
            container.append(value)


class InlineSchemaTree(SchemaTree):
    """Tree holding a copy of its document with every reference substituted.

    Args:
        node: The parsed JSON document.
        loading_ref: Where the document was loaded from.
        loader: Loader for documents referenced from this one.
        report: Receives loop warnings and resolution failures found while
            inlining. Without it failures raise ``LoadingError``.
    """

    def __init__(
        self,
        node: Any,
        loading_ref: str | JsonRef | None = None,
        *,
        loader: SchemaLoader | None = None,
        report: ProcessingReport | None = None,
    ) -> None:
        self._construction_report = report
        super().__init__(node, loading_ref, loader=loader)

    def _prepare(self, node: Any, loading_ref: JsonRef, loader: SchemaLoader | None) -> Any:
        return _Substitution(node, loading_ref, loader, self._construction_report).run()
