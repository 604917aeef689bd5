"""SchemaAnalyzer: keyword discovery and syntax checking for one schema node.

For the node at a tree's current pointer the analyzer:

1. reports exactly one ERROR and stops if the node is not an object;
2. reports, in a single WARNING, every key no descriptor knows about;
3. for each known keyword, in the node's own order, runs the keyword's
   pointer collector and then its syntax checker with what was collected.

Results are memoized per tree for the lifetime of the analyzer: a tree
equal to one already analyzed gets the same report back and triggers no
checker or collector call. The memo is guarded by a reentrant lock, so a
tree is analyzed at most once even when the analyzer is shared between
threads (and a checker may call back into the analyzer).

Example::

    analyzer = SchemaAnalyzer(CORE_BUNDLE, SchemaSelector(selector_config))
    report = analyzer.analyze(CanonicalSchemaTree({"foo": ""}))
    [m.get("ignored") for m in report]   # [["foo"]]
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from json_schema_core.messages import CORE_BUNDLE, MessageBundle
from json_schema_core.report import ListProcessingReport, ProcessingMessage, ProcessingReport
from json_schema_core.tree import NodeType
from json_schema_core.walk import PointerSet

if TYPE_CHECKING:
    from json_schema_core.keyword import SchemaSelector
    from json_schema_core.ref import JsonPointer
    from json_schema_core.tree import SchemaTree

__all__ = ["SchemaAnalyzer"]


@dataclass(frozen=True, slots=True)
class _Analysis:
    report: ProcessingReport
    pointers: tuple[JsonPointer, ...]


class SchemaAnalyzer:
    """Analyzes schema nodes, once per tree.

    Args:
        bundle: Message bundle handed to syntax checkers; the analyzer's own
            messages come from it too when it defines them.
        selector: Chooses the descriptor (keyword set) for each tree.
    """

    def __init__(self, bundle: MessageBundle, selector: SchemaSelector) -> None:
        self._bundle = CORE_BUNDLE.check_not_null(bundle, "jsonUtils.nullArgument")
        self._selector = CORE_BUNDLE.check_not_null(selector, "jsonUtils.nullArgument")
        self._results: dict[SchemaTree, _Analysis] = {}
        self._lock = threading.RLock()

    @property
    def bundle(self) -> MessageBundle:
        return self._bundle

    def analyze(self, tree: SchemaTree) -> ProcessingReport:
        """Return the analysis report for the node at the tree's pointer."""
        return self._analysis(tree).report

    def pointers(self, tree: SchemaTree) -> PointerSet:
        """Return the sub-schema pointers (relative to the node) collected for ``tree``."""
        return PointerSet(self._analysis(tree).pointers)

    def _analysis(self, tree: SchemaTree) -> _Analysis:
        with self._lock:
            analysis = self._results.get(tree)
            if analysis is None:
                analysis = self._run(tree)
                self._results[tree] = analysis
            return analysis

    def _run(self, tree: SchemaTree) -> _Analysis:
        report = ListProcessingReport()
        collected = PointerSet()
        node = tree.node

        if not isinstance(node, dict):
            message = self._message(tree, "core.notASchema")
            report.error(message.put_argument("found", NodeType.of(node)))
            return _Analysis(report, ())

        descriptor = self._selector.select(tree)
        supported = descriptor.supported_keywords
        unknown = sorted(set(node) - supported)
        if unknown:
            message = self._message(tree, "core.unknownKeywords")
            report.warn(message.put_argument("ignored", unknown))

        collectors = descriptor.pointer_collectors
        checkers = descriptor.syntax_checkers
        for name in node:
            if name not in supported:
                continue
            pointers = PointerSet()
            collector = collectors.get(name)
            if collector is not None:
                collector.collect(pointers, tree)
            checker = checkers.get(name)
            if checker is not None:
                checker.check_syntax(pointers, self._bundle, report, tree)
            collected.update(pointers)

        return _Analysis(report, tuple(collected))

    def _message(self, tree: SchemaTree, key: str) -> ProcessingMessage:
        bundle = self._bundle if key in self._bundle else CORE_BUNDLE
        return (
            ProcessingMessage()
            .set_message(bundle.get_message(key))
            .put("schema", tree.as_json())
        )

    def __repr__(self) -> str:
        with self._lock:
            return f"SchemaAnalyzer(analyzed={len(self._results)})"
