"""SyntaxWalker: analyze a schema and all of its sub-schemas."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from json_schema_core.report import ListProcessingReport, ProcessingReport
from json_schema_core.walk import PointerSet, TreeVisitor, TreeWalker, VisitResult

if TYPE_CHECKING:
    from json_schema_core.analyzer.analyzer import SchemaAnalyzer
    from json_schema_core.ref import JsonPointer
    from json_schema_core.tree import SchemaTree

__all__ = ["SyntaxWalker"]


class _SyntaxVisitor(TreeVisitor):
    """Analyzes every node reached and descends into collected sub-schemas."""

    def __init__(self, analyzer: SchemaAnalyzer, tree: SchemaTree) -> None:
        self._analyzer = analyzer
        self._tree = tree

    def visit_node(self, pointer: JsonPointer, node: Any, report: ProcessingReport) -> VisitResult:
        if not isinstance(node, dict):
            report.merge_with(self._analyzer.analyze(self._tree.at(pointer)))
        return VisitResult.CONTINUE

    def pre_visit_object(
        self,
        pointer: JsonPointer,
        node: dict[str, Any],
        pointers: PointerSet,
        report: ProcessingReport,
    ) -> VisitResult:
        subtree = self._tree.at(pointer)
        report.merge_with(self._analyzer.analyze(subtree))
        pointers.update(p for p in self._analyzer.pointers(subtree) if p.contains(node))
        return VisitResult.CONTINUE


class SyntaxWalker:
    """Runs a ``SchemaAnalyzer`` over a schema and every sub-schema it collects.

    Each sub-schema is analyzed through the analyzer's memo, so walking the
    same tree twice costs nothing the second time.

    Example::

        report = SyntaxWalker(analyzer).validate(loader.load(uri))
        report.is_success()
    """

    def __init__(self, analyzer: SchemaAnalyzer) -> None:
        self._analyzer = analyzer

    def validate(
        self, tree: SchemaTree, report: ProcessingReport | None = None
    ) -> ProcessingReport:
        """Analyze ``tree`` recursively; findings are merged into ``report``."""
        if report is None:
            report = ListProcessingReport()
        TreeWalker(_SyntaxVisitor(self._analyzer, tree)).walk_tree(tree, report)
        return report
