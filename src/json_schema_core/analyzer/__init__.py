"""Analyzer subpackage.

Re-exports:
- SchemaAnalyzer: memoized keyword discovery and syntax checking
- SyntaxWalker: recursive analysis of a schema and its sub-schemas
"""

from json_schema_core.analyzer.analyzer import SchemaAnalyzer
from json_schema_core.analyzer.syntax import SyntaxWalker

__all__ = ["SchemaAnalyzer", "SyntaxWalker"]
