"""pytest plugin for json-schema-core.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_schema_core.analyzer import SchemaAnalyzer, SyntaxWalker
from json_schema_core.report import LogLevel
from json_schema_core.tree import CanonicalSchemaTree, SchemaTree


@pytest.fixture(scope="session")
def assert_schema_syntax() -> Any:
    """Fixture that returns a callable schema syntax asserter.

    The fixture is session-scoped because the returned callable is stateless:
    every call walks the given schema with the given analyzer.

    Usage in tests::

        def test_items_schema(assert_schema_syntax, analyzer):
            assert_schema_syntax({"items": {"type": "string"}}, analyzer)

        def test_not_a_schema(assert_schema_syntax, analyzer):
            with pytest.raises(AssertionError, match=r"core.notASchema|incorrect type"):
                assert_schema_syntax({"items": 3}, analyzer)

    Returns:
        A callable ``_assert(schema, analyzer, allow_warnings=True) -> None``
        that raises ``AssertionError`` listing every finding when the schema
        does not pass.
    """

    def _assert(
        schema: Any,
        analyzer: SchemaAnalyzer,
        allow_warnings: bool = True,
    ) -> None:
        """Assert that ``schema`` and all its sub-schemas are syntactically valid.

        Args:
            schema:         A ``SchemaTree`` or a plain JSON value.
            analyzer:       The analyzer to run.
            allow_warnings: When False, WARNING messages fail the assertion too.

        Raises:
            AssertionError: On any ERROR (or, with ``allow_warnings=False``,
                WARNING) finding, with every finding in the message.
        """
        tree = schema if isinstance(schema, SchemaTree) else CanonicalSchemaTree(schema)
        report = SyntaxWalker(analyzer).validate(tree)
        threshold = LogLevel.ERROR if allow_warnings else LogLevel.WARNING
        findings = [message for message in report if message.level >= threshold]
        if findings or not report.is_success():
            details = "\n".join(f"  {message}" for message in findings)
            raise AssertionError(f"schema {tree} has syntax problems:\n{details}")

    return _assert
