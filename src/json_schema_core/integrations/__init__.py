"""Integrations subpackage for json-schema-core.

Contains integration adapters for external frameworks:
- pytest plugin (auto-discovered via pytest11 entry point), providing the
  ``assert_schema_syntax`` fixture
"""

from __future__ import annotations

__all__: list[str] = []
