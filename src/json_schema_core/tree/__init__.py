"""Tree subpackage: positioned views over loaded schema documents.

Re-exports:
- SchemaTree: base class (navigation, scope, reference resolution)
- CanonicalSchemaTree: follows references on demand
- InlineSchemaTree: substitutes references at construction
- Dereferencing: CANONICAL / INLINE tree factory
- NodeType: JSON type of a value
- ScopeIndex: ``$id`` index and scope map of one document
"""

from json_schema_core.tree.dereferencing import Dereferencing
from json_schema_core.tree.inline import InlineSchemaTree
from json_schema_core.tree.nodes import NodeType
from json_schema_core.tree.schema_tree import CanonicalSchemaTree, SchemaTree
from json_schema_core.tree.scope import ScopeIndex

__all__ = [
    "CanonicalSchemaTree",
    "Dereferencing",
    "InlineSchemaTree",
    "NodeType",
    "SchemaTree",
    "ScopeIndex",
]
