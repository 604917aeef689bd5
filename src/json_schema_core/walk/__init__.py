"""Walk subpackage: generic visitor-driven traversal of JSON values.

Re-exports:
- TreeWalker: recursive-descent walker
- TreeVisitor: no-op visitor base class
- VisitResult: CONTINUE / TERMINATE
- PointerSet: insertion-ordered set of child pointers handed to pre-hooks
"""

from json_schema_core.walk.visitor import PointerSet, TreeVisitor, VisitResult
from json_schema_core.walk.walker import TreeWalker

__all__ = ["PointerSet", "TreeVisitor", "TreeWalker", "VisitResult"]
