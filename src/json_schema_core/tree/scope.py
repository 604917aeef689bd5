"""ScopeIndex: where identifiers live inside one document.

One walk over a document records, for every object node, the resolution
scope in effect there (the nearest enclosing ``$id``/``id`` wins, resolved
against the scope above it), and indexes every identifier by the reference
it denotes:

- a URI identifier (no fragment) becomes a new scope and points at its node;
- a plain-name identifier (``"#foo"``) is an anchor: it points at its node
  but does not change the scope.

The document's own loading reference always points at the root.
Inside a schema, values under ``enum``, ``const``, ``default`` and
``examples`` are data and are never scanned. Inside a name map
(``properties``, ``patternProperties``, ``definitions``, ``$defs``,
``dependencies``) the same keys name sub-schemas and are scanned like any
other member; name maps carry no identifier of their own.
"""

from __future__ import annotations

from typing import Any

from json_schema_core.exceptions import InvalidReferenceError
from json_schema_core.ref import JsonPointer, JsonRef
from json_schema_core.report import ListProcessingReport, ProcessingReport
from json_schema_core.walk import PointerSet, TreeVisitor, TreeWalker, VisitResult

__all__ = [
    "LITERAL_KEYWORDS",
    "NAME_MAP_KEYWORDS",
    "SchemaLayout",
    "ScopeIndex",
    "rebase",
    "walked_members",
]

LITERAL_KEYWORDS = frozenset({"const", "default", "enum", "examples"})
NAME_MAP_KEYWORDS = frozenset(
    {"$defs", "definitions", "dependencies", "patternProperties", "properties"}
)

_ID_KEYWORDS = ("$id", "id")


def _identifier(node: dict[str, Any]) -> str | None:
    for name in _ID_KEYWORDS:
        value = node.get(name)
        if isinstance(value, str):
            return value
    return None


def rebase(scope: JsonRef, node: Any) -> tuple[JsonRef, JsonRef | None]:
    """Apply ``node``'s identifier, if any, to ``scope``.

    Returns:
        The scope in effect inside ``node`` and the reference its identifier
        denotes (``None`` when it has no usable identifier).
    """
    if not isinstance(node, dict):
        return scope, None
    text = _identifier(node)
    if text is None:
        return scope, None
    try:
        resolved = scope.resolve(text)
    except InvalidReferenceError:
        return scope, None
    if resolved.fragment:
        # Plain-name anchors do not rebase.
        return scope, resolved if resolved.pointer is None else None
    return resolved, resolved


def walked_members(node: dict[str, Any], name_map: bool) -> list[str]:
    """Member names of ``node`` whose values may hold schemas."""
    if name_map:
        return list(node)
    return [key for key in node if key not in LITERAL_KEYWORDS]


class SchemaLayout:
    """Tells schema objects from name maps while a visitor walks a document.

    A visitor pushes one entry per open container and asks, before opening
    an object, whether it is the value of a name-map keyword of a schema.

    Example::

        layout = SchemaLayout()
        layout.push(schema=True)                             # the root schema
        layout.is_name_map(JsonPointer.of("properties"))     # True
        layout.push(schema=False)
        layout.is_name_map(JsonPointer.of("properties", "properties"))   # False
    """

    def __init__(self) -> None:
        self._schemas: list[bool] = []

    def is_name_map(self, pointer: JsonPointer) -> bool:
        if not self._schemas or not self._schemas[-1] or pointer.is_empty():
            return False
        return pointer.tokens[-1] in NAME_MAP_KEYWORDS

    def push(self, *, schema: bool) -> None:
        self._schemas.append(schema)

    def pop(self) -> None:
        self._schemas.pop()


class _IndexBuilder(TreeVisitor):
    def __init__(self, loading_ref: JsonRef) -> None:
        self.ids: dict[JsonRef, JsonPointer] = {loading_ref: JsonPointer.empty()}
        self.scopes: dict[JsonPointer, JsonRef] = {}
        self._stack = [loading_ref]
        self._layout = SchemaLayout()

    def pre_visit_object(
        self,
        pointer: JsonPointer,
        node: dict[str, Any],
        pointers: PointerSet,
        report: ProcessingReport,
    ) -> VisitResult:
        name_map = self._layout.is_name_map(pointer)
        scope = self._stack[-1]
        if not name_map:
            scope, identifier = rebase(scope, node)
            if identifier is not None:
                self.ids.setdefault(identifier, pointer)
        self.scopes[pointer] = scope
        self._stack.append(scope)
        self._layout.push(schema=not name_map)
        pointers.update(JsonPointer.of(key) for key in walked_members(node, name_map))
        return VisitResult.CONTINUE

    def post_visit_object(self, pointer: JsonPointer, report: ProcessingReport) -> VisitResult:
        self._stack.pop()
        self._layout.pop()
        return VisitResult.CONTINUE

    def pre_visit_array(
        self,
        pointer: JsonPointer,
        node: list[Any],
        pointers: PointerSet,
        report: ProcessingReport,
    ) -> VisitResult:
        self._layout.push(schema=False)
        pointers.update(JsonPointer.of(index) for index in range(len(node)))
        return VisitResult.CONTINUE

    def post_visit_array(self, pointer: JsonPointer, report: ProcessingReport) -> VisitResult:
        self._layout.pop()
        return VisitResult.CONTINUE


class ScopeIndex:
    """Identifier index and scope map of one parsed document.

    Example::

        index = ScopeIndex.build(
            {"$id": "http://x/root", "items": {"$id": "item"}},
            JsonRef.parse("file:///tmp/s.json"),
        )
        index.scope_of(JsonPointer.of("items"))   # http://x/item#
        index.locate(JsonRef.parse("http://x/item#/type"))   # /items/type
    """

    def __init__(
        self,
        loading_ref: JsonRef,
        ids: dict[JsonRef, JsonPointer],
        scopes: dict[JsonPointer, JsonRef],
    ) -> None:
        self._loading_ref = loading_ref
        self._ids = ids
        self._scopes = scopes

    @classmethod
    def build(cls, value: Any, loading_ref: JsonRef) -> ScopeIndex:
        builder = _IndexBuilder(loading_ref)
        TreeWalker(builder).walk(value, ListProcessingReport())
        return cls(loading_ref, builder.ids, builder.scopes)

    @property
    def loading_ref(self) -> JsonRef:
        return self._loading_ref

    @property
    def ids(self) -> dict[JsonRef, JsonPointer]:
        return dict(self._ids)

    def owns(self, locator: JsonRef) -> bool:
        """True if ``locator`` names this document or one of its sub-schemas."""
        return locator in self._ids

    def locate(self, target: JsonRef) -> JsonPointer | None:
        """Return the pointer ``target`` designates in this document.

        ``None`` means ``target`` is not known here. Whether a value exists at
        the returned pointer is not checked.
        """
        anchored = self._ids.get(target)
        if anchored is not None:
            return anchored
        if target.pointer is None:
            return None
        base = self._ids.get(target.locator)
        if base is None:
            return None
        return base.append(target.pointer)

    def scope_of(self, pointer: JsonPointer) -> JsonRef:
        """Return the resolution scope in effect at ``pointer``."""
        current = pointer
        while True:
            scope = self._scopes.get(current)
            if scope is not None:
                return scope
            if current.is_empty():
                return self._loading_ref
            current = current.parent()
