"""SchemaTree: a positioned, read-only view of a loaded schema document.

A tree is a document (the parsed value and the reference it was loaded
from) plus a current pointer into it. Navigation never mutates anything:
``at`` and ``append`` return new views sharing the same document.

Relative references are resolved against the tree's *scope*: the loading
reference, rebased by every ``$id`` (or draft-04 ``id``) met on the way from
the root to the current pointer::

    tree = CanonicalSchemaTree(
        {"$id": "http://example.com/root.json",
         "definitions": {"a": {"type": "string"}},
         "items": {"$ref": "#/definitions/a"}},
    )
    tree.append(JsonPointer.of("items")).scope
    # JsonRef('http://example.com/root.json#')
    target = tree.resolve_reference("#/definitions/a")
    target.node   # {"type": "string"}

Two variants exist. ``CanonicalSchemaTree`` keeps the document exactly as
loaded and follows references on demand. ``InlineSchemaTree`` (in
``json_schema_core.tree.inline``) substitutes references at construction.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any

from json_schema_core.exceptions import (
    InvalidReferenceError,
    LoadingError,
    PointerNotFoundError,
)
from json_schema_core.messages import CORE_BUNDLE
from json_schema_core.ref import JsonPointer, JsonRef, SchemaKey, absolute_key, anonymous_key
from json_schema_core.report import LogLevel, ProcessingMessage
from json_schema_core.tree.scope import ScopeIndex

if TYPE_CHECKING:
    from json_schema_core.load import SchemaLoader
    from json_schema_core.report import ProcessingReport

__all__ = ["CanonicalSchemaTree", "SchemaTree", "loading_error", "report_loading_error"]

logger = logging.getLogger(__name__)


def loading_error(key: str, ref: object, **fields: Any) -> LoadingError:
    """Build a ``LoadingError`` whose ERROR message reads ``key`` from the core bundle."""
    message = (
        ProcessingMessage()
        .set_log_level(LogLevel.ERROR)
        .set_message(CORE_BUNDLE.get_message(key))
        .put_argument("ref", str(ref))
    )
    for name, value in fields.items():
        message.put(name, value)
    return LoadingError(message)



def report_loading_error(report: ProcessingReport, exc: LoadingError) -> None:
    """Add the message of ``exc`` to ``report``; FATAL messages stay FATAL."""
    message = exc.processing_message
    if message.level is LogLevel.FATAL:
        report.fatal(message)
    else:
        report.error(message)


def as_loading_ref(loading_ref: str | JsonRef | None) -> JsonRef:
    """Normalize a loading reference: ``None`` is the empty reference, fragments go."""
    if loading_ref is None:
        return JsonRef.empty()
    return JsonRef.parse(loading_ref).locator


class _Document:
    """State shared by all views of one document."""

    __slots__ = ("_index", "key", "loader", "loading_ref", "value")

    def __init__(
        self,
        loading_ref: JsonRef,
        value: Any,
        loader: SchemaLoader | None,
    ) -> None:
        self.loading_ref = loading_ref
        self.value = value
        self.loader = loader
        self.key: SchemaKey = (
            absolute_key(loading_ref) if loading_ref.is_absolute() else anonymous_key()
        )
        self._index: ScopeIndex | None = None

    @property
    def index(self) -> ScopeIndex:
        # Built on first use: an inlined document may share one value at many places.
        if self._index is None:
            self._index = ScopeIndex.build(self.value, self.loading_ref)
        return self._index


class SchemaTree:
    """Base class of schema trees.

    Args:
        node: The parsed JSON document.
        loading_ref: Where the document was loaded from. ``None`` (or any
            non-absolute reference) gives the tree an anonymous key.
        loader: Loader used to reach other documents when resolving
            references. Without one, only same-document references resolve.
    """

    def __init__(
        self,
        node: Any,
        loading_ref: str | JsonRef | None = None,
        *,
        loader: SchemaLoader | None = None,
    ) -> None:
        ref = as_loading_ref(loading_ref)
        self._document = _Document(ref, self._prepare(node, ref, loader), loader)
        self._pointer = JsonPointer.empty()
        self._node = self._document.value

    def _prepare(self, node: Any, loading_ref: JsonRef, loader: SchemaLoader | None) -> Any:
        """Return the value the document will hold."""
        return copy.deepcopy(node)

    def _view(self, pointer: JsonPointer) -> SchemaTree:
        node = pointer.get(self._document.value)
        tree = object.__new__(type(self))
        tree._document = self._document
        tree._pointer = pointer
        tree._node = node
        return tree

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def node(self) -> Any:
        """The value at the current pointer. Do not mutate it."""
        return self._node

    @property
    def base_node(self) -> Any:
        """The whole document."""
        return self._document.value

    @property
    def loading_ref(self) -> JsonRef:
        return self._document.loading_ref

    @property
    def pointer(self) -> JsonPointer:
        return self._pointer

    @property
    def key(self) -> SchemaKey:
        return self._document.key

    @property
    def scope(self) -> JsonRef:
        """Base reference for relative references found at the current pointer."""
        return self._document.index.scope_of(self._pointer)

    @property
    def loader(self) -> SchemaLoader | None:
        return self._document.loader

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def at(self, pointer: JsonPointer | str) -> SchemaTree:
        """Return a view of the same document at an absolute pointer.

        Raises:
            PointerNotFoundError: If no value exists at ``pointer``.
        """
        if isinstance(pointer, str):
            pointer = JsonPointer.parse(pointer)
        return self._view(pointer)

    def append(self, pointer: JsonPointer | str) -> SchemaTree:
        """Return a view at ``pointer``, taken relative to the current one."""
        if isinstance(pointer, str):
            pointer = JsonPointer.parse(pointer)
        return self._view(self._pointer.append(pointer))

    def resolve_reference(
        self,
        ref: str | JsonRef,
        report: ProcessingReport | None = None,
    ) -> SchemaTree | None:
        """Return the tree designated by ``ref``, resolved against ``scope``.

        Resolution is repeated while the reached node is itself a
        ``{"$ref": ...}`` object. Reaching a reference twice in one call is a
        loop.

        Args:
            ref: The reference, typically the value of a ``$ref`` keyword.
            report: If given, failures are added to it (at ERROR level, or
                FATAL for a scheme no fetcher handles) and ``None`` is returned.

        Raises:
            LoadingError: On a dangling reference, a reference loop or a fetch
                failure, if no report was given.
            InvalidReferenceError: If ``ref`` itself is malformed.
        """
        target = self.scope.resolve(ref)
        try:
            return self._follow(target)
        except LoadingError as exc:
            if report is None:
                raise
            report_loading_error(report, exc)
            return None

    def _follow(self, target: JsonRef) -> SchemaTree:
        seen: list[JsonRef] = []
        tree: SchemaTree = self
        while True:
            if target in seen:
                raise loading_error("ref.loop", target, path=[str(ref) for ref in seen])
            seen.append(target)
            tree = tree._locate(target)
            node = tree.node
            if not (isinstance(node, dict) and isinstance(node.get("$ref"), str)):
                logger.debug("resolved %s to %s", seen[0], tree)
                return tree
            try:
                target = tree.scope.resolve(node["$ref"])
            except InvalidReferenceError:
                raise loading_error("ref.invalid", node["$ref"]) from None

    def _locate(self, target: JsonRef) -> SchemaTree:
        document = self._document
        if document.index.owns(target.locator) or document.index.locate(target) is not None:
            return self._find(target)
        if document.loader is None:
            raise loading_error("ref.noLoader", target)
        other = document.loader.load(target.locator)
        return other._find(target)

    def _find(self, target: JsonRef) -> SchemaTree:
        pointer = self._document.index.locate(target)
        if pointer is None:
            raise loading_error("ref.danglingRef", target)
        try:
            return self._view(pointer)
        except PointerNotFoundError:
            raise loading_error("ref.danglingRef", target) from None

    # ------------------------------------------------------------------
    # Identity and representation
    # ------------------------------------------------------------------

    def as_json(self) -> dict[str, str]:
        """Summary used in processing messages."""
        return {"loadingURI": str(self.loading_ref), "pointer": str(self._pointer)}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SchemaTree):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.key == other.key
            and self._pointer == other._pointer
        )

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.key, self._pointer))

    def __str__(self) -> str:
        return f"{self.loading_ref.uri}#{self._pointer}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(loading_ref={str(self.loading_ref)!r}, "
            f"pointer={str(self._pointer)!r}, key={self.key})"
        )


class CanonicalSchemaTree(SchemaTree):
    """Tree following references on demand, without copying anything.

    The document is stored exactly as given (deep-copied once, so later
    changes to the caller's value do not leak in).
    """
