"""Visitor side of the tree walking protocol.

A visitor receives, for every node the walker reaches, the node's pointer,
the node's value and the report shared by the whole walk. Every hook returns
a ``VisitResult``; anything but ``CONTINUE`` stops the walk at once.

Container pre-hooks are also handed a ``PointerSet``: the hook adds the
*relative* pointers of the children it wants visited, in the order it wants
them visited. Leaving the set empty visits no children.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, MutableSet
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from json_schema_core.ref import JsonPointer
    from json_schema_core.report import ProcessingReport

__all__ = ["PointerSet", "TreeVisitor", "VisitResult"]


class VisitResult(StrEnum):
    """Outcome of a visitor hook."""

    CONTINUE = auto()
    TERMINATE = auto()


class PointerSet(MutableSet["JsonPointer"]):
    """Insertion-ordered set of JSON Pointers."""

    def __init__(self, pointers: Iterable[JsonPointer] = ()) -> None:
        self._items: dict[JsonPointer, None] = dict.fromkeys(pointers)

    def __contains__(self, pointer: object) -> bool:
        return pointer in self._items

    def __iter__(self) -> Iterator[JsonPointer]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add(self, pointer: JsonPointer) -> None:
        self._items[pointer] = None

    def discard(self, pointer: JsonPointer) -> None:
        self._items.pop(pointer, None)

    def update(self, pointers: Iterable[JsonPointer]) -> None:
        for pointer in pointers:
            self.add(pointer)

    def __repr__(self) -> str:
        return f"PointerSet({[str(p) for p in self._items]!r})"


class TreeVisitor:
    """Visitor whose hooks all continue and select no children.

    Subclasses override only the hooks they care about.
    """

    def visit_node(
        self, pointer: JsonPointer, node: Any, report: ProcessingReport
    ) -> VisitResult:
        return VisitResult.CONTINUE

    def pre_visit_object(
        self,
        pointer: JsonPointer,
        node: dict[str, Any],
        pointers: PointerSet,
        report: ProcessingReport,
    ) -> VisitResult:
        return VisitResult.CONTINUE

    def post_visit_object(
        self, pointer: JsonPointer, report: ProcessingReport
    ) -> VisitResult:
        return VisitResult.CONTINUE

    def pre_visit_array(
        self,
        pointer: JsonPointer,
        node: list[Any],
        pointers: PointerSet,
        report: ProcessingReport,
    ) -> VisitResult:
        return VisitResult.CONTINUE

    def post_visit_array(
        self, pointer: JsonPointer, report: ProcessingReport
    ) -> VisitResult:
        return VisitResult.CONTINUE
