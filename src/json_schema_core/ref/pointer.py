"""JsonPointer: immutable RFC 6901 JSON Pointer.

Tokens are stored unescaped; ``str()`` gives the escaped textual form::

    ptr = JsonPointer.parse("/a~1b/0")
    ptr.tokens          # ("a/b", "0")
    str(ptr)            # "/a~1b/0"
    ptr.get({"a/b": ["x"]})   # "x"

Root is the empty pointer ``""``. Parsing, escaping and the per-step lookup
are delegated to the ``jsonpointer`` library; this class adds immutability,
hashing and the navigation helpers the tree layer needs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

import jsonpointer
from jsonpointer import JsonPointerException, escape

from json_schema_core.exceptions import InvalidPointerError, PointerNotFoundError
from json_schema_core.messages import CORE_BUNDLE
from json_schema_core.report import LogLevel, ProcessingMessage

__all__ = ["JsonPointer"]

# Array indices: "0" or no leading zero. ``jsonpointer`` also accepts "01".
_INDEX = re.compile(r"^(0|[1-9][0-9]*)$")
_WALKER = jsonpointer.JsonPointer("")


@dataclass(frozen=True, slots=True)
class JsonPointer:
    """An RFC 6901 pointer, as a tuple of unescaped reference tokens."""

    tokens: tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> JsonPointer:
        return _EMPTY

    @classmethod
    def of(cls, *tokens: str | int) -> JsonPointer:
        """Build a pointer from raw (unescaped) tokens; ints are array indices."""
        return cls(tuple(str(token) for token in tokens))

    @classmethod
    def parse(cls, text: str) -> JsonPointer:
        """Parse the textual form of a pointer.

        Raises:
            InvalidPointerError: If ``text`` is neither empty nor starts with
                ``/``, or contains an illegal ``~`` escape.
        """
        if not isinstance(text, str):
            raise InvalidPointerError(CORE_BUNDLE.printf("pointer.illegal", text))
        if not text:
            return _EMPTY
        try:
            parsed = jsonpointer.JsonPointer(text)
        except JsonPointerException as exc:
            raise InvalidPointerError(CORE_BUNDLE.printf("pointer.illegal", text)) from exc
        return cls(tuple(parsed.parts))

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def is_empty(self) -> bool:
        return not self.tokens

    def append(self, other: JsonPointer | str | int) -> JsonPointer:
        """Return this pointer extended by a pointer or by a single raw token."""
        if isinstance(other, JsonPointer):
            return JsonPointer(self.tokens + other.tokens)
        return JsonPointer((*self.tokens, str(other)))

    def parent(self) -> JsonPointer:
        """Return the pointer one level up (the empty pointer is its own parent)."""
        return JsonPointer(self.tokens[:-1])

    def is_parent_of(self, other: JsonPointer) -> bool:
        """True if ``other`` starts with this pointer (a pointer is its own parent)."""
        return other.tokens[: len(self.tokens)] == self.tokens

    def relativize(self, other: JsonPointer) -> JsonPointer:
        """Return the pointer leading from this one to ``other``.

        Raises:
            InvalidPointerError: If this pointer is not a parent of ``other``.
        """
        if not self.is_parent_of(other):
            raise InvalidPointerError(CORE_BUNDLE.printf("pointer.illegal", str(other)))
        return JsonPointer(other.tokens[len(self.tokens) :])

    def get(self, document: Any) -> Any:
        """Return the value this pointer designates in ``document``.

        Only objects and arrays are walked into: a string is a leaf even
        though Python can index it.

        Raises:
            PointerNotFoundError: If no value exists at this pointer.
        """
        node = document
        for token in self.tokens:
            if isinstance(node, list) and not _INDEX.match(token):
                raise self._not_found()
            if not isinstance(node, (dict, list)):
                raise self._not_found()
            try:
                node = _WALKER.walk(node, token)
            except JsonPointerException as exc:
                raise self._not_found() from exc
        return node

    def contains(self, document: Any) -> bool:
        """True if a value exists at this pointer in ``document``."""
        try:
            self.get(document)
        except PointerNotFoundError:
            return False
        return True

    def _not_found(self) -> PointerNotFoundError:
        message = (
            ProcessingMessage()
            .set_log_level(LogLevel.ERROR)
            .set_message(CORE_BUNDLE.get_message("pointer.notFound"))
            .put_argument("pointer", str(self))
        )
        return PointerNotFoundError(message)

    # ------------------------------------------------------------------
    # Representation
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return "".join("/" + escape(token) for token in self.tokens)

    def __repr__(self) -> str:
        return f"JsonPointer({str(self)!r})"

    def as_json(self) -> str:
        return str(self)


_EMPTY = JsonPointer()
