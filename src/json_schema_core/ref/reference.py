"""JsonRef: a URI reference whose fragment may be a JSON Pointer.

Splitting, joining and percent-coding go through ``uritools``, which applies
RFC 3986 to every scheme, including the non-hierarchical ones (``urn:``) and
the private ones (``resource:``, ``foo:``).

Two references are equal when their normalized string forms are equal.
Normalization lowercases scheme and host, removes ``.``/``..`` segments from
absolute references and treats a missing fragment as an empty one, so that::

    JsonRef.parse("HTTP://Example.com/a/./b.json") == JsonRef.parse("http://example.com/a/b.json#")

The string form always carries a ``#``: ``str(JsonRef.parse("x.json"))`` is
``"x.json#"``, and the empty reference (which denotes "this document, at its
root") prints as ``"#"``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from uritools import isabsuri, uridecode, uridefrag, uriencode, urijoin, urisplit, uriunsplit

from json_schema_core.exceptions import InvalidPointerError, InvalidReferenceError
from json_schema_core.messages import CORE_BUNDLE
from json_schema_core.ref.pointer import JsonPointer

__all__ = ["JsonRef"]

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_ILLEGAL_CHARS = re.compile(r"[\x00-\x20\x7f<>\"{}|\\^`]")
_BAD_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")
_FRAGMENT_SAFE = "/!$&'()*+,;=:@?"


def _normalize_authority(authority: str | None) -> str | None:
    if authority is None:
        return None
    userinfo, at, host = authority.rpartition("@")
    return f"{userinfo}{at}{host.lower()}"


def _invalid(text: str) -> InvalidReferenceError:
    return InvalidReferenceError(CORE_BUNDLE.printf("ref.invalid", text))


@dataclass(frozen=True, slots=True, eq=False)
class JsonRef:
    """A parsed, normalized URI reference.

    Attributes:
        scheme: Lowercased scheme, or ``""`` for relative references.
        authority: Authority component, ``None`` when absent.
        path: Path component (possibly empty).
        query: Query component, ``None`` when absent.
        fragment: Percent-decoded fragment, ``""`` when absent or empty.
        pointer: The fragment as a ``JsonPointer``, or ``None`` when the
            fragment is not a JSON Pointer (a plain-name anchor).
    """

    scheme: str = ""
    authority: str | None = None
    path: str = ""
    query: str | None = None
    fragment: str = ""
    pointer: JsonPointer | None = field(default=None, compare=False)
    _text: str = field(default="", repr=False, compare=False)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str | JsonRef) -> JsonRef:
        """Parse a URI reference.

        Raises:
            InvalidReferenceError: If ``text`` is not a string, or contains
                whitespace, control or unsafe characters, bad percent escapes,
                a malformed scheme or more than one ``#``.
        """
        if isinstance(text, JsonRef):
            return text
        if not isinstance(text, str):
            raise _invalid(repr(text))
        if _ILLEGAL_CHARS.search(text) or _BAD_PERCENT.search(text):
            raise _invalid(text)
        parts = urisplit(text)
        if parts.fragment is not None and "#" in parts.fragment:
            raise _invalid(text)
        if parts.scheme is None:
            # A relative reference cannot carry a colon in its first segment.
            if ":" in parts.path.split("/", 1)[0]:
                raise _invalid(text)
        elif not _SCHEME.match(parts.scheme):
            raise _invalid(text)
        else:
            # Joining an absolute reference with itself removes its dot segments.
            parts = urisplit(urijoin(text, text, strict=True))
        try:
            fragment = uridecode(parts.fragment or "")
        except UnicodeDecodeError as exc:
            raise _invalid(text) from exc
        return cls._build(
            scheme=(parts.scheme or "").lower(),
            authority=parts.authority,
            path=parts.path,
            query=parts.query,
            fragment=fragment,
        )

    @classmethod
    def empty(cls) -> JsonRef:
        """The empty reference: this document, at its root."""
        return _EMPTY

    @classmethod
    def from_path(cls, path: str | Path) -> JsonRef:
        """Return the ``file:`` reference of a filesystem path."""
        return cls.parse(Path(path).resolve().as_uri())

    @classmethod
    def _build(
        cls,
        *,
        scheme: str,
        authority: str | None,
        path: str,
        query: str | None,
        fragment: str,
    ) -> JsonRef:
        authority = _normalize_authority(authority)
        if scheme and authority is not None and not path:
            path = "/"
        pointer: JsonPointer | None
        try:
            pointer = JsonPointer.parse(fragment)
        except InvalidPointerError:
            pointer = None
        encoded = uriencode(fragment, safe=_FRAGMENT_SAFE).decode("ascii")
        text = uriunsplit((scheme or None, authority, path, query, encoded))
        return cls(scheme, authority, path, query, fragment, pointer, text)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def uri(self) -> str:
        """The reference without its fragment, as a string (no trailing ``#``)."""
        return str(uridefrag(self._text).uri)

    @property
    def locator(self) -> JsonRef:
        """The reference with its fragment removed."""
        if not self.fragment:
            return self
        return JsonRef._build(
            scheme=self.scheme,
            authority=self.authority,
            path=self.path,
            query=self.query,
            fragment="",
        )

    def is_absolute(self) -> bool:
        """True if this reference has a scheme and an empty fragment."""
        return not self.fragment and bool(isabsuri(self.uri))

    def is_empty(self) -> bool:
        """True for the empty reference (no scheme, path, query or fragment)."""
        return (
            not self.scheme
            and self.authority is None
            and not self.path
            and self.query is None
            and not self.fragment
        )

    def contains(self, other: JsonRef) -> bool:
        """True if ``other`` points into the document this reference locates."""
        return self.locator == other.locator

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, other: str | JsonRef) -> JsonRef:
        """Resolve ``other`` against this reference (RFC 3986, section 5.2.2).

        A reference made only of a fragment keeps this reference's document
        and replaces the fragment.
        """
        ref = JsonRef.parse(other)
        return JsonRef.parse(urijoin(self._text, ref._text, strict=True))

    def with_pointer(self, pointer: JsonPointer) -> JsonRef:
        """Return this reference's document with ``pointer`` as fragment."""
        return JsonRef._build(
            scheme=self.scheme,
            authority=self.authority,
            path=self.path,
            query=self.query,
            fragment=str(pointer),
        )

    # ------------------------------------------------------------------
    # Identity and representation
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonRef):
            return NotImplemented
        return self._text == other._text

    def __hash__(self) -> int:
        return hash(self._text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"JsonRef({self._text!r})"

    def as_json(self) -> str:
        return self._text


_EMPTY = JsonRef._build(scheme="", authority=None, path="", query=None, fragment="")

