"""Tests for JsonPointer (RFC 6901).

Covers:
- Parsing: root, escaping of ``~`` and ``/``, illegal input
- Construction from raw tokens
- Navigation: append, parent, is_parent_of, relativize
- Lookup: get into objects and arrays, PointerNotFoundError, contains
"""

from __future__ import annotations

import pytest

from json_schema_core.exceptions import InvalidPointerError, PointerNotFoundError
from json_schema_core.ref import JsonPointer

# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParse:
    def test_empty_string_is_root(self) -> None:
        ptr = JsonPointer.parse("")
        assert ptr.is_empty()
        assert ptr == JsonPointer.empty()

    def test_tokens_are_unescaped(self) -> None:
        ptr = JsonPointer.parse("/a~1b/m~0n/0")
        assert ptr.tokens == ("a/b", "m~n", "0")

    def test_str_escapes_again(self) -> None:
        assert str(JsonPointer.of("a/b", "m~n")) == "/a~1b/m~0n"

    def test_empty_token(self) -> None:
        assert JsonPointer.parse("/").tokens == ("",)

    @pytest.mark.parametrize("text", ["a", "a/b", "/a~2", "/~"])
    def test_illegal_pointers_rejected(self, text: str) -> None:
        with pytest.raises(InvalidPointerError):
            JsonPointer.parse(text)

    def test_invalid_pointer_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            JsonPointer.parse("nope")

    def test_of_accepts_indices(self) -> None:
        assert JsonPointer.of("items", 2) == JsonPointer.parse("/items/2")


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------


class TestNavigation:
    def test_append_token(self) -> None:
        assert str(JsonPointer.of("a").append("b/c")) == "/a/b~1c"

    def test_append_pointer(self) -> None:
        assert JsonPointer.of("a").append(JsonPointer.of("b", 1)) == JsonPointer.of("a", "b", 1)

    def test_parent(self) -> None:
        assert JsonPointer.of("a", "b").parent() == JsonPointer.of("a")

    def test_root_is_its_own_parent(self) -> None:
        assert JsonPointer.empty().parent() == JsonPointer.empty()

    def test_is_parent_of(self) -> None:
        parent = JsonPointer.of("a")
        assert parent.is_parent_of(JsonPointer.of("a", "b"))
        assert parent.is_parent_of(parent)
        assert not parent.is_parent_of(JsonPointer.of("b"))
        assert JsonPointer.empty().is_parent_of(JsonPointer.of("x"))

    def test_relativize(self) -> None:
        rel = JsonPointer.of("a").relativize(JsonPointer.of("a", "b", "c"))
        assert rel == JsonPointer.of("b", "c")

    def test_relativize_rejects_non_child(self) -> None:
        with pytest.raises(InvalidPointerError):
            JsonPointer.of("a").relativize(JsonPointer.of("b"))

    def test_pointers_are_hashable(self) -> None:
        assert len({JsonPointer.of("a"), JsonPointer.parse("/a")}) == 1


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


class TestGet:
    DOC = {"a/b": ["x", {"c": None}], "": 1}

    def test_object_member_with_escaped_name(self) -> None:
        assert JsonPointer.parse("/a~1b/0").get(self.DOC) == "x"

    def test_null_value_is_found(self) -> None:
        ptr = JsonPointer.parse("/a~1b/1/c")
        assert ptr.get(self.DOC) is None
        assert ptr.contains(self.DOC)

    def test_empty_member_name(self) -> None:
        assert JsonPointer.parse("/").get(self.DOC) == 1

    def test_root_returns_document(self) -> None:
        assert JsonPointer.empty().get(self.DOC) is self.DOC

    @pytest.mark.parametrize(
        "text", ["/missing", "/a~1b/2", "/a~1b/01", "/a~1b/-", "/a~1b/0/x", "/a~1b/0/0"]
    )
    def test_missing_value_raises(self, text: str) -> None:
        with pytest.raises(PointerNotFoundError) as exc_info:
            JsonPointer.parse(text).get(self.DOC)
        assert exc_info.value.processing_message.get("pointer") == text

    def test_contains_is_false_for_missing(self) -> None:
        assert not JsonPointer.of("nope").contains(self.DOC)
