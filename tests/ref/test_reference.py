"""Tests for JsonRef, the URI reference type.

Covers:
- Normalization and equality (empty fragment, case, dot segments)
- Absolute / empty references
- Fragment handling: JSON Pointer fragments vs plain-name anchors
- RFC 3986 resolution, including non-hierarchical and unknown schemes
- Malformed input rejected with InvalidReferenceError
"""

from __future__ import annotations

from pathlib import Path

import pytest

from json_schema_core.exceptions import InvalidReferenceError
from json_schema_core.ref import JsonPointer, JsonRef

# ---------------------------------------------------------------------------
# Normalization and equality
# ---------------------------------------------------------------------------


class TestEquality:
    def test_empty_fragment_is_no_fragment(self) -> None:
        assert JsonRef.parse("http://example.com/a.json") == JsonRef.parse(
            "http://example.com/a.json#"
        )

    def test_scheme_and_host_are_lowercased(self) -> None:
        assert JsonRef.parse("HTTP://Example.COM/a.json") == JsonRef.parse(
            "http://example.com/a.json"
        )

    def test_path_is_case_sensitive(self) -> None:
        assert JsonRef.parse("http://example.com/A.json") != JsonRef.parse(
            "http://example.com/a.json"
        )

    def test_dot_segments_are_removed(self) -> None:
        assert JsonRef.parse("http://example.com/a/./b/../c.json") == JsonRef.parse(
            "http://example.com/a/c.json"
        )

    def test_equal_refs_hash_equal(self) -> None:
        refs = {JsonRef.parse("foo://bar#"), JsonRef.parse("foo://bar")}
        assert len(refs) == 1

    def test_str_always_has_a_hash(self) -> None:
        assert str(JsonRef.parse("x.json")) == "x.json#"
        assert str(JsonRef.parse("http://example.com/s#/a")) == "http://example.com/s#/a"

    def test_parse_is_idempotent_on_refs(self) -> None:
        ref = JsonRef.parse("http://example.com/s")
        assert JsonRef.parse(ref) is ref


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestProperties:
    def test_empty_reference(self) -> None:
        ref = JsonRef.parse("")
        assert ref.is_empty()
        assert ref == JsonRef.empty()
        assert str(ref) == "#"

    def test_fragment_only_is_not_empty(self) -> None:
        assert not JsonRef.parse("#/a").is_empty()

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("http://example.com/s.json", True),
            ("http://example.com/s.json#", True),
            ("http://example.com/s.json#/definitions/a", False),
            ("urn:example:schema", True),
            ("s.json", False),
            ("#/a", False),
        ],
    )
    def test_is_absolute(self, text: str, expected: bool) -> None:
        assert JsonRef.parse(text).is_absolute() is expected

    def test_locator_drops_fragment(self) -> None:
        ref = JsonRef.parse("http://example.com/s.json#/definitions/a")
        assert ref.locator == JsonRef.parse("http://example.com/s.json")
        assert ref.uri == "http://example.com/s.json"

    def test_pointer_fragment(self) -> None:
        assert JsonRef.parse("#/definitions/a").pointer == JsonPointer.of("definitions", "a")

    def test_empty_fragment_is_root_pointer(self) -> None:
        assert JsonRef.parse("http://example.com/s").pointer == JsonPointer.empty()

    def test_plain_name_fragment_has_no_pointer(self) -> None:
        ref = JsonRef.parse("#foo")
        assert ref.pointer is None
        assert ref.fragment == "foo"

    def test_fragment_is_percent_decoded(self) -> None:
        ref = JsonRef.parse("#/a%20b")
        assert ref.pointer == JsonPointer.of("a b")
        assert str(ref) == "#/a%20b"

    def test_contains(self) -> None:
        doc = JsonRef.parse("http://example.com/s")
        assert doc.contains(JsonRef.parse("http://example.com/s#/a"))
        assert not doc.contains(JsonRef.parse("http://example.com/t#/a"))

    def test_from_path(self, tmp_path: Path) -> None:
        ref = JsonRef.from_path(tmp_path / "s.json")
        assert ref.scheme == "file"
        assert ref.is_absolute()
        assert ref.path.endswith("/s.json")


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


class TestResolve:
    BASE = JsonRef.parse("http://example.com/schemas/root.json#/items")

    @pytest.mark.parametrize(
        ("relative", "expected"),
        [
            ("child.json", "http://example.com/schemas/child.json#"),
            ("../other.json#/a", "http://example.com/other.json#/a"),
            ("/abs.json", "http://example.com/abs.json#"),
            ("#/definitions/a", "http://example.com/schemas/root.json#/definitions/a"),
            ("", "http://example.com/schemas/root.json#"),
            ("//other.org/x", "http://other.org/x#"),
            ("https://elsewhere.org/s", "https://elsewhere.org/s#"),
        ],
    )
    def test_rfc3986_resolution(self, relative: str, expected: str) -> None:
        assert str(self.BASE.resolve(relative)) == expected

    def test_fragment_replaces_base_fragment_in_urn(self) -> None:
        base = JsonRef.parse("urn:example:root")
        assert str(base.resolve("#/a")) == "urn:example:root#/a"

    def test_unknown_scheme_resolves_hierarchically(self) -> None:
        base = JsonRef.parse("resource:/pkg/schemas/a.json")
        assert str(base.resolve("b.json")) == "resource:/pkg/schemas/b.json#"

    def test_private_scheme_removes_dot_segments(self) -> None:
        base = JsonRef.parse("foo://host/a/b/c.json")
        assert str(base.resolve("../d.json#/x")) == "foo://host/a/d.json#/x"

    def test_empty_base_keeps_relative(self) -> None:
        assert str(JsonRef.empty().resolve("#/a")) == "#/a"

    def test_with_pointer(self) -> None:
        ref = JsonRef.parse("http://example.com/s").with_pointer(JsonPointer.of("a", "b"))
        assert str(ref) == "http://example.com/s#/a/b"


# ---------------------------------------------------------------------------
# Malformed input
# ---------------------------------------------------------------------------


class TestInvalid:
    @pytest.mark.parametrize("text", ["a b", "%zz", "#%ff", "http://x/a#b#c", "1http://x", "<a>"])
    def test_malformed_text(self, text: str) -> None:
        with pytest.raises(InvalidReferenceError):
            JsonRef.parse(text)

    def test_non_string(self) -> None:
        with pytest.raises(InvalidReferenceError):
            JsonRef.parse(42)  # type: ignore[arg-type]

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            JsonRef.parse("a b")
