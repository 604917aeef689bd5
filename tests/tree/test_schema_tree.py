"""Tests for SchemaTree navigation and canonical reference resolution.

Covers:
- Construction: anonymous vs absolute keys, defensive copy
- Navigation: at / append, PointerNotFoundError
- Resolution scope from ``$id`` / ``id``, anchors
- resolve_reference: same document, chained refs, loops, dangling refs,
  other documents through a loader, report vs raise
- Equality and JSON summary
"""

from __future__ import annotations

from typing import Any

import pytest

from json_schema_core.exceptions import (
    InvalidReferenceError,
    LoadingError,
    PointerNotFoundError,
)
from json_schema_core.load import LoadingConfiguration, SchemaLoader
from json_schema_core.ref import AbsoluteSchemaKey, AnonymousSchemaKey, JsonPointer, JsonRef
from json_schema_core.report import ListProcessingReport, LogLevel
from json_schema_core.tree import CanonicalSchemaTree, InlineSchemaTree

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

ROOT_ID = "http://example.com/root.json"


@pytest.fixture
def scoped_schema() -> dict[str, Any]:
    return {
        "$id": ROOT_ID,
        "definitions": {
            "a": {"$id": "a.json", "type": "string"},
            "anchored": {"$id": "#named", "type": "null"},
        },
        "items": {"$ref": "a.json"},
    }


@pytest.fixture
def two_document_loader() -> SchemaLoader:
    config = (
        LoadingConfiguration.new_builder()
        .preload_schema(
            {"properties": {"x": {"$ref": "b.json#/definitions/x"}}},
            "http://example.com/a.json",
        )
        .preload_schema(
            {"definitions": {"x": {"type": "string"}}},
            "http://example.com/b.json",
        )
        .freeze()
    )
    return SchemaLoader(config)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_no_loading_ref_gives_anonymous_key(self) -> None:
        tree = CanonicalSchemaTree({"type": "string"})
        assert isinstance(tree.key, AnonymousSchemaKey)
        assert tree.loading_ref == JsonRef.empty()

    def test_absolute_loading_ref_gives_absolute_key(self) -> None:
        tree = CanonicalSchemaTree({}, "http://example.com/s.json#")
        assert isinstance(tree.key, AbsoluteSchemaKey)
        assert tree.key.ref == JsonRef.parse("http://example.com/s.json")

    def test_relative_loading_ref_gives_anonymous_key(self) -> None:
        assert isinstance(CanonicalSchemaTree({}, "s.json").key, AnonymousSchemaKey)

    def test_document_is_copied(self) -> None:
        schema: dict[str, Any] = {"type": "string"}
        tree = CanonicalSchemaTree(schema)
        schema["type"] = "integer"
        assert tree.node == {"type": "string"}

    def test_starts_at_root(self) -> None:
        tree = CanonicalSchemaTree({"a": 1})
        assert tree.pointer == JsonPointer.empty()
        assert tree.node is tree.base_node


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------


class TestNavigation:
    def test_at_is_absolute(self) -> None:
        tree = CanonicalSchemaTree({"a": {"b": [10, 20]}})
        sub = tree.at("/a").at(JsonPointer.of("a", "b", 1))
        assert sub.node == 20
        assert sub.pointer == JsonPointer.parse("/a/b/1")

    def test_append_is_relative(self) -> None:
        tree = CanonicalSchemaTree({"a": {"b": [10, 20]}})
        assert tree.at("/a").append("/b/0").node == 10

    def test_views_share_document_and_key(self) -> None:
        tree = CanonicalSchemaTree({"a": {}})
        sub = tree.at("/a")
        assert sub.base_node is tree.base_node
        assert sub.key == tree.key
        assert isinstance(sub, CanonicalSchemaTree)

    def test_missing_pointer_raises(self) -> None:
        with pytest.raises(PointerNotFoundError):
            CanonicalSchemaTree({"a": {}}).at("/b")


# ---------------------------------------------------------------------------
# Scope
# ---------------------------------------------------------------------------


class TestScope:
    def test_root_id_sets_scope(self, scoped_schema: dict[str, Any]) -> None:
        tree = CanonicalSchemaTree(scoped_schema)
        assert tree.scope == JsonRef.parse(ROOT_ID)
        assert tree.at("/items").scope == JsonRef.parse(ROOT_ID)

    def test_nested_id_rebases(self, scoped_schema: dict[str, Any]) -> None:
        tree = CanonicalSchemaTree(scoped_schema)
        assert tree.at("/definitions/a").scope == JsonRef.parse("http://example.com/a.json")
        assert tree.at("/definitions/a/type").scope == JsonRef.parse(
            "http://example.com/a.json"
        )

    def test_anchor_does_not_rebase(self, scoped_schema: dict[str, Any]) -> None:
        tree = CanonicalSchemaTree(scoped_schema)
        assert tree.at("/definitions/anchored").scope == JsonRef.parse(ROOT_ID)

    def test_draft4_id(self) -> None:
        tree = CanonicalSchemaTree({"id": "http://example.com/d4.json", "items": {}})
        assert tree.at("/items").scope == JsonRef.parse("http://example.com/d4.json")

    def test_no_id_scope_is_loading_ref(self) -> None:
        tree = CanonicalSchemaTree({"items": {}}, "http://example.com/s.json")
        assert tree.at("/items").scope == JsonRef.parse("http://example.com/s.json")


# ---------------------------------------------------------------------------
# resolve_reference
# ---------------------------------------------------------------------------


class TestResolveSameDocument:
    def test_pointer_fragment(self) -> None:
        tree = CanonicalSchemaTree(
            {"definitions": {"a": {"type": "string"}}, "items": {"$ref": "#/definitions/a"}}
        )
        items = tree.at("/items")
        target = items.resolve_reference(items.node["$ref"])
        assert target is not None
        assert target.node == {"type": "string"}
        assert target.pointer == JsonPointer.of("definitions", "a")
        assert target.key == tree.key

    def test_id_relative_reference(self, scoped_schema: dict[str, Any]) -> None:
        tree = CanonicalSchemaTree(scoped_schema)
        target = tree.at("/items").resolve_reference("a.json")
        assert target is not None
        assert target.pointer == JsonPointer.of("definitions", "a")

    def test_pointer_below_an_id(self, scoped_schema: dict[str, Any]) -> None:
        tree = CanonicalSchemaTree(scoped_schema)
        target = tree.resolve_reference("a.json#/type")
        assert target is not None
        assert target.node == "string"

    def test_plain_name_anchor(self, scoped_schema: dict[str, Any]) -> None:
        tree = CanonicalSchemaTree(scoped_schema)
        target = tree.resolve_reference("#named")
        assert target is not None
        assert target.pointer == JsonPointer.of("definitions", "anchored")

    def test_chained_references_are_followed(self) -> None:
        tree = CanonicalSchemaTree(
            {
                "definitions": {
                    "a": {"$ref": "#/definitions/b"},
                    "b": {"$ref": "#/definitions/c"},
                    "c": {"type": "integer"},
                }
            }
        )
        target = tree.resolve_reference("#/definitions/a")
        assert target is not None
        assert target.node == {"type": "integer"}

    def test_literal_values_are_not_indexed(self) -> None:
        tree = CanonicalSchemaTree({"enum": [{"$id": "http://example.com/x"}]})
        with pytest.raises(LoadingError):
            tree.resolve_reference("http://example.com/x")

    def test_id_under_property_named_enum(self) -> None:
        tree = CanonicalSchemaTree(
            {"properties": {"enum": {"$id": "http://x/e.json", "type": "string"}}},
            "http://x/root.json",
        )
        target = tree.resolve_reference("http://x/e.json")
        assert target is not None
        assert target.pointer == JsonPointer.of("properties", "enum")
        assert target.node["type"] == "string"


class TestResolveFailures:
    LOOP = {"definitions": {"a": {"$ref": "#/definitions/b"}, "b": {"$ref": "#/definitions/a"}}}

    def test_loop_raises_without_report(self) -> None:
        with pytest.raises(LoadingError) as exc_info:
            CanonicalSchemaTree(self.LOOP).resolve_reference("#/definitions/a")
        message = exc_info.value.processing_message
        assert message.get("path") == ["#/definitions/a", "#/definitions/b"]
        assert message.level is LogLevel.ERROR

    def test_self_reference_is_a_loop(self) -> None:
        with pytest.raises(LoadingError):
            CanonicalSchemaTree({"$ref": "#"}).resolve_reference("#")

    def test_loop_goes_to_report(self) -> None:
        report = ListProcessingReport()
        result = CanonicalSchemaTree(self.LOOP).resolve_reference("#/definitions/a", report)
        assert result is None
        assert not report.is_success()
        assert [m.level for m in report] == [LogLevel.ERROR]

    def test_dangling_reference(self) -> None:
        report = ListProcessingReport()
        result = CanonicalSchemaTree({}).resolve_reference("#/nope", report)
        assert result is None
        (message,) = list(report)
        assert message.get("ref") == "#/nope"
        assert "cannot be resolved" in message.message

    def test_other_document_without_loader(self) -> None:
        with pytest.raises(LoadingError) as exc_info:
            CanonicalSchemaTree({}).resolve_reference("http://example.com/other.json")
        assert "no loader" in str(exc_info.value)

    def test_malformed_reference(self) -> None:
        with pytest.raises(InvalidReferenceError):
            CanonicalSchemaTree({}).resolve_reference("a b")

    def test_unknown_scheme_reported_as_fatal(self) -> None:
        report = ListProcessingReport()
        tree = CanonicalSchemaTree({}, "http://example.com/s.json", loader=SchemaLoader())
        assert tree.resolve_reference("foo://bar/x.json", report) is None
        (message,) = list(report)
        assert message.level is LogLevel.FATAL
        assert message.get("scheme") == "foo"


class TestResolveOtherDocument:
    def test_loader_supplies_other_document(self, two_document_loader: SchemaLoader) -> None:
        tree = two_document_loader.load("http://example.com/a.json")
        prop = tree.at("/properties/x")
        target = prop.resolve_reference(prop.node["$ref"])
        assert target is not None
        assert target.loading_ref == JsonRef.parse("http://example.com/b.json")
        assert target.pointer == JsonPointer.of("definitions", "x")
        assert target.node == {"type": "string"}

    def test_other_document_comes_from_loader_cache(
        self, two_document_loader: SchemaLoader
    ) -> None:
        tree = two_document_loader.load("http://example.com/a.json")
        target = tree.resolve_reference("b.json")
        assert target is not None
        assert target.key == two_document_loader.load("http://example.com/b.json").key


# ---------------------------------------------------------------------------
# Identity and representation
# ---------------------------------------------------------------------------


class TestIdentity:
    def test_same_uri_and_pointer_are_equal(self) -> None:
        one = CanonicalSchemaTree({"a": {}}, "http://example.com/s")
        two = CanonicalSchemaTree({"a": {}}, "http://example.com/s")
        assert one == two
        assert one.at("/a") == two.at("/a")
        assert hash(one.at("/a")) == hash(two.at("/a"))

    def test_different_pointers_differ(self) -> None:
        tree = CanonicalSchemaTree({"a": {}})
        assert tree != tree.at("/a")

    def test_anonymous_trees_differ(self) -> None:
        assert CanonicalSchemaTree({}) != CanonicalSchemaTree({})

    def test_variants_differ(self) -> None:
        uri = "http://example.com/s"
        assert CanonicalSchemaTree({}, uri) != InlineSchemaTree({}, uri)

    def test_as_json(self) -> None:
        tree = CanonicalSchemaTree({"a": {}}, "http://example.com/s").at("/a")
        assert tree.as_json() == {"loadingURI": "http://example.com/s#", "pointer": "/a"}

    def test_str(self) -> None:
        tree = CanonicalSchemaTree({"a": {}}, "http://example.com/s").at("/a")
        assert str(tree) == "http://example.com/s#/a"
