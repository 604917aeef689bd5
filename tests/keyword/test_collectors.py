"""Tests for the pointer-collector helpers."""

from __future__ import annotations

import pytest

from json_schema_core.keyword import (
    AbstractPointerCollector,
    SchemaArrayPointerCollector,
    SchemaMapPointerCollector,
    SchemaOrSchemaArrayPointerCollector,
    SchemaPointerCollector,
)
from json_schema_core.protocols import PointerCollector
from json_schema_core.ref import JsonPointer
from json_schema_core.tree import CanonicalSchemaTree
from json_schema_core.walk import PointerSet


def collect(collector: AbstractPointerCollector, schema: dict[str, object]) -> list[str]:
    pointers = PointerSet()
    collector.collect(pointers, CanonicalSchemaTree(schema))
    return [str(p) for p in pointers]


class TestCollectors:
    def test_schema(self) -> None:
        assert collect(SchemaPointerCollector("not"), {"not": {}}) == ["/not"]

    def test_schema_map_is_sorted(self) -> None:
        schema = {"properties": {"b": {}, "a": {}, "c/d": {}}}
        assert collect(SchemaMapPointerCollector("properties"), schema) == [
            "/properties/a",
            "/properties/b",
            "/properties/c~1d",
        ]

    def test_schema_array(self) -> None:
        assert collect(SchemaArrayPointerCollector("allOf"), {"allOf": [{}, {}]}) == [
            "/allOf/0",
            "/allOf/1",
        ]

    def test_schema_or_schema_array_with_schema(self) -> None:
        assert collect(SchemaOrSchemaArrayPointerCollector("items"), {"items": {}}) == ["/items"]

    def test_schema_or_schema_array_with_array(self) -> None:
        assert collect(SchemaOrSchemaArrayPointerCollector("items"), {"items": [{}]}) == [
            "/items/0"
        ]

    @pytest.mark.parametrize(
        "collector",
        [SchemaMapPointerCollector("k"), SchemaArrayPointerCollector("k")],
    )
    def test_wrong_shape_collects_nothing(self, collector: AbstractPointerCollector) -> None:
        assert collect(collector, {"k": "oops"}) == []

    def test_base_pointer(self) -> None:
        assert SchemaPointerCollector("a/b").base_pointer == JsonPointer.of("a/b")

    def test_base_class_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            AbstractPointerCollector("k")  # type: ignore[abstract]

    def test_helpers_satisfy_protocol(self) -> None:
        assert isinstance(SchemaPointerCollector("not"), PointerCollector)
