"""Keywords and schema descriptors.

A ``Keyword`` names one schema keyword and optionally carries the syntax
checker and pointer collector that handle it. A ``SchemaDescriptor`` groups
the keywords of one schema dialect under the dialect's locator (the value
``$schema`` takes for it)::

    descriptor = (
        SchemaDescriptor.new_builder()
        .set_locator("http://json-schema.org/draft-04/schema#")
        .add_keyword(Keyword.with_name("title").build())
        .add_keyword(
            Keyword.with_name("items")
            .set_syntax_checker(items_checker)
            .set_pointer_collector(SchemaOrSchemaArrayPointerCollector("items"))
            .build()
        )
        .freeze()
    )
    descriptor.supported_keywords   # frozenset({"title", "items"})
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from json_schema_core.messages import CORE_BUNDLE
from json_schema_core.ref import JsonRef

if TYPE_CHECKING:
    from json_schema_core.protocols import PointerCollector, SyntaxChecker

__all__ = ["Keyword", "KeywordBuilder", "SchemaDescriptor", "SchemaDescriptorBuilder"]


@dataclass(frozen=True, slots=True)
class Keyword:
    """One keyword with its (optional) syntax checker and pointer collector."""

    name: str
    syntax_checker: SyntaxChecker | None = None
    pointer_collector: PointerCollector | None = None

    @staticmethod
    def with_name(name: str) -> KeywordBuilder:
        """Start building a keyword.

        Raises:
            ValueError: If ``name`` is ``None``.
        """
        return KeywordBuilder(name)


class KeywordBuilder:
    """Mutable builder of ``Keyword``."""

    def __init__(self, name: str) -> None:
        self._name = CORE_BUNDLE.check_not_null(name, "keyword.nullName")
        self._syntax_checker: SyntaxChecker | None = None
        self._pointer_collector: PointerCollector | None = None

    def set_syntax_checker(self, checker: SyntaxChecker) -> KeywordBuilder:
        self._syntax_checker = checker
        return self

    def set_pointer_collector(self, collector: PointerCollector) -> KeywordBuilder:
        self._pointer_collector = collector
        return self

    def build(self) -> Keyword:
        return Keyword(self._name, self._syntax_checker, self._pointer_collector)


@dataclass(frozen=True, slots=True)
class SchemaDescriptor:
    """Frozen description of a schema dialect.

    Attributes:
        locator: The dialect's URI, as found in ``$schema``.
        keywords: Keywords by name.
    """

    locator: JsonRef
    keywords: Mapping[str, Keyword] = field(default_factory=lambda: MappingProxyType({}))

    @staticmethod
    def new_builder() -> SchemaDescriptorBuilder:
        return SchemaDescriptorBuilder()

    @property
    def supported_keywords(self) -> frozenset[str]:
        return frozenset(self.keywords)

    @property
    def syntax_checkers(self) -> Mapping[str, SyntaxChecker]:
        """Checkers by keyword name, for keywords that have one."""
        return MappingProxyType(
            {
                name: keyword.syntax_checker
                for name, keyword in self.keywords.items()
                if keyword.syntax_checker is not None
            }
        )

    @property
    def pointer_collectors(self) -> Mapping[str, PointerCollector]:
        """Collectors by keyword name, for keywords that have one."""
        return MappingProxyType(
            {
                name: keyword.pointer_collector
                for name, keyword in self.keywords.items()
                if keyword.pointer_collector is not None
            }
        )

    def thaw(self) -> SchemaDescriptorBuilder:
        """Return a new builder seeded with this descriptor."""
        return SchemaDescriptorBuilder(self)


class SchemaDescriptorBuilder:
    """Mutable builder of ``SchemaDescriptor``."""

    def __init__(self, source: SchemaDescriptor | None = None) -> None:
        self._locator: JsonRef | None = None
        self._keywords: dict[str, Keyword] = {}
        if source is not None:
            self._locator = source.locator
            self._keywords.update(source.keywords)

    def set_locator(self, locator: str | JsonRef) -> SchemaDescriptorBuilder:
        """Set the dialect's URI.

        Raises:
            ValueError: If ``locator`` is ``None`` or malformed.
        """
        CORE_BUNDLE.check_not_null(locator, "schemaDescriptor.nullLocator")
        self._locator = JsonRef.parse(locator)
        return self

    def add_keyword(self, keyword: Keyword) -> SchemaDescriptorBuilder:
        """Add ``keyword``, replacing any keyword with the same name."""
        CORE_BUNDLE.check_not_null(keyword, "schemaDescriptor.nullDescriptor")
        self._keywords[keyword.name] = keyword
        return self

    def remove_keyword(self, name: str) -> SchemaDescriptorBuilder:
        CORE_BUNDLE.check_not_null(name, "keyword.nullName")
        self._keywords.pop(name, None)
        return self

    def freeze(self) -> SchemaDescriptor:
        """Return the frozen descriptor.

        Raises:
            ValueError: If no locator was set.
        """
        locator = CORE_BUNDLE.check_not_null(self._locator, "schemaDescriptor.nullLocator")
        return SchemaDescriptor(locator, MappingProxyType(dict(self._keywords)))
