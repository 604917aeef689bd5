"""Schema selection: which descriptor applies to a schema.

A ``SchemaSelector`` looks at the ``$schema`` keyword of the root of the
document being analyzed and picks the descriptor registered under that URI;
schemas without ``$schema``, or naming an unregistered dialect, get the
default descriptor.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from json_schema_core.exceptions import InvalidReferenceError
from json_schema_core.messages import CORE_BUNDLE
from json_schema_core.ref import JsonRef

if TYPE_CHECKING:
    from json_schema_core.keyword.descriptor import SchemaDescriptor
    from json_schema_core.tree import SchemaTree

__all__ = ["SchemaSelector", "SchemaSelectorConfiguration", "SchemaSelectorConfigurationBuilder"]


@dataclass(frozen=True, slots=True)
class SchemaSelectorConfiguration:
    """Frozen set of descriptors plus the default one."""

    descriptors: Mapping[JsonRef, SchemaDescriptor]
    default_descriptor: SchemaDescriptor

    @staticmethod
    def new_builder() -> SchemaSelectorConfigurationBuilder:
        return SchemaSelectorConfigurationBuilder()

    @property
    def supported_keywords(self) -> frozenset[str]:
        """Every keyword known to at least one descriptor."""
        names: set[str] = set()
        for descriptor in self.descriptors.values():
            names.update(descriptor.supported_keywords)
        return frozenset(names)

    def thaw(self) -> SchemaSelectorConfigurationBuilder:
        return SchemaSelectorConfigurationBuilder(self)


class SchemaSelectorConfigurationBuilder:
    """Mutable builder of ``SchemaSelectorConfiguration``."""

    def __init__(self, source: SchemaSelectorConfiguration | None = None) -> None:
        self._descriptors: dict[JsonRef, SchemaDescriptor] = {}
        self._default: JsonRef | None = None
        if source is not None:
            self._descriptors.update(source.descriptors)
            self._default = source.default_descriptor.locator

    def add_descriptor(
        self, descriptor: SchemaDescriptor, make_default: bool = False
    ) -> SchemaSelectorConfigurationBuilder:
        """Register ``descriptor`` under its locator.

        Raises:
            ValueError: If ``descriptor`` is ``None``.
        """
        CORE_BUNDLE.check_not_null(descriptor, "schemaSelector.nullDescriptor")
        self._descriptors[descriptor.locator] = descriptor
        if make_default:
            self._default = descriptor.locator
        return self

    def set_default_descriptor(self, locator: str | JsonRef) -> SchemaSelectorConfigurationBuilder:
        """Make the already registered descriptor at ``locator`` the default.

        Raises:
            ValueError: If no descriptor is registered under ``locator``.
        """
        ref = JsonRef.parse(CORE_BUNDLE.check_not_null(locator, "schemaDescriptor.nullLocator"))
        if ref not in self._descriptors:
            raise ValueError(CORE_BUNDLE.printf("schemaSelector.unknownDescriptor", ref))
        self._default = ref
        return self

    def freeze(self) -> SchemaSelectorConfiguration:
        """Return the frozen configuration.

        Raises:
            ValueError: If no default descriptor was chosen.
        """
        if self._default is None:
            raise ValueError(CORE_BUNDLE.get_message("schemaSelector.noDefault"))
        return SchemaSelectorConfiguration(
            MappingProxyType(dict(self._descriptors)),
            self._descriptors[self._default],
        )


class SchemaSelector:
    """Chooses the descriptor for a tree."""

    def __init__(self, config: SchemaSelectorConfiguration) -> None:
        self._config = CORE_BUNDLE.check_not_null(config, "schemaSelector.nullDescriptor")

    @property
    def config(self) -> SchemaSelectorConfiguration:
        return self._config

    def select(self, tree: SchemaTree) -> SchemaDescriptor:
        """Return the descriptor named by the document's ``$schema``, else the default."""
        root = tree.base_node
        declared = root.get("$schema") if isinstance(root, dict) else None
        if isinstance(declared, str):
            try:
                descriptor = self._config.descriptors.get(JsonRef.parse(declared))
            except InvalidReferenceError:
                descriptor = None
            if descriptor is not None:
                return descriptor
        return self._config.default_descriptor
