"""Keyword subpackage: keywords, dialect descriptors and schema selection.

Re-exports:
- Keyword, KeywordBuilder: one keyword plus its checker and collector
- SchemaDescriptor, SchemaDescriptorBuilder: keywords of one dialect
- SchemaSelector, SchemaSelectorConfiguration(+Builder): dialect choice
- pointer-collector helpers for the usual keyword shapes
"""

from json_schema_core.keyword.collectors import (
    AbstractPointerCollector,
    SchemaArrayPointerCollector,
    SchemaMapPointerCollector,
    SchemaOrSchemaArrayPointerCollector,
    SchemaPointerCollector,
)
from json_schema_core.keyword.descriptor import (
    Keyword,
    KeywordBuilder,
    SchemaDescriptor,
    SchemaDescriptorBuilder,
)
from json_schema_core.keyword.selector import (
    SchemaSelector,
    SchemaSelectorConfiguration,
    SchemaSelectorConfigurationBuilder,
)

__all__ = [
    "AbstractPointerCollector",
    "Keyword",
    "KeywordBuilder",
    "SchemaArrayPointerCollector",
    "SchemaDescriptor",
    "SchemaDescriptorBuilder",
    "SchemaMapPointerCollector",
    "SchemaOrSchemaArrayPointerCollector",
    "SchemaPointerCollector",
    "SchemaSelector",
    "SchemaSelectorConfiguration",
    "SchemaSelectorConfigurationBuilder",
]
