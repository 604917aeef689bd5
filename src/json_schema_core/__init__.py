"""json-schema-core - resolve, address and walk JSON Schema documents."""

from __future__ import annotations

from json_schema_core.analyzer import SchemaAnalyzer, SyntaxWalker
from json_schema_core.exceptions import (
    FetchError,
    InvalidPointerError,
    InvalidReferenceError,
    JsonSchemaCoreError,
    LoadingError,
    NoSuitableProcessorError,
    PointerNotFoundError,
    ProcessingError,
    ProcessorBuildError,
)
from json_schema_core.keyword import (
    Keyword,
    SchemaDescriptor,
    SchemaSelector,
    SchemaSelectorConfiguration,
)
from json_schema_core.load import (
    LoadingConfiguration,
    ParserFeature,
    SchemaLoader,
    URITranslatorConfiguration,
)
from json_schema_core.messages import CORE_BUNDLE, MessageBundle
from json_schema_core.processing import ProcessorMap
from json_schema_core.ref import JsonPointer, JsonRef, SchemaKey, absolute_key, anonymous_key
from json_schema_core.report import (
    ListProcessingReport,
    LoggingProcessingReport,
    LogLevel,
    ProcessingMessage,
    ProcessingReport,
)
from json_schema_core.tree import (
    CanonicalSchemaTree,
    Dereferencing,
    InlineSchemaTree,
    NodeType,
    SchemaTree,
)
from json_schema_core.walk import TreeVisitor, TreeWalker, VisitResult

__version__: str = "0.1.0"
__all__: list[str] = [
    "CORE_BUNDLE",
    "CanonicalSchemaTree",
    "Dereferencing",
    "FetchError",
    "InlineSchemaTree",
    "InvalidPointerError",
    "InvalidReferenceError",
    "JsonPointer",
    "JsonRef",
    "JsonSchemaCoreError",
    "Keyword",
    "ListProcessingReport",
    "LoadingConfiguration",
    "LoadingError",
    "LogLevel",
    "LoggingProcessingReport",
    "MessageBundle",
    "NoSuitableProcessorError",
    "NodeType",
    "ParserFeature",
    "PointerNotFoundError",
    "ProcessingError",
    "ProcessingMessage",
    "ProcessingReport",
    "ProcessorBuildError",
    "ProcessorMap",
    "SchemaAnalyzer",
    "SchemaDescriptor",
    "SchemaKey",
    "SchemaLoader",
    "SchemaSelector",
    "SchemaSelectorConfiguration",
    "SchemaTree",
    "SyntaxWalker",
    "TreeVisitor",
    "TreeWalker",
    "URITranslatorConfiguration",
    "VisitResult",
    "absolute_key",
    "anonymous_key",
]
