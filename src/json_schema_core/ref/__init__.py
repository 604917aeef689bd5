"""Address model: where a schema lives and how it is identified.

Re-exports:
- JsonPointer: RFC 6901 pointer into a JSON value
- JsonRef: URI reference with an optional JSON Pointer fragment
- SchemaKey, AbsoluteSchemaKey, AnonymousSchemaKey: schema identities
- absolute_key, anonymous_key: identity factories
"""

from json_schema_core.ref.key import (
    AbsoluteSchemaKey,
    AnonymousSchemaKey,
    SchemaKey,
    absolute_key,
    anonymous_key,
)
from json_schema_core.ref.pointer import JsonPointer
from json_schema_core.ref.reference import JsonRef

__all__ = [
    "AbsoluteSchemaKey",
    "AnonymousSchemaKey",
    "JsonPointer",
    "JsonRef",
    "SchemaKey",
    "absolute_key",
    "anonymous_key",
]
