"""Schema identities (``SchemaKey``).

A schema key is one of two variants:

- ``AbsoluteSchemaKey`` wraps a ``JsonRef``; it compares and hashes like the
  reference, so keys derived from equal references deduplicate naturally.
- ``AnonymousSchemaKey`` wraps a process-wide counter value, minted once per
  schema that has no usable URI (in-memory documents, literals).

The two variants never compare equal to each other. The counter is only
reachable through ``anonymous_key()``.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass

from json_schema_core.ref.reference import JsonRef

__all__ = [
    "AbsoluteSchemaKey",
    "AnonymousSchemaKey",
    "SchemaKey",
    "absolute_key",
    "anonymous_key",
]

_counter = itertools.count()
_counter_lock = threading.Lock()


@dataclass(frozen=True, slots=True)
class AbsoluteSchemaKey:
    """Identity of a schema reachable through an absolute reference."""

    ref: JsonRef

    @property
    def locator(self) -> JsonRef:
        return self.ref

    def __str__(self) -> str:
        return str(self.ref)


@dataclass(frozen=True, slots=True)
class AnonymousSchemaKey:
    """Identity of a schema with no usable URI."""

    id: int

    @property
    def locator(self) -> JsonRef:
        return JsonRef.empty()

    def __str__(self) -> str:
        return f"anonymous schema #{self.id}"


SchemaKey = AbsoluteSchemaKey | AnonymousSchemaKey


def anonymous_key() -> AnonymousSchemaKey:
    """Allocate a new anonymous key; ids strictly increase across calls."""
    with _counter_lock:
        return AnonymousSchemaKey(next(_counter))


def absolute_key(ref: str | JsonRef) -> AbsoluteSchemaKey:
    """Return the key identifying the schema at ``ref``."""
    return AbsoluteSchemaKey(JsonRef.parse(ref))
