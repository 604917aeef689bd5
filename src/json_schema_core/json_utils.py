"""Helpers to represent arbitrary Python objects as JSON values.

"JSON value" here means the plain Python rendition produced by ``json.loads``:
``dict`` with ``str`` keys, ``list``, ``str``, ``int``, ``float``, ``bool``
and ``None``.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from json_schema_core.messages import CORE_BUNDLE
from json_schema_core.protocols import AsJson

__all__ = ["deep_copy", "to_json", "to_json_value", "to_string"]

_SCALARS = (str, int, float, bool)


def to_json(obj: AsJson | object) -> Any:
    """Serialize ``obj`` to a JSON value if it knows how to.

    ``AsJson`` objects (anything with an ``as_json()`` method) give their own
    representation. Anything else becomes ``{"pythonClass": "<module>.<name>"}``.
    ``None`` becomes JSON null.
    """
    if obj is None:
        return None
    if isinstance(obj, AsJson):
        return obj.as_json()
    cls = type(obj)
    return {"pythonClass": f"{cls.__module__}.{cls.__qualname__}"}


def to_string(obj: Any) -> str:
    """Return ``str(obj)``; ``None`` is refused.

    Raises:
        ValueError: If ``obj`` is ``None``.
    """
    CORE_BUNDLE.check_not_null(obj, "jsonUtils.nullArgument")
    return str(obj)


def to_json_value(value: Any) -> Any:
    """Convert ``value`` into a JSON value, element by element.

    Conversion rules, in order:

    - ``None`` and JSON scalars are kept (enums contribute their ``value``);
    - ``AsJson`` objects are serialized through ``as_json()``;
    - mappings become objects with stringified keys;
    - other iterables become arrays;
    - anything else is stringified.
    """
    if value is None:
        return None
    if isinstance(value, Enum):
        return to_json_value(value.value)
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, AsJson):
        return value.as_json()
    if isinstance(value, Mapping):
        return {str(k): to_json_value(v) for k, v in value.items()}
    if isinstance(value, Iterable):
        return [to_json_value(item) for item in value]
    return str(value)


def deep_copy(value: Any) -> Any:
    """Return an independent copy of a JSON value."""
    if value is None or isinstance(value, _SCALARS):
        return value
    return copy.deepcopy(value)
