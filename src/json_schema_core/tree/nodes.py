"""NodeType: the JSON type of a parsed value."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

__all__ = ["NodeType"]


class NodeType(StrEnum):
    """JSON Schema's names for the seven JSON value types."""

    ARRAY = "array"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NULL = "null"
    NUMBER = "number"
    OBJECT = "object"
    STRING = "string"

    @classmethod
    def of(cls, value: Any) -> NodeType:
        """Return the type of a JSON value.

        Raises:
            TypeError: If ``value`` is not a JSON value.
        """
        # bool is a subclass of int
        if isinstance(value, bool):
            return cls.BOOLEAN
        if value is None:
            return cls.NULL
        if isinstance(value, int):
            return cls.INTEGER
        if isinstance(value, float):
            return cls.NUMBER
        if isinstance(value, str):
            return cls.STRING
        if isinstance(value, dict):
            return cls.OBJECT
        if isinstance(value, list):
            return cls.ARRAY
        raise TypeError(f"not a JSON value: {type(value).__name__}")
