"""JSON parsing with configurable strictness."""

from __future__ import annotations

import json
from collections.abc import Iterable
from enum import StrEnum, auto
from typing import Any

__all__ = ["DEFAULT_PARSER_FEATURES", "ParserFeature", "parse_json"]


class ParserFeature(StrEnum):
    """Optional parser behaviors.

    - ``STRICT_DUPLICATE_DETECTION``: an object with a repeated key is an
      error instead of keeping the last value.
    - ``ALLOW_NON_NUMERIC_NUMBERS``: accept ``NaN``, ``Infinity`` and
      ``-Infinity`` (rejected otherwise).
    - ``ALLOW_CONTROL_CHARS``: accept raw control characters inside strings.
    """

    STRICT_DUPLICATE_DETECTION = auto()
    ALLOW_NON_NUMERIC_NUMBERS = auto()
    ALLOW_CONTROL_CHARS = auto()


DEFAULT_PARSER_FEATURES: frozenset[ParserFeature] = frozenset()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-numeric number {name} is not allowed")


def _unique_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f"duplicate object key {key!r}")
        result[key] = value
    return result


def parse_json(data: bytes | str, features: Iterable[ParserFeature] = ()) -> Any:
    """Parse ``data`` into a JSON value.

    Raises:
        ValueError: If ``data`` is not valid JSON under ``features``
            (``json.JSONDecodeError`` and ``UnicodeDecodeError`` included).
    """
    enabled = frozenset(features)
    options: dict[str, Any] = {
        "strict": ParserFeature.ALLOW_CONTROL_CHARS not in enabled,
    }
    if ParserFeature.ALLOW_NON_NUMERIC_NUMBERS not in enabled:
        options["parse_constant"] = _reject_constant
    if ParserFeature.STRICT_DUPLICATE_DETECTION in enabled:
        options["object_pairs_hook"] = _unique_keys
    return json.loads(data, **options)
