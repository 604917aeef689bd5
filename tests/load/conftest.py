"""Shared fixtures for loader tests."""

from __future__ import annotations

import json
from typing import Any

import pytest

from json_schema_core.load.fetchers import fetch_error


class MemoryFetcher:
    """Serves JSON documents from a dict and records every fetched URI."""

    def __init__(self) -> None:
        self.documents: dict[str, bytes] = {}
        self.calls: list[str] = []

    def add(self, uri: str, document: Any) -> None:
        self.documents[uri] = json.dumps(document).encode()

    def fetch(self, uri: str) -> bytes:
        self.calls.append(uri)
        try:
            return self.documents[uri]
        except KeyError:
            raise fetch_error(uri) from None


@pytest.fixture
def memory_fetcher() -> MemoryFetcher:
    """Fresh in-memory fetcher, registered by tests under the ``mem`` scheme."""
    return MemoryFetcher()
