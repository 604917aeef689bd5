"""SchemaLoader: turns references into schema trees.

``load`` goes through these steps, stopping at the first that yields a tree:

1. a preloaded document for the URI is served (always, cache or not);
2. with the cache enabled, a previously loaded tree is served;
3. the URI is translated (schema redirects, path redirects, namespace);
4. with the cache enabled, a previously parsed document is reused;
5. otherwise a fetcher is picked by scheme (an unknown scheme is a fatal
   error) and the fetched bytes are parsed with the configured parser
   features;
6. a tree is built with the configured dereferencing mode;
7. with the cache enabled, the tree is cached under the requested URI.

``load_document`` shares steps 1 and 3 to 5, so inlining a reference to a
document fetches it at most once while it stays cached.

Both caches are ``LRUCache`` instances behind one lock. Two threads loading
the same URI for the first time may both fetch it; both get equal trees and
the cache ends up holding one of them.

Example::

    from json_schema_core.load import SchemaLoader

    loader = SchemaLoader()
    tree = loader.load("file:///tmp/schema.json")
    tree.node["type"]
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, cast

from cachetools import LRUCache

from json_schema_core.exceptions import LoadingError
from json_schema_core.load.config import LoadingConfiguration
from json_schema_core.load.parser import parse_json
from json_schema_core.load.translator import URITranslator
from json_schema_core.messages import CORE_BUNDLE
from json_schema_core.ref import JsonRef
from json_schema_core.report import LogLevel, ProcessingMessage
from json_schema_core.tree.schema_tree import report_loading_error

if TYPE_CHECKING:
    from json_schema_core.report import ProcessingReport
    from json_schema_core.tree import SchemaTree

__all__ = ["SchemaLoader"]

logger = logging.getLogger(__name__)

_MISSING = object()


def _error(key: str, level: LogLevel, **arguments: Any) -> LoadingError:
    message = (
        ProcessingMessage()
        .set_log_level(level)
        .set_message(CORE_BUNDLE.get_message(key))
    )
    for name, value in arguments.items():
        message.put_argument(name, value)
    return LoadingError(message)


class SchemaLoader:
    """Loads, builds and caches schema trees.

    Args:
        config: Loading configuration. Defaults to
            ``LoadingConfiguration.by_default()``.
    """

    def __init__(self, config: LoadingConfiguration | None = None) -> None:
        self._config = config if config is not None else LoadingConfiguration.by_default()
        self._translator = URITranslator(self._config.translator_config)
        self._cache: LRUCache[JsonRef, SchemaTree] = LRUCache(maxsize=self._config.cache_size)
        self._documents: LRUCache[JsonRef, Any] = LRUCache(maxsize=self._config.cache_size)
        self._preloaded_trees: dict[JsonRef, SchemaTree] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> LoadingConfiguration:
        return self._config

    @property
    def cache_size(self) -> int:
        """Number of trees currently cached (preloaded documents excluded)."""
        with self._lock:
            return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, ref: str | JsonRef) -> SchemaTree:
        """Return the tree for ``ref``.

        A fragment in ``ref`` is resolved like a ``$ref`` against the loaded
        document's root.

        Raises:
            LoadingError: If no fetcher handles the URI's scheme, fetching or
                parsing fails, or the fragment does not resolve.
            InvalidReferenceError: If ``ref`` is malformed.
        """
        target = JsonRef.parse(ref)
        tree = self._load_locator(target.locator)
        if not target.fragment:
            return tree
        # Without a report, resolution failures raise.
        return cast("SchemaTree", tree.resolve_reference(target))

    def get(self, ref: str | JsonRef, report: ProcessingReport) -> SchemaTree | None:
        """Like ``load``, but failures go to ``report`` and ``None`` is returned."""
        CORE_BUNDLE.check_not_null(report, "processing.nullReport")
        try:
            return self.load(ref)
        except LoadingError as exc:
            report_loading_error(report, exc)
            return None

    def load_node(self, value: Any, report: ProcessingReport | None = None) -> SchemaTree:
        """Build a tree (with an anonymous key) for an in-memory document."""
        return self._config.dereferencing.new_tree(value, None, loader=self, report=report)

    def load_document(self, ref: str | JsonRef) -> Any:
        """Return the parsed document at ``ref``, without building a tree.

        Preloaded documents are served as is. Anything else comes from the
        document cache when enabled, and is fetched otherwise. The value
        may be shared with later callers and must not be mutated.
        """
        locator = JsonRef.parse(ref).locator
        if locator in self._config.preloaded_schemas:
            return self._config.preloaded_schemas[locator]
        return self._read(locator, self._translate(locator))

    def clear(self) -> None:
        """Drop every cached tree and parsed document."""
        with self._lock:
            self._cache.clear()
            self._documents.clear()

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _load_locator(self, locator: JsonRef) -> SchemaTree:
        if locator in self._config.preloaded_schemas:
            return self._preloaded(locator)

        if self._config.enable_cache:
            with self._lock:
                cached = self._cache.get(locator)
            if cached is not None:
                logger.debug("cache hit for %s", locator)
                return cached

        fetch_ref = self._translate(locator)
        value = self._read(locator, fetch_ref)
        loading_ref = locator if locator.is_absolute() else fetch_ref
        tree = self._config.dereferencing.new_tree(value, loading_ref, loader=self)

        if self._config.enable_cache:
            with self._lock:
                self._cache[locator] = tree
        return tree

    def _read(self, locator: JsonRef, fetch_ref: JsonRef) -> Any:
        if self._config.enable_cache:
            with self._lock:
                value = self._documents.get(locator, _MISSING)
            if value is not _MISSING:
                logger.debug("document cache hit for %s", locator)
                return value
        value = self._fetch(fetch_ref)
        if self._config.enable_cache:
            with self._lock:
                self._documents[locator] = value
        return value

    def _preloaded(self, locator: JsonRef) -> SchemaTree:
        with self._lock:
            tree = self._preloaded_trees.get(locator)
        if tree is None:
            value = self._config.preloaded_schemas[locator]
            tree = self._config.dereferencing.new_tree(value, locator, loader=self)
            with self._lock:
                tree = self._preloaded_trees.setdefault(locator, tree)
        return tree

    def _translate(self, locator: JsonRef) -> JsonRef:
        fetch_ref = self._translator.translate(locator)
        if fetch_ref != locator:
            logger.debug("%s translated to %s", locator, fetch_ref)
        if not fetch_ref.is_absolute():
            raise _error("load.notAbsolute", LogLevel.ERROR, uri=str(fetch_ref))
        return fetch_ref

    def _fetch(self, fetch_ref: JsonRef) -> Any:
        fetcher = self._config.fetchers.get(fetch_ref.scheme)
        if fetcher is None:
            raise _error("load.noFetcher", LogLevel.FATAL, scheme=fetch_ref.scheme)
        logger.debug("fetching %s with %r", fetch_ref.uri, fetcher)
        raw = fetcher.fetch(fetch_ref.uri)
        try:
            return parse_json(raw, self._config.parser_features)
        except ValueError as exc:
            error = _error("load.parseFailure", LogLevel.ERROR, uri=fetch_ref.uri)
            error.processing_message.put("exceptionMessage", str(exc))
            raise error from exc

    def __repr__(self) -> str:
        return (
            f"SchemaLoader(schemes={sorted(self._config.fetchers)!r}, "
            f"dereferencing={self._config.dereferencing.value!r})"
        )
