"""Loading configuration: a frozen snapshot and its mutable builder.

Example::

    from json_schema_core.load import Dereferencing, LoadingConfiguration

    cfg = (
        LoadingConfiguration.new_builder()
        .add_scheme("mem", MemoryFetcher(documents))
        .preload_schema({"$id": "http://example.com/s.json", "type": "object"})
        .set_dereferencing(Dereferencing.INLINE)
        .freeze()
    )
    later = cfg.thaw().set_enable_cache(False).freeze()   # cfg is unchanged

Every new builder starts with the draft-04 and draft-03 core meta-schemas
preloaded, so ``http://json-schema.org/draft-04/schema#`` loads offline.
"""

from __future__ import annotations

import copy
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from importlib import resources
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from cachetools import cached

from json_schema_core.load.fetchers import FileFetcher, HttpFetcher, ResourceFetcher
from json_schema_core.load.parser import DEFAULT_PARSER_FEATURES, ParserFeature, parse_json
from json_schema_core.load.translator import URITranslatorConfiguration
from json_schema_core.messages import CORE_BUNDLE
from json_schema_core.ref import JsonRef
from json_schema_core.tree import Dereferencing

if TYPE_CHECKING:
    from json_schema_core.protocols import Fetcher

__all__ = ["LoadingConfiguration", "LoadingConfigurationBuilder"]

_SCHEME = re.compile(r"^[a-z][a-z0-9+.\-]*$")

DEFAULT_CACHE_SIZE = 512

_METASCHEMAS = ("draftv4.json", "draftv3.json")


def _default_fetchers() -> dict[str, Fetcher]:
    http = HttpFetcher()
    return {
        "file": FileFetcher(),
        "http": http,
        "https": http,
        "resource": ResourceFetcher(),
    }


def _schema_id(schema: Any) -> str | None:
    if isinstance(schema, dict):
        for name in ("$id", "id"):
            value = schema.get(name)
            if isinstance(value, str):
                return value
    return None


@cached(cache={})
def _core_metaschemas() -> dict[JsonRef, Any]:
    folder = resources.files("json_schema_core").joinpath("metaschemas")
    schemas: dict[JsonRef, Any] = {}
    for name in _METASCHEMAS:
        schema = parse_json(folder.joinpath(name).read_bytes())
        schemas[JsonRef.parse(str(_schema_id(schema))).locator] = schema
    return schemas


def _default_preloads() -> dict[JsonRef, Any]:
    return {uri: copy.deepcopy(doc) for uri, doc in _core_metaschemas().items()}


@dataclass(frozen=True, slots=True)
class LoadingConfiguration:
    """Immutable settings of a ``SchemaLoader``.

    Attributes:
        fetchers: Fetcher per (lowercase) URI scheme.
        translator_config: URI translation rules applied before fetching.
        preloaded_schemas: Documents served without fetching, by locator.
            They are always served, whatever ``enable_cache`` says. The
            draft-04 and draft-03 core meta-schemas are there by default.
        enable_cache: Whether fetched trees are cached.
        cache_size: Maximum number of cached trees (LRU eviction).
        dereferencing: Kind of tree the loader builds.
        parser_features: Parser behaviors turned on.
    """

    fetchers: Mapping[str, Fetcher] = field(
        default_factory=lambda: MappingProxyType(_default_fetchers())
    )
    translator_config: URITranslatorConfiguration = field(
        default_factory=URITranslatorConfiguration
    )
    preloaded_schemas: Mapping[JsonRef, Any] = field(
        default_factory=lambda: MappingProxyType(_default_preloads())
    )
    enable_cache: bool = True
    cache_size: int = DEFAULT_CACHE_SIZE
    dereferencing: Dereferencing = Dereferencing.CANONICAL
    parser_features: frozenset[ParserFeature] = DEFAULT_PARSER_FEATURES

    @staticmethod
    def new_builder() -> LoadingConfigurationBuilder:
        return LoadingConfigurationBuilder()

    @classmethod
    def by_default(cls) -> LoadingConfiguration:
        return LoadingConfigurationBuilder().freeze()

    def thaw(self) -> LoadingConfigurationBuilder:
        """Return a new builder seeded with this configuration."""
        return LoadingConfigurationBuilder(self)


class LoadingConfigurationBuilder:
    """Mutable builder of ``LoadingConfiguration``.

    Every setter validates its arguments and raises ``ValueError`` on
    ``None`` or otherwise illegal input, so mistakes surface while the
    configuration is being built rather than while loading.
    """

    def __init__(self, source: LoadingConfiguration | None = None) -> None:
        if source is None:
            self._fetchers: dict[str, Fetcher] = _default_fetchers()
            self._translator_config = URITranslatorConfiguration()
            self._preloaded: dict[JsonRef, Any] = _default_preloads()
            self._enable_cache = True
            self._cache_size = DEFAULT_CACHE_SIZE
            self._dereferencing = Dereferencing.CANONICAL
            self._parser_features: set[ParserFeature] = set(DEFAULT_PARSER_FEATURES)
        else:
            self._fetchers = dict(source.fetchers)
            self._translator_config = source.translator_config
            self._preloaded = {
                uri: copy.deepcopy(doc) for uri, doc in source.preloaded_schemas.items()
            }
            self._enable_cache = source.enable_cache
            self._cache_size = source.cache_size
            self._dereferencing = source.dereferencing
            self._parser_features = set(source.parser_features)

    # ------------------------------------------------------------------
    # Fetchers
    # ------------------------------------------------------------------

    def add_scheme(self, scheme: str, fetcher: Fetcher) -> LoadingConfigurationBuilder:
        """Register ``fetcher`` for ``scheme``, replacing any previous one."""
        CORE_BUNDLE.check_not_null(scheme, "loadingConfig.nullScheme")
        CORE_BUNDLE.check_not_null(fetcher, "loadingConfig.nullFetcher")
        normalized = scheme.lower()
        if not _SCHEME.match(normalized):
            raise ValueError(CORE_BUNDLE.printf("loadingConfig.illegalScheme", scheme))
        self._fetchers[normalized] = fetcher
        return self

    def remove_scheme(self, scheme: str) -> LoadingConfigurationBuilder:
        CORE_BUNDLE.check_not_null(scheme, "loadingConfig.nullScheme")
        self._fetchers.pop(scheme.lower(), None)
        return self

    # ------------------------------------------------------------------
    # Cache and tree building
    # ------------------------------------------------------------------

    def set_enable_cache(self, enable_cache: bool) -> LoadingConfigurationBuilder:
        self._enable_cache = enable_cache
        return self

    def set_cache_size(self, cache_size: int) -> LoadingConfigurationBuilder:
        if cache_size < 1:
            raise ValueError(CORE_BUNDLE.get_message("loadingConfig.negativeCacheSize"))
        self._cache_size = cache_size
        return self

    def set_dereferencing(self, dereferencing: Dereferencing) -> LoadingConfigurationBuilder:
        CORE_BUNDLE.check_not_null(dereferencing, "loadingConfig.nullDereferencing")
        self._dereferencing = Dereferencing(dereferencing)
        return self

    # ------------------------------------------------------------------
    # URIs and preloaded documents
    # ------------------------------------------------------------------

    def set_uri_translator_configuration(
        self, config: URITranslatorConfiguration
    ) -> LoadingConfigurationBuilder:
        CORE_BUNDLE.check_not_null(config, "translator.nullConfiguration")
        self._translator_config = config
        return self

    def preload_schema(
        self, schema: Any, uri: str | JsonRef | None = None
    ) -> LoadingConfigurationBuilder:
        """Serve ``schema`` for ``uri`` without ever fetching it.

        Without ``uri``, the schema's own ``$id`` (or ``id``) is used.

        Raises:
            ValueError: If ``schema`` is ``None``, no absolute URI is
                available, or the URI is already preloaded.
        """
        CORE_BUNDLE.check_not_null(schema, "loadingConfig.nullSchema")
        if uri is None:
            uri = _schema_id(schema)
            if uri is None:
                raise ValueError(CORE_BUNDLE.get_message("loadingConfig.noSchemaId"))
        locator = JsonRef.parse(uri).locator
        if not locator.is_absolute():
            raise ValueError(CORE_BUNDLE.get_message("loadingConfig.noSchemaId"))
        if locator in self._preloaded:
            raise ValueError(CORE_BUNDLE.printf("loadingConfig.duplicateURI", locator.uri))
        self._preloaded[locator] = copy.deepcopy(schema)
        return self

    # ------------------------------------------------------------------
    # Parser
    # ------------------------------------------------------------------

    def add_parser_feature(self, feature: ParserFeature) -> LoadingConfigurationBuilder:
        CORE_BUNDLE.check_not_null(feature, "loadingConfig.nullFeature")
        self._parser_features.add(ParserFeature(feature))
        return self

    def remove_parser_feature(self, feature: ParserFeature) -> LoadingConfigurationBuilder:
        CORE_BUNDLE.check_not_null(feature, "loadingConfig.nullFeature")
        self._parser_features.discard(ParserFeature(feature))
        return self

    def freeze(self) -> LoadingConfiguration:
        """Return an immutable snapshot; later builder changes do not affect it."""
        return LoadingConfiguration(
            fetchers=MappingProxyType(dict(self._fetchers)),
            translator_config=self._translator_config,
            preloaded_schemas=MappingProxyType(
                {uri: copy.deepcopy(doc) for uri, doc in self._preloaded.items()}
            ),
            enable_cache=self._enable_cache,
            cache_size=self._cache_size,
            dereferencing=self._dereferencing,
            parser_features=frozenset(self._parser_features),
        )
