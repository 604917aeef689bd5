"""URI translation applied before fetching.

Three rules, applied in this order:

1. *Schema redirections*: an exact source URI is replaced by a target URI.
   Redirections are applied transitively; a redirection loop stops at the
   last URI not yet seen.
2. *Path redirections*: a URI starting with a registered path prefix (an
   absolute URI ending with ``/``) gets that prefix swapped.
3. *Namespace*: any remaining relative URI is resolved against the
   namespace (by default ``file:`` URI of the working directory).

Example::

    cfg = (
        URITranslatorConfiguration.new_builder()
        .set_namespace("http://example.com/schemas/")
        .add_path_redirect("http://example.com/schemas/", "resource:/schemas/")
        .freeze()
    )
    translator = URITranslator(cfg)
    translator.translate("http://example.com/schemas/a.json")
    # JsonRef('resource:/schemas/a.json#')
    translator.translate("draft/b.json")
    # JsonRef('http://example.com/schemas/draft/b.json#')
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from json_schema_core.messages import CORE_BUNDLE
from json_schema_core.ref import JsonRef

__all__ = [
    "URITranslator",
    "URITranslatorConfiguration",
    "URITranslatorConfigurationBuilder",
]


def _cwd_namespace() -> JsonRef:
    return JsonRef.parse(Path.cwd().as_uri() + "/")


def _absolute_locator(uri: str | JsonRef, key: str) -> JsonRef:
    ref = JsonRef.parse(CORE_BUNDLE.check_not_null(uri, "translator.nullURI"))
    if not ref.locator.is_absolute():
        raise ValueError(CORE_BUNDLE.printf(key, uri))
    return ref.locator


@dataclass(frozen=True, slots=True)
class URITranslatorConfiguration:
    """Frozen translation rules. Build one with ``new_builder()``."""

    namespace: JsonRef | None = None
    path_redirects: Mapping[JsonRef, JsonRef] = field(
        default_factory=lambda: MappingProxyType({})
    )
    schema_redirects: Mapping[JsonRef, JsonRef] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @staticmethod
    def new_builder() -> URITranslatorConfigurationBuilder:
        return URITranslatorConfigurationBuilder()

    @classmethod
    def by_default(cls) -> URITranslatorConfiguration:
        return cls()

    def thaw(self) -> URITranslatorConfigurationBuilder:
        """Return a new builder seeded with this configuration."""
        return URITranslatorConfigurationBuilder(self)


class URITranslatorConfigurationBuilder:
    """Mutable builder of ``URITranslatorConfiguration``."""

    def __init__(self, source: URITranslatorConfiguration | None = None) -> None:
        self._namespace: JsonRef | None = None
        self._path_redirects: dict[JsonRef, JsonRef] = {}
        self._schema_redirects: dict[JsonRef, JsonRef] = {}
        if source is not None:
            self._namespace = source.namespace
            self._path_redirects.update(source.path_redirects)
            self._schema_redirects.update(source.schema_redirects)

    def set_namespace(self, uri: str | JsonRef) -> URITranslatorConfigurationBuilder:
        """Set the base for relative URIs; it must be absolute.

        Raises:
            ValueError: If ``uri`` is ``None`` or not absolute.
        """
        self._namespace = _absolute_locator(uri, "translator.illegalNamespace")
        return self

    def add_path_redirect(
        self, source: str | JsonRef, target: str | JsonRef
    ) -> URITranslatorConfigurationBuilder:
        """Redirect every URI under ``source`` to the same path under ``target``.

        Raises:
            ValueError: If either URI is not absolute, does not end with
                ``/``, or both are identical.
        """
        source_ref = _absolute_locator(source, "translator.illegalPathURI")
        target_ref = _absolute_locator(target, "translator.illegalPathURI")
        for ref in (source_ref, target_ref):
            if not ref.path.endswith("/"):
                raise ValueError(CORE_BUNDLE.printf("translator.illegalPathURI", ref.uri))
        if source_ref == target_ref:
            raise ValueError(CORE_BUNDLE.printf("translator.sameURI", source_ref.uri))
        self._path_redirects[source_ref] = target_ref
        return self

    def add_schema_redirect(
        self, source: str | JsonRef, target: str | JsonRef
    ) -> URITranslatorConfigurationBuilder:
        """Redirect one exact (absolute) URI to another.

        Raises:
            ValueError: If either URI is not absolute, or both are identical.
        """
        source_ref = _absolute_locator(source, "load.notAbsolute")
        target_ref = _absolute_locator(target, "load.notAbsolute")
        if source_ref == target_ref:
            raise ValueError(CORE_BUNDLE.printf("translator.sameURI", source_ref.uri))
        self._schema_redirects[source_ref] = target_ref
        return self

    def freeze(self) -> URITranslatorConfiguration:
        return URITranslatorConfiguration(
            namespace=self._namespace,
            path_redirects=MappingProxyType(dict(self._path_redirects)),
            schema_redirects=MappingProxyType(dict(self._schema_redirects)),
        )


class URITranslator:
    """Applies a ``URITranslatorConfiguration`` to URIs about to be fetched."""

    def __init__(self, config: URITranslatorConfiguration | None = None) -> None:
        self._config = config if config is not None else URITranslatorConfiguration()

    @property
    def config(self) -> URITranslatorConfiguration:
        return self._config

    def translate(self, uri: str | JsonRef) -> JsonRef:
        """Return the URI to actually fetch for ``uri``. The fragment is kept."""
        ref = JsonRef.parse(uri)
        pointer = ref.fragment
        locator = ref.locator

        seen: set[JsonRef] = set()
        redirects = self._config.schema_redirects
        while locator in redirects and locator not in seen:
            seen.add(locator)
            locator = redirects[locator]

        for source, target in self._config.path_redirects.items():
            if locator.uri.startswith(source.uri):
                locator = JsonRef.parse(target.uri + locator.uri[len(source.uri) :])
                break

        if not locator.scheme:
            namespace = self._config.namespace
            locator = (namespace if namespace is not None else _cwd_namespace()).resolve(locator)

        if not pointer:
            return locator
        return locator.resolve("#" + str(ref).split("#", 1)[1])
