"""Message catalogs.

A ``MessageBundle`` maps message keys to ``%``-style templates. Library code
only ever refers to keys; the texts live in ``CORE_BUNDLE``. Callers that
need other wordings (or other languages) build their own bundle and hand it
to the components that accept one.

Example::

    from json_schema_core.messages import MessageBundle

    bundle = MessageBundle({"greeting": "hello %s"})
    bundle.printf("greeting", "world")   # "hello world"
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, TypeVar

__all__ = ["CORE_BUNDLE", "MessageBundle"]

T = TypeVar("T")


class MessageBundle:
    """Immutable key -> template catalog.

    Unknown keys are not an error: the key itself is returned, so a missing
    entry is visible in output instead of crashing a report.
    """

    def __init__(self, messages: Mapping[str, str]) -> None:
        self._messages: Mapping[str, str] = MappingProxyType(dict(messages))

    def __contains__(self, key: object) -> bool:
        return key in self._messages

    def get_message(self, key: str) -> str:
        """Return the raw template registered under ``key``."""
        return self._messages.get(key, key)

    def printf(self, key: str, *args: Any) -> str:
        """Return the template for ``key`` with ``args`` substituted.

        Substitution failures leave the template untouched.
        """
        template = self.get_message(key)
        try:
            return template % args
        except (TypeError, ValueError):
            return template

    def check_not_null(self, obj: T | None, key: str) -> T:
        """Return ``obj``, or raise ``ValueError`` with the text for ``key``."""
        if obj is None:
            raise ValueError(self.get_message(key))
        return obj

    def with_messages(self, messages: Mapping[str, str]) -> MessageBundle:
        """Return a new bundle with ``messages`` layered over this one."""
        return MessageBundle({**self._messages, **messages})


CORE_BUNDLE = MessageBundle(
    {
        # messages and reports
        "processing.nullKey": "key must not be null",
        "processing.nullLevel": "log level must not be null",
        "processing.nullExceptionProvider": "exception provider must not be null",
        "processing.nullProcessor": "processor must not be null",
        "processing.nullFunction": "classifier function must not be null",
        "processing.noSuitableProcessor": "no suitable processor found for key %s",
        "processing.nullReport": "report must not be null",
        "jsonUtils.nullArgument": "argument must not be null",
        # references and pointers
        "ref.invalid": "invalid URI reference %s",
        "ref.danglingRef": "JSON Reference %s cannot be resolved",
        "ref.loop": "JSON Reference loop detected",
        "ref.noLoader": "no loader available to resolve %s",
        "pointer.illegal": "illegal JSON Pointer %s",
        "pointer.notFound": "no value at JSON Pointer %s",
        # loading
        "load.noFetcher": "unsupported URI scheme %s",
        "load.fetchFailure": "cannot fetch content from %s",
        "load.parseFailure": "content at %s is not valid JSON",
        "load.notAbsolute": "cannot load a non absolute URI %s",
        "loadingConfig.nullScheme": "scheme must not be null",
        "loadingConfig.illegalScheme": "illegal URI scheme %s",
        "loadingConfig.nullFetcher": "fetcher must not be null",
        "loadingConfig.nullDereferencing": "dereferencing mode must not be null",
        "loadingConfig.nullURI": "URI must not be null",
        "loadingConfig.nullSchema": "schema must not be null",
        "loadingConfig.noSchemaId": "cannot preload a schema without an absolute id",
        "loadingConfig.duplicateURI": "URI %s is already registered",
        "loadingConfig.nullFeature": "parser feature must not be null",
        "loadingConfig.negativeCacheSize": "cache size must be at least 1",
        "translator.nullConfiguration": "URI translator configuration must not be null",
        "translator.nullURI": "URI must not be null",
        "translator.illegalNamespace": "namespace %s must be an absolute URI",
        "translator.illegalPathURI": "path URI %s must be absolute and end with /",
        "translator.sameURI": "source and target URIs are identical (%s)",
        # descriptors, selector, analyzer
        "schemaDescriptor.nullLocator": "descriptor locator must not be null",
        "schemaDescriptor.nullDescriptor": "keyword must not be null",
        "keyword.nullName": "keyword name must not be null",
        "schemaSelector.nullDescriptor": "descriptor must not be null",
        "schemaSelector.noDefault": "no default descriptor was set",
        "schemaSelector.unknownDescriptor": "no descriptor registered for %s",
        "core.notASchema": "value has incorrect type (found %s, expected object)",
        "core.unknownKeywords": (
            "the following keywords are unknown and will be ignored: %s"
        ),
    }
)
