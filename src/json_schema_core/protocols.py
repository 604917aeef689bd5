"""Plug-in protocols for json-schema-core extension points.

Every extension point is a structural ``Protocol``: fetchers, syntax checkers,
pointer collectors and processors need no base class, any object with the
right method passes ``isinstance`` checks.

Example::

    from json_schema_core.protocols import Fetcher

    class MemoryFetcher:
        def __init__(self, documents: dict[str, bytes]) -> None:
            self._documents = documents

        def fetch(self, uri: str) -> bytes:
            return self._documents[uri]

    assert isinstance(MemoryFetcher({}), Fetcher)  # True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from json_schema_core.exceptions import ProcessingError
    from json_schema_core.messages import MessageBundle
    from json_schema_core.report import ProcessingMessage, ProcessingReport
    from json_schema_core.tree import SchemaTree
    from json_schema_core.walk import PointerSet

IN_contra = TypeVar("IN_contra", contravariant=True)
OUT_co = TypeVar("OUT_co", covariant=True)


@runtime_checkable
class AsJson(Protocol):
    """Objects with a (possibly partial) JSON representation."""

    def as_json(self) -> Any: ...


@runtime_checkable
class Fetcher(Protocol):
    """Retrieves raw content for a URI of one scheme.

    ``fetch`` must return the raw bytes (or text) at ``uri`` and raise
    ``json_schema_core.exceptions.FetchError`` when it cannot. Timeouts and
    cancellation are the fetcher's business.
    """

    def fetch(self, uri: str) -> bytes: ...


@runtime_checkable
class SyntaxChecker(Protocol):
    """Checks the shape of one keyword's value in a schema.

    ``pointers`` holds what the keyword's own pointer collector found.
    Findings go to ``report``; texts are looked up in ``bundle``.
    """

    def check_syntax(
        self,
        pointers: PointerSet,
        bundle: MessageBundle,
        report: ProcessingReport,
        tree: SchemaTree,
    ) -> None: ...


@runtime_checkable
class PointerCollector(Protocol):
    """Adds to ``pointers`` the relative pointers of one keyword's sub-schemas."""

    def collect(self, pointers: PointerSet, tree: SchemaTree) -> None: ...


@runtime_checkable
class Processor(Protocol[IN_contra, OUT_co]):
    """Turns an input into an output, reporting along the way."""

    def process(self, report: ProcessingReport, input: IN_contra) -> OUT_co: ...


@runtime_checkable
class ExceptionProvider(Protocol):
    """Builds the exception that ``ProcessingMessage.as_exception()`` returns.

    Exception classes taking a single message argument qualify as is.
    """

    def __call__(self, message: ProcessingMessage) -> ProcessingError: ...
