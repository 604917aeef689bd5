"""ProcessorMap: route inputs to processors by a computed key.

Example::

    from json_schema_core.processing import ProcessorMap

    dispatcher = (
        ProcessorMap(lambda tree: tree.node.get("$schema"))
        .add_entry("http://json-schema.org/draft-04/schema#", draft4)
        .set_default_processor(latest)
        .build()
    )
    dispatcher.process(report, tree)
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Generic, TypeVar

from json_schema_core.exceptions import NoSuitableProcessorError, ProcessorBuildError
from json_schema_core.messages import CORE_BUNDLE
from json_schema_core.report import LogLevel, ProcessingMessage

if TYPE_CHECKING:
    from json_schema_core.protocols import Processor
    from json_schema_core.report import ProcessingReport

__all__ = ["ProcessorMap", "ProcessorMapper"]

K = TypeVar("K", bound=Hashable)
IN = TypeVar("IN")
OUT = TypeVar("OUT")


def _build_error(key: str) -> ProcessorBuildError:
    return ProcessorBuildError(CORE_BUNDLE.get_message(key))


class ProcessorMap(Generic[K, IN, OUT]):
    """Mutable builder of a keyed processor dispatcher.

    Args:
        classifier: Function mapping an input to its dispatch key.
    """

    def __init__(self, classifier: Callable[[IN], K] | None) -> None:
        self._classifier = classifier
        self._processors: dict[K, Processor[IN, OUT]] = {}
        self._default: Processor[IN, OUT] | None = None

    def add_entry(self, key: K, processor: Processor[IN, OUT]) -> ProcessorMap[K, IN, OUT]:
        """Register ``processor`` for ``key``, replacing any previous one.

        Raises:
            ProcessorBuildError: If ``key`` or ``processor`` is ``None``.
        """
        if key is None:
            raise _build_error("processing.nullKey")
        if processor is None:
            raise _build_error("processing.nullProcessor")
        self._processors[key] = processor
        return self

    def set_default_processor(
        self, processor: Processor[IN, OUT]
    ) -> ProcessorMap[K, IN, OUT]:
        """Set the processor used when no entry matches the computed key."""
        if processor is None:
            raise _build_error("processing.nullProcessor")
        self._default = processor
        return self

    def build(self) -> ProcessorMapper[K, IN, OUT]:
        """Return an immutable dispatcher over the current entries.

        Raises:
            ProcessorBuildError: If the classifier is ``None``.
        """
        if self._classifier is None:
            raise _build_error("processing.nullFunction")
        return ProcessorMapper(self._processors, self._classifier, self._default)

    get_processor = build


class ProcessorMapper(Generic[K, IN, OUT]):
    """Dispatcher produced by ``ProcessorMap.build()``; itself a ``Processor``."""

    def __init__(
        self,
        processors: Mapping[K, Processor[IN, OUT]],
        classifier: Callable[[IN], K],
        default: Processor[IN, OUT] | None,
    ) -> None:
        self._processors: Mapping[K, Processor[IN, OUT]] = MappingProxyType(
            dict(processors)
        )
        self._classifier = classifier
        self._default = default

    @property
    def processors(self) -> Mapping[K, Processor[IN, OUT]]:
        return self._processors

    def process(self, report: ProcessingReport, input: IN) -> OUT:
        """Run the processor selected by ``classifier(input)``.

        Raises:
            NoSuitableProcessorError: If no processor matches the key and no
                default processor is set. The key is on the exception.
        """
        key = self._classifier(input)
        processor = self._processors.get(key, self._default)
        if processor is None:
            message = (
                ProcessingMessage()
                .set_log_level(LogLevel.FATAL)
                .set_message(CORE_BUNDLE.get_message("processing.noSuitableProcessor"))
                .put_argument("key", key)
            )
            raise NoSuitableProcessorError(message, key)
        return processor.process(report, input)
