"""Exception hierarchy for json-schema-core.

Two families live here:

- ``ProcessingError`` and its subclasses carry a structured
  ``ProcessingMessage``. They are raised for loading failures, dangling
  pointers and dispatch failures, and are what
  ``ProcessingMessage.as_exception()`` produces.
- ``ValueError`` subclasses signal configuration mistakes (malformed URIs,
  null builder arguments). These surface at construction or build time and
  are never recoverable at runtime.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from json_schema_core.report.message import ProcessingMessage

__all__ = [
    "FetchError",
    "InvalidPointerError",
    "InvalidReferenceError",
    "JsonSchemaCoreError",
    "LoadingError",
    "NoSuitableProcessorError",
    "PointerNotFoundError",
    "ProcessingError",
    "ProcessorBuildError",
]


class JsonSchemaCoreError(Exception):
    """Base class of every exception raised by this package."""


class ProcessingError(JsonSchemaCoreError):
    """An error carrying a structured ``ProcessingMessage``.

    Args:
        message: Either a ready ``ProcessingMessage`` or a plain string, which
            is wrapped into a new message at ``FATAL`` level.
    """

    def __init__(self, message: ProcessingMessage | str | None = None) -> None:
        from json_schema_core.report.levels import LogLevel
        from json_schema_core.report.message import ProcessingMessage

        if message is None:
            message = ProcessingMessage().set_log_level(LogLevel.FATAL)
        elif isinstance(message, str):
            message = (
                ProcessingMessage().set_log_level(LogLevel.FATAL).set_message(message)
            )
        self.processing_message: ProcessingMessage = message
        super().__init__(message.message)

    def __str__(self) -> str:
        return self.processing_message.message


class LoadingError(ProcessingError):
    """A document or reference could not be loaded."""


class FetchError(LoadingError):
    """A fetcher failed to retrieve raw content for a URI."""


class PointerNotFoundError(ProcessingError):
    """A JSON Pointer does not designate any value in a document."""


class NoSuitableProcessorError(ProcessingError):
    """No processor (and no default) is registered for a dispatch key."""

    def __init__(self, message: ProcessingMessage, key: Any) -> None:
        super().__init__(message)
        self.key = key


class InvalidReferenceError(JsonSchemaCoreError, ValueError):
    """A string is not a valid URI reference."""


class InvalidPointerError(JsonSchemaCoreError, ValueError):
    """A string is not a valid JSON Pointer (RFC 6901)."""


class ProcessorBuildError(JsonSchemaCoreError, ValueError):
    """A processor map was given a null key, processor or classifier."""
