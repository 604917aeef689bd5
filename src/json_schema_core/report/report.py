"""Processing reports: ordered collections of messages for one run.

A report has two thresholds:

- the *log level*: messages below it are not retained;
- the *exception threshold*: messages at or above it are raised (through
  ``ProcessingMessage.as_exception()``) instead of being retained.

Independently of both, a report stops being successful as soon as a
message at ``ERROR`` or above goes through it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Any

from json_schema_core.messages import CORE_BUNDLE
from json_schema_core.report.levels import LogLevel
from json_schema_core.report.message import ProcessingMessage

__all__ = ["ListProcessingReport", "LoggingProcessingReport", "ProcessingReport"]


class ProcessingReport(ABC):
    """Base class of all reports.

    Subclasses only decide what "logging" a retained message means by
    implementing ``_log``.

    Args:
        log_level: Minimum level of retained messages. Defaults to ``INFO``.
        exception_threshold: Minimum level of raised messages. Defaults to
            ``NONE``, i.e. never raise.
    """

    def __init__(
        self,
        log_level: LogLevel = LogLevel.INFO,
        exception_threshold: LogLevel = LogLevel.NONE,
    ) -> None:
        self._log_level = CORE_BUNDLE.check_not_null(log_level, "processing.nullLevel")
        self._exception_threshold = CORE_BUNDLE.check_not_null(
            exception_threshold, "processing.nullLevel"
        )
        self._success = True

    @property
    def log_level(self) -> LogLevel:
        return self._log_level

    @property
    def exception_threshold(self) -> LogLevel:
        return self._exception_threshold

    def debug(self, message: ProcessingMessage) -> None:
        self._dispatch(message.set_log_level(LogLevel.DEBUG))

    def info(self, message: ProcessingMessage) -> None:
        self._dispatch(message.set_log_level(LogLevel.INFO))

    def warn(self, message: ProcessingMessage) -> None:
        self._dispatch(message.set_log_level(LogLevel.WARNING))

    def error(self, message: ProcessingMessage) -> None:
        self._dispatch(message.set_log_level(LogLevel.ERROR))

    def fatal(self, message: ProcessingMessage) -> None:
        self._dispatch(message.set_log_level(LogLevel.FATAL))

    def is_success(self) -> bool:
        """False once any message at ``ERROR`` or above has been reported."""
        return self._success

    def merge_with(self, other: ProcessingReport) -> None:
        """Fold the messages and success status of ``other`` into this report.

        Merged messages bypass both thresholds: they already went through
        ``other``'s.
        """
        CORE_BUNDLE.check_not_null(other, "processing.nullReport")
        self._success = self._success and other.is_success()
        for message in other:
            self._log(message)

    def __iter__(self) -> Iterator[ProcessingMessage]:
        return iter(())

    def as_json(self) -> list[dict[str, Any]]:
        return [message.as_json() for message in self]

    def _dispatch(self, message: ProcessingMessage) -> None:
        level = message.level
        if level >= self._exception_threshold:
            raise message.as_exception()
        if level >= LogLevel.ERROR:
            self._success = False
        if level < self._log_level:
            return
        self._log(message)

    @abstractmethod
    def _log(self, message: ProcessingMessage) -> None: ...


class ListProcessingReport(ProcessingReport):
    """Report retaining its messages, in order, in memory."""

    def __init__(
        self,
        log_level: LogLevel = LogLevel.INFO,
        exception_threshold: LogLevel = LogLevel.NONE,
    ) -> None:
        super().__init__(log_level, exception_threshold)
        self._messages: list[ProcessingMessage] = []

    def _log(self, message: ProcessingMessage) -> None:
        self._messages.append(message)

    def __iter__(self) -> Iterator[ProcessingMessage]:
        return iter(list(self._messages))

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return (
            f"ListProcessingReport(success={self._success}, "
            f"messages={len(self._messages)})"
        )


class LoggingProcessingReport(ListProcessingReport):
    """Report retaining its messages and forwarding each to a ``logging.Logger``.

    Args:
        logger: Destination logger. Defaults to this module's logger.
        log_level: See ``ProcessingReport``.
        exception_threshold: See ``ProcessingReport``.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        log_level: LogLevel = LogLevel.INFO,
        exception_threshold: LogLevel = LogLevel.NONE,
    ) -> None:
        super().__init__(log_level, exception_threshold)
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    def _log(self, message: ProcessingMessage) -> None:
        super()._log(message)
        self._logger.log(message.level.python_level, "%s", message)
