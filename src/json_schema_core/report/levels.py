"""LogLevel: ordered severity of processing messages."""

from __future__ import annotations

import logging
from enum import StrEnum, auto

__all__ = ["LogLevel"]


class LogLevel(StrEnum):
    """Severity of a ``ProcessingMessage``, from least to most severe.

    ``NONE`` sits above ``FATAL``: using it as a threshold means "never".
    Members compare by severity, not alphabetically::

        LogLevel.DEBUG < LogLevel.ERROR < LogLevel.NONE   # True
    """

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()
    FATAL = auto()
    NONE = auto()

    @property
    def severity(self) -> int:
        """Position of this level in the severity order (DEBUG is 0)."""
        return _ORDER[self]

    @property
    def python_level(self) -> int:
        """The matching ``logging`` module level."""
        return _PYTHON_LEVELS[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity <= other.severity

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity > other.severity

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity >= other.severity


_ORDER = {level: index for index, level in enumerate(LogLevel)}

_PYTHON_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.FATAL: logging.CRITICAL,
    LogLevel.NONE: logging.CRITICAL + 10,
}
