"""ProcessingMessage: one structured diagnostic.

A message is an ordered mapping of string keys to JSON values. It always
holds a ``level`` entry and, once set, a ``message`` entry. Alongside the
mapping it keeps a positional argument list: every ``put_argument`` call
appends to that list and re-renders the ``%``-template given to
``set_message``. Calling ``set_message`` again clears the arguments::

    msg = ProcessingMessage().set_message("foo %s").put_argument("x", "here")
    msg.message                   # "foo here"
    msg.as_json()["x"]            # "here"

    msg.set_message("another %s message")
    msg.message                   # "another %s message" (arguments cleared)

If the template cannot be rendered with the current arguments (too few,
too many, wrong types) the text is left as it was.

All mutators return the message itself. Messages are not thread safe.
"""

from __future__ import annotations

import warnings
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from json_schema_core.exceptions import ProcessingError
from json_schema_core.json_utils import deep_copy, to_json, to_json_value
from json_schema_core.messages import CORE_BUNDLE
from json_schema_core.report.levels import LogLevel

if TYPE_CHECKING:
    from json_schema_core.protocols import ExceptionProvider

__all__ = ["ProcessingMessage"]

_NO_MESSAGE = "(no message)"


class ProcessingMessage:
    """Fluent builder of a structured processing message.

    A new message has level ``INFO`` and raises a plain ``ProcessingError``
    from ``as_exception()`` until another provider is set.
    """

    def __init__(self) -> None:
        self._map: dict[str, Any] = {}
        self._args: list[Any] = []
        self._template: str | None = None
        self._exception_provider: ExceptionProvider = ProcessingError
        self._level: LogLevel = LogLevel.INFO
        self.set_log_level(LogLevel.INFO)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def message(self) -> str:
        """The rendered main message, or ``"(no message)"``."""
        text = self._map.get("message")
        return text if isinstance(text, str) else _NO_MESSAGE

    @property
    def level(self) -> LogLevel:
        return self._level

    def get(self, key: str, default: Any = None) -> Any:
        """Return a copy of the value stored under ``key``."""
        return deep_copy(self._map.get(key, default))

    def __contains__(self, key: object) -> bool:
        return key in self._map

    def __iter__(self) -> Iterator[str]:
        return iter(dict(self._map))

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_message(self, message: str | None) -> ProcessingMessage:
        """Set the main message template and clear the argument list."""
        self._args.clear()
        self._template = message
        self._map["message"] = message
        return self

    def set_log_level(self, level: LogLevel) -> ProcessingMessage:
        CORE_BUNDLE.check_not_null(level, "processing.nullLevel")
        self._level = LogLevel(level)
        self._map["level"] = self._level.value
        return self

    def set_exception_provider(self, provider: ExceptionProvider) -> ProcessingMessage:
        """Set the callable used by ``as_exception()`` to build an exception."""
        CORE_BUNDLE.check_not_null(provider, "processing.nullExceptionProvider")
        self._exception_provider = provider
        return self

    def put(self, key: str, value: Any) -> ProcessingMessage:
        """Store ``value`` under ``key`` after converting it to a JSON value.

        ``None`` is stored as JSON null. Enums contribute their value, objects
        with ``as_json()`` their JSON form, iterables become arrays and other
        objects are stringified.

        Raises:
            ValueError: If ``key`` is ``None``.
        """
        CORE_BUNDLE.check_not_null(key, "processing.nullKey")
        self._map[key] = to_json_value(value)
        return self

    def put_json(self, key: str, value: Any) -> ProcessingMessage:
        """Store a copy of the JSON value ``value`` under ``key`` as is."""
        CORE_BUNDLE.check_not_null(key, "processing.nullKey")
        self._map[key] = deep_copy(value)
        return self

    def put_serialized(self, key: str, obj: Any) -> ProcessingMessage:
        """Store the serialized form of ``obj`` (see ``json_utils.to_json``)."""
        return self.put_json(key, to_json(obj))

    def put_node(self, key: str | None, value: Any) -> ProcessingMessage:
        """Store a JSON value, silently ignoring a ``None`` key.

        .. deprecated:: use ``put_json`` instead, which rejects ``None`` keys.
        """
        warnings.warn(
            "put_node() is deprecated, use put_json() instead",
            DeprecationWarning,
            stacklevel=2,
        )
        if key is None:
            return self
        self._map[key] = deep_copy(value)
        return self

    def put_argument(self, key: str, value: Any) -> ProcessingMessage:
        """Store ``value`` under ``key`` and use it as the next template argument."""
        self._add_argument(value)
        return self.put(key, value)

    def _add_argument(self, value: Any) -> None:
        if self._template is None:
            return
        self._args.append(value)
        try:
            self._map["message"] = self._template % tuple(self._args)
        except (TypeError, ValueError):
            pass

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def as_json(self) -> dict[str, Any]:
        """Return a copy of the key/value mapping."""
        return deep_copy(self._map)

    def as_exception(self) -> ProcessingError:
        """Build (not raise) an exception out of this message."""
        return self._exception_provider(self)

    def copy(self) -> ProcessingMessage:
        """Return an independent copy, exception provider included."""
        other = ProcessingMessage()
        other._map = deep_copy(self._map)
        other._args = list(self._args)
        other._template = self._template
        other._level = self._level
        other._exception_provider = self._exception_provider
        return other

    def __str__(self) -> str:
        fields = [
            f"\n    {key}: {value!r}"
            for key, value in self._map.items()
            if key not in ("message", "level")
        ]
        return f"{self._level}: {self.message}{''.join(fields)}"

    def __repr__(self) -> str:
        return f"ProcessingMessage({self._map!r})"
