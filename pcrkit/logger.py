"""Logger port, log vocabulary, and adapters for the standard logging module."""

from __future__ import annotations

import abc
import logging
import threading
from enum import IntEnum
from typing import Iterable, NamedTuple

from .errors import TpmkitError


class LogLevel(IntEnum):
    """Severity of a log record, ordered from least to most severe."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4


class LogField(NamedTuple):
    """One structured key/value pair attached to a log record."""

    key: str
    value: str


_CONTROL_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t", "\\": "\\\\", '"': '\\"'}
_NEEDS_QUOTING = set(' "=\\')


def _escape_value(value: str) -> str:
    """Render a field value so it cannot break the single-line record format."""
    text = str(value)
    if text and all(ch.isprintable() and ch not in _NEEDS_QUOTING for ch in text):
        return text
    escaped = "".join(
        _CONTROL_ESCAPES.get(ch, ch if ch.isprintable() else f"\\x{ord(ch):02x}")
        for ch in text
    )
    return f'"{escaped}"'


def _render_fields(fields: Iterable[LogField | tuple[str, str]]) -> str:
    """Render fields as " key=value" pairs appended after a message."""
    return "".join(f" {key}={_escape_value(value)}" for key, value in fields)


class Logger(abc.ABC):
    """Port through which the package emits structured log records.

    Implementations never raise from log() or flush().
    """

    @abc.abstractmethod
    def log(
        self,
        level: LogLevel,
        message: str,
        fields: Iterable[LogField | tuple[str, str]] = (),
    ) -> None:
        """Emit one record; failures are swallowed."""

    def flush(self) -> None:
        """Flush buffered records; the default does nothing."""


class NoopLogger(Logger):
    """Logger that discards every record."""

    def log(
        self,
        level: LogLevel,
        message: str,
        fields: Iterable[LogField | tuple[str, str]] = (),
    ) -> None:
        """Discard the record."""


TRACE_LEVEL = 5

_STDLIB_LEVELS = {
    LogLevel.TRACE: TRACE_LEVEL,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


class StdlibLogger(Logger):
    """Adapter that forwards records to a standard-library logging.Logger."""

    def __init__(self, sink: logging.Logger) -> None:
        if sink is None:
            raise TpmkitError("StdlibLogger sink must not be null")
        self._sink = sink
        self._lock = threading.Lock()

    @property
    def sink(self) -> logging.Logger:
        """The wrapped standard-library logger."""
        return self._sink

    def log(
        self,
        level: LogLevel,
        message: str,
        fields: Iterable[LogField | tuple[str, str]] = (),
    ) -> None:
        """Render the record and pass it to the sink if its level is enabled."""
        try:
            stdlib_level = _STDLIB_LEVELS.get(level, logging.INFO)
            with self._lock:
                if not self._sink.isEnabledFor(stdlib_level):
                    return
                rendered = f"{message}{_render_fields(fields)}"
                self._sink.log(stdlib_level, rendered)
        except Exception:  # noqa: BLE001 - the logger port never raises
            pass

    def flush(self) -> None:
        """Flush every handler attached to the sink."""
        try:
            with self._lock:
                for handler in self._sink.handlers:
                    handler.flush()
        except Exception:  # noqa: BLE001 - the logger port never raises
            pass