"""Logger adapter that writes timestamped records to text streams."""

from __future__ import annotations

import os
import sys
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, TextIO

from .logger import Logger, LogField, LogLevel, _render_fields


class ColorMode(Enum):
    """When to colour the level label with ANSI sequences."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


@dataclass
class StdioLoggerOptions:
    """Construction options for StdioLogger.

    Streams default to sys.stdout and sys.stderr; min_level None logs everything.
    """

    color: ColorMode = ColorMode.AUTO
    out: TextIO | None = None
    err: TextIO | None = None
    min_level: LogLevel | None = None


_RESET = "\x1b[0m"

_ANSI = {
    LogLevel.TRACE: "\x1b[2m",
    LogLevel.DEBUG: "\x1b[36m",
    LogLevel.INFO: "\x1b[32m",
    LogLevel.WARN: "\x1b[33m",
    LogLevel.ERROR: "\x1b[31m",
}

_LABELS = {
    LogLevel.TRACE: "TRACE",
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO ",
    LogLevel.WARN: "WARN ",
    LogLevel.ERROR: "ERROR",
}

_FALLBACK_TIMESTAMP = "1970-01-01T00:00:00.000Z"


def _timestamp() -> str:
    try:
        now = datetime.now(timezone.utc)
        return f"{now:%Y-%m-%dT%H:%M:%S}.{now.microsecond // 1000:03d}Z"
    except (OverflowError, OSError, ValueError):
        return _FALLBACK_TIMESTAMP


def _env_is_set(name: str) -> bool:
    return bool(os.environ.get(name))


def _is_tty_stream(stream: TextIO) -> bool:
    if stream is not sys.stdout and stream is not sys.stderr:
        return False
    try:
        return stream.isatty()
    except (AttributeError, ValueError, OSError):
        return False


def _should_colorize(mode: ColorMode, stream: TextIO) -> bool:
    if mode is ColorMode.ALWAYS:
        return True
    if mode is ColorMode.NEVER:
        return False
    if _env_is_set("NO_COLOR"):
        return False
    if _env_is_set("FORCE_COLOR"):
        return True
    return _is_tty_stream(stream)


class StdioLogger(Logger):
    """Writes one line per record: timestamp, level label, message and fields.

    Warnings and errors go to the error stream, everything else to the output
    stream. Records are written and flushed under a lock.
    """

    def __init__(self, options: StdioLoggerOptions | None = None) -> None:
        opts = options if options is not None else StdioLoggerOptions()
        self._color = opts.color
        self._out = opts.out if opts.out is not None else sys.stdout
        self._err = opts.err if opts.err is not None else sys.stderr
        self._min_level = opts.min_level
        self._lock = threading.Lock()

    def _stream_for(self, level: LogLevel) -> TextIO:
        return self._err if level in (LogLevel.WARN, LogLevel.ERROR) else self._out

    def log(
        self,
        level: LogLevel,
        message: str,
        fields: Iterable[LogField | tuple[str, str]] = (),
    ) -> None:
        """Format and write one record; failures are swallowed."""
        try:
            with self._lock:
                if self._min_level is not None and level < self._min_level:
                    return
                stream = self._stream_for(level)
                label = f"[{_LABELS.get(level, 'INFO ')}]"
                if _should_colorize(self._color, stream):
                    label = f"{_ANSI.get(level, '')}{label}{_RESET}"
                record = f"{_timestamp()} {label} {message}{_render_fields(fields)}"
                stream.write(record + "\n")
                stream.flush()
        except Exception:  # noqa: BLE001 - the logger port never raises
            pass

    def flush(self) -> None:
        """Flush both streams."""
        try:
            with self._lock:
                self._out.flush()
                self._err.flush()
        except Exception:  # noqa: BLE001 - the logger port never raises
            pass