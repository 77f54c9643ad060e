"""Thread-safe logger that keeps every record in memory for inspection."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Iterable

from .logger import Logger, LogField, LogLevel


@dataclass(frozen=True)
class LogRecord:
    """A captured log record with owned copies of its message and fields."""

    level: LogLevel
    message: str
    fields: tuple[tuple[str, str], ...] = ()


class RecordingLogger(Logger):
    """Logger that appends every record to an in-memory list."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: list[LogRecord] = []

    def log(
        self,
        level: LogLevel,
        message: str,
        fields: Iterable[LogField | tuple[str, str]] = (),
    ) -> None:
        """Capture the record."""
        try:
            record = LogRecord(
                level, str(message), tuple((str(key), str(value)) for key, value in fields)
            )
            with self._lock:
                self._records.append(record)
        except Exception:  # noqa: BLE001 - the logger port never raises
            pass

    def snapshot(self) -> list[LogRecord]:
        """Return a copy of the records captured so far, in order."""
        with self._lock:
            return list(self._records)

    def clear(self) -> None:
        """Discard every captured record."""
        with self._lock:
            self._records.clear()