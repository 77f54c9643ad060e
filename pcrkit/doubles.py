"""In-memory test doubles for the PCR provider and observer ports."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

from .errors import ErrorCategory, TpmError
from .hash_algorithm import HashAlgorithm
from .pcr import AllocateResult, Bank, DigestValue, EventResult, Index, ReadResult, Selection
from .ports import Observer, Provider


class PcrMeasurementOperation(Enum):
    """Kind of PCR measurement captured by the in-memory observer."""

    EXTEND = "extend"
    EVENT = "event"


@dataclass(frozen=True)
class PcrMeasurementRecord:
    """One observed PCR measurement."""

    index: Index
    operation: PcrMeasurementOperation
    digests: tuple[DigestValue, ...] = ()
    event_data: bytes = b""


class InMemoryPcrObserver(Observer):
    """Thread-safe observer that records every notification in order."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: list[PcrMeasurementRecord] = []

    def _append(self, record: PcrMeasurementRecord) -> None:
        with self._lock:
            self._records.append(record)

    def on_extend(self, index: Index, digests: Iterable[DigestValue]) -> None:
        """Record an extend notification."""
        try:
            self._append(
                PcrMeasurementRecord(index, PcrMeasurementOperation.EXTEND, tuple(digests))
            )
        except Exception:  # noqa: BLE001 - observer callbacks never raise
            pass

    def on_event(self, index: Index, event_data: bytes, result: EventResult) -> None:
        """Record an event notification with its data and result digests."""
        try:
            self._append(
                PcrMeasurementRecord(
                    index,
                    PcrMeasurementOperation.EVENT,
                    tuple(result.digests),
                    bytes(event_data),
                )
            )
        except Exception:  # noqa: BLE001 - observer callbacks never raise
            pass

    def entries(self) -> list[PcrMeasurementRecord]:
        """Return a copy of every record, in arrival order."""
        with self._lock:
            return list(self._records)

    def entries_by_index(self, index: Index) -> list[PcrMeasurementRecord]:
        """Return the records for one PCR index, in arrival order."""
        with self._lock:
            return [record for record in self._records if record.index == index]

    def count(self) -> int:
        """Return the number of records."""
        with self._lock:
            return len(self._records)

    def clear(self) -> None:
        """Discard every record."""
        with self._lock:
            self._records.clear()


_OPERATIONS = (
    "read",
    "extend",
    "event",
    "reset",
    "allocate",
    "set_auth_value",
    "set_auth_policy",
)


class MockPcrProvider(Provider):
    """Provider that returns programmed responses and counts calls.

    Every operation fails with a backend error until a response is programmed.
    A programmed ``TpmError`` is raised; any other programmed value is returned.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._responses: dict[str, Any] = {}
        self._counts: dict[str, int] = dict.fromkeys(_OPERATIONS, 0)

    @staticmethod
    def _check(operation: str) -> str:
        if operation not in _OPERATIONS:
            raise ValueError(f"unknown PCR provider operation: {operation!r}")
        return operation

    def program(self, operation: str, result: Any) -> None:
        """Set the response for an operation: a result value or a TpmError."""
        with self._lock:
            self._responses[self._check(operation)] = result

    def call_count(self, operation: str) -> int:
        """Return how many times an operation has been called."""
        with self._lock:
            return self._counts[self._check(operation)]

    def clear_call_counts(self) -> None:
        """Reset every call counter to zero."""
        with self._lock:
            for operation in self._counts:
                self._counts[operation] = 0

    def _respond(self, operation: str) -> Any:
        with self._lock:
            self._counts[operation] += 1
            if operation not in self._responses:
                raise TpmError(
                    ErrorCategory.BACKEND_ERROR,
                    f"no response programmed for {operation}",
                )
            response = self._responses[operation]
        if isinstance(response, TpmError):
            raise response
        return response

    def read(self, selection: Selection) -> ReadResult:
        """Return the programmed read result."""
        return self._respond("read")

    def extend(self, index: Index, digests: Iterable[DigestValue]) -> None:
        """Complete or fail as programmed."""
        self._respond("extend")

    def event(self, index: Index, event_data: bytes) -> EventResult:
        """Return the programmed event result."""
        return self._respond("event")

    def reset(self, index: Index) -> None:
        """Complete or fail as programmed."""
        self._respond("reset")

    def allocate(self, banks: Iterable[Bank]) -> AllocateResult:
        """Return the programmed allocation result."""
        return self._respond("allocate")

    def set_auth_value(self, index: Index, auth: bytes) -> None:
        """Complete or fail as programmed."""
        self._respond("set_auth_value")

    def set_auth_policy(
        self, index: Index, policy_alg: HashAlgorithm, policy_digest: bytes
    ) -> None:
        """Complete or fail as programmed."""
        self._respond("set_auth_policy")