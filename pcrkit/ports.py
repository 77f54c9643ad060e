"""Abstract ports for PCR operations and for observing PCR measurements."""

from __future__ import annotations

import abc
from typing import Iterable

from .hash_algorithm import HashAlgorithm
from .pcr import AllocateResult, Bank, DigestValue, EventResult, Index, ReadResult, Selection


class Observer(abc.ABC):
    """Notified after successful PCR measurement operations.

    Implementations must never raise: failures inside a callback are
    swallowed so they cannot affect the operation that triggered them.
    """

    @abc.abstractmethod
    def on_extend(self, index: Index, digests: Iterable[DigestValue]) -> None:
        """Observe a successful extend of ``index`` with ``digests``."""

    @abc.abstractmethod
    def on_event(self, index: Index, event_data: bytes, result: EventResult) -> None:
        """Observe a successful event on ``index`` with its raw data and result."""


class Provider(abc.ABC):
    """Port for TPM PCR operations.

    Expected failures are raised as ``TpmError`` carrying an ``ErrorCategory``:
    input, resource, security or backend errors.
    """

    @abc.abstractmethod
    def read(self, selection: Selection) -> ReadResult:
        """Read PCR values for one selection; an empty selection reads nothing."""

    @abc.abstractmethod
    def extend(self, index: Index, digests: Iterable[DigestValue]) -> None:
        """Extend one PCR with caller-provided digests, one per distinct bank."""

    @abc.abstractmethod
    def event(self, index: Index, event_data: bytes) -> EventResult:
        """Extend one PCR with raw event data hashed by the TPM in every active bank."""

    @abc.abstractmethod
    def reset(self, index: Index) -> None:
        """Reset one PCR to its TPM-defined initial value."""

    @abc.abstractmethod
    def allocate(self, banks: Iterable[Bank]) -> AllocateResult:
        """Allocate the active PCR banks."""

    @abc.abstractmethod
    def set_auth_value(self, index: Index, auth: bytes) -> None:
        """Set an authorization value on one PCR."""

    @abc.abstractmethod
    def set_auth_policy(
        self, index: Index, policy_alg: HashAlgorithm, policy_digest: bytes
    ) -> None:
        """Set an authorization policy digest on one PCR."""