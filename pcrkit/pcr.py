"""PCR value objects: index, bank, digest, selection and operation results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Iterable

from .errors import InputValidationError, TpmkitError
from .hash_algorithm import HashAlgorithm, digest_size


def _checked_digest_size(algorithm: object) -> int:
    try:
        return digest_size(algorithm)
    except TpmkitError as exc:
        raise InputValidationError(exc.message) from exc


@dataclass(frozen=True, order=True)
class Index:
    """TPM PCR register index in the range [0, 31]."""

    value: int

    MAX_VALUE: ClassVar[int] = 31

    FIRMWARE_0: ClassVar[Index]
    FIRMWARE_1: ClassVar[Index]
    FIRMWARE_2: ClassVar[Index]
    FIRMWARE_3: ClassVar[Index]
    FIRMWARE_4: ClassVar[Index]
    FIRMWARE_5: ClassVar[Index]
    FIRMWARE_6: ClassVar[Index]
    FIRMWARE_7: ClassVar[Index]
    BOOTLOADER_8: ClassVar[Index]
    BOOTLOADER_9: ClassVar[Index]
    IMA: ClassVar[Index]
    OS_11: ClassVar[Index]
    OS_12: ClassVar[Index]
    OS_13: ClassVar[Index]
    OS_14: ClassVar[Index]
    OS_15: ClassVar[Index]
    DEBUG: ClassVar[Index]
    DRTM_17: ClassVar[Index]
    DRTM_18: ClassVar[Index]
    DRTM_19: ClassVar[Index]
    DRTM_20: ClassVar[Index]
    DRTM_21: ClassVar[Index]
    DRTM_22: ClassVar[Index]
    APPLICATION: ClassVar[Index]

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"PCR index must be an int, not {type(self.value).__name__}")
        if not 0 <= self.value <= self.MAX_VALUE:
            raise InputValidationError(
                f"PCR index {self.value} is outside the range [0, {self.MAX_VALUE}]"
            )

    def __int__(self) -> int:
        return self.value


_NAMED_INDICES = {
    "FIRMWARE_0": 0,
    "FIRMWARE_1": 1,
    "FIRMWARE_2": 2,
    "FIRMWARE_3": 3,
    "FIRMWARE_4": 4,
    "FIRMWARE_5": 5,
    "FIRMWARE_6": 6,
    "FIRMWARE_7": 7,
    "BOOTLOADER_8": 8,
    "BOOTLOADER_9": 9,
    "IMA": 10,
    "OS_11": 11,
    "OS_12": 12,
    "OS_13": 13,
    "OS_14": 14,
    "OS_15": 15,
    "DEBUG": 16,
    "DRTM_17": 17,
    "DRTM_18": 18,
    "DRTM_19": 19,
    "DRTM_20": 20,
    "DRTM_21": 21,
    "DRTM_22": 22,
    "APPLICATION": 23,
}

for _name, _number in _NAMED_INDICES.items():
    setattr(Index, _name, Index(_number))


def _as_index(item: Index | int) -> Index:
    return item if isinstance(item, Index) else Index(item)


def make_index_range(first: int, count: int) -> tuple[Index, ...]:
    """Return the ascending indices [first, first + count).

    An empty range is returned for count == 0 without validating first.
    """
    if count < 0:
        raise InputValidationError("PCR index range count must not be negative")
    if count == 0:
        return ()
    if first < 0 or first > Index.MAX_VALUE or first + count - 1 > Index.MAX_VALUE:
        raise InputValidationError(
            f"PCR index range [{first}, {first + count}) exceeds the supported range"
        )
    return tuple(Index(number) for number in range(first, first + count))


@dataclass(frozen=True)
class Bank:
    """PCR bank descriptor: a hash algorithm and its digest size."""

    algorithm: HashAlgorithm
    digest_size: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "digest_size", _checked_digest_size(self.algorithm))


@dataclass(frozen=True)
class DigestValue:
    """Digest bytes whose length matches the hash algorithm."""

    algorithm: HashAlgorithm
    digest: bytes

    def __post_init__(self) -> None:
        expected = _checked_digest_size(self.algorithm)
        try:
            data = bytes(self.digest)
        except (TypeError, ValueError) as exc:
            raise InputValidationError(f"digest is not a byte sequence: {exc}") from exc
        if len(data) != expected:
            raise InputValidationError(
                f"{self.algorithm.value} digest must be {expected} bytes, got {len(data)}"
            )
        object.__setattr__(self, "digest", data)


@dataclass(frozen=True)
class Selection:
    """Sorted unique PCR indices within one hash-algorithm bank."""

    algorithm: HashAlgorithm
    indices: tuple[Index, ...] = ()

    def __init__(self, algorithm: HashAlgorithm, indices: Iterable[Index | int] = ()) -> None:
        _checked_digest_size(algorithm)
        object.__setattr__(self, "algorithm", algorithm)
        object.__setattr__(self, "indices", tuple(sorted({_as_index(i) for i in indices})))

    def __contains__(self, item: object) -> bool:
        return item in self.indices

    def __len__(self) -> int:
        return len(self.indices)


@dataclass(frozen=True)
class Value:
    """One PCR value returned by a read."""

    index: Index
    digest: DigestValue


@dataclass(frozen=True)
class ReadResult:
    """Result of a PCR read: the actual selection, update counter and values."""

    actual_selection: Selection
    update_counter: int
    values: tuple[Value, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))


@dataclass(frozen=True)
class EventResult:
    """TPM-computed event digests across the active PCR banks."""

    digests: tuple[DigestValue, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "digests", tuple(self.digests))


@dataclass(frozen=True)
class AllocateResult:
    """Result of a PCR bank allocation."""

    allocation_success: bool
    max_pcr: int
    size_needed: int
    size_available: int