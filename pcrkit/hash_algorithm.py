"""Hash algorithm vocabulary shared by the PCR value types."""

from __future__ import annotations

from enum import Enum

from .errors import TpmkitError

# SHA-1 PCR banks are legacy; digest-size lookups reject them unless enabled.
ENABLE_LEGACY_SHA1_PCR = False


class HashAlgorithm(Enum):
    """TPM-supported hash algorithms used for PCR banks and digests."""

    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"


_DIGEST_SIZES = {
    HashAlgorithm.SHA1: 20,
    HashAlgorithm.SHA256: 32,
    HashAlgorithm.SHA384: 48,
    HashAlgorithm.SHA512: 64,
}


def hash_algorithm_name(algorithm: object) -> str:
    """Return the lowercase name of an algorithm, or "unknown"."""
    if isinstance(algorithm, HashAlgorithm):
        return algorithm.value
    return "unknown"


def digest_size(algorithm: object) -> int:
    """Return the digest size in bytes; raise TpmkitError if unsupported."""
    if not isinstance(algorithm, HashAlgorithm):
        raise TpmkitError(f"unsupported hash algorithm: {algorithm!r}")
    if algorithm is HashAlgorithm.SHA1 and not ENABLE_LEGACY_SHA1_PCR:
        raise TpmkitError("SHA-1 PCR banks are disabled")
    return _DIGEST_SIZES[algorithm]