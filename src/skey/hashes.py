"""Hash primitives, digest folding and round iteration.

Includes:
- HashAlgorithm: the closed set of RFC 2289 hash functions (MD4, MD5, SHA1)
- fold(): reduce a digest to the 64-bit value carried between rounds
- iterate(): repeatedly hash and fold a value
"""

from __future__ import annotations

import logging
from enum import Enum

from Crypto.Hash import MD4, MD5, SHA1

from .errors import InvalidRoundCount, UnknownHashAlgorithm

logger = logging.getLogger(__name__)

FOLDED_SIZE = 8
"""Size in bytes of a folded value (64 bits)."""

TOKEN_PREFIX = "otp-"


class HashAlgorithm(Enum):
    """Hash functions usable for one-time password generation."""

    MD4 = "md4"
    MD5 = "md5"
    SHA1 = "sha1"

    @property
    def token(self) -> str:
        """Command-line token naming this algorithm, e.g. ``otp-md5``."""
        return f"{TOKEN_PREFIX}{self.value}"

    @property
    def digest_size(self) -> int:
        """Size in bytes of the raw digest."""
        return _MODULES[self].digest_size

    @classmethod
    def from_token(cls, token: str) -> "HashAlgorithm":
        """Look up an algorithm by its ``otp-<name>`` token.

        Raises:
            UnknownHashAlgorithm: If the token names no supported algorithm.
        """
        name = token.strip().lower()
        if name.startswith(TOKEN_PREFIX):
            try:
                return cls(name[len(TOKEN_PREFIX) :])
            except ValueError:
                pass
        raise UnknownHashAlgorithm(token)

    @classmethod
    def tokens(cls) -> list[str]:
        """All accepted tokens, in declaration order."""
        return [algorithm.token for algorithm in cls]

    def digest(self, data: bytes) -> bytes:
        """Hash data with this algorithm and return the raw digest."""
        return _MODULES[self].new(data).digest()


_MODULES = {
    HashAlgorithm.MD4: MD4,
    HashAlgorithm.MD5: MD5,
    HashAlgorithm.SHA1: SHA1,
}

DEFAULT_ALGORITHM = HashAlgorithm.MD5


def fold(algorithm: HashAlgorithm, digest: bytes) -> bytes:
    """Fold a digest down to 64 bits.

    Every byte past the first eight is XORed into position ``i % 8``.
    For SHA1 the two 4-byte groups of the result are then byte-reversed,
    which RFC 2289 requires so that SHA1 words are read little-endian.

    Raises:
        ValueError: If the digest is shorter than 8 bytes.
    """
    if len(digest) < FOLDED_SIZE:
        raise ValueError(f"digest must be at least {FOLDED_SIZE} bytes, got {len(digest)}")

    folded = bytearray(digest[:FOLDED_SIZE])
    for i in range(FOLDED_SIZE, len(digest)):
        folded[i % FOLDED_SIZE] ^= digest[i]

    if algorithm is HashAlgorithm.SHA1:
        folded = folded[3::-1] + folded[7:3:-1]

    return bytes(folded)


def iterate(algorithm: HashAlgorithm, iterations: int, data: bytes) -> bytes:
    """Hash and fold ``data`` the given number of times.

    ``iterations`` counts hash applications and must be at least 1. It is
    not a sequence number: generate() passes ``rounds + 1``.

    The first iteration consumes ``data`` as-is (normally seed + secret);
    every later one hashes the previous 8-byte folded value.

    Raises:
        InvalidRoundCount: If iterations is less than 1.
    """
    if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations < 1:
        raise InvalidRoundCount(iterations)

    logger.debug(f"Running {iterations} {algorithm.token} iteration(s)")

    value = data
    for _ in range(iterations):
        value = fold(algorithm, algorithm.digest(value))
    return value
