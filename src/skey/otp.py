"""One-time password generation and parsing (RFC 2289).

A one-time password is the 64-bit value left after hashing
``seed + secret`` and then re-hashing the folded result ``rounds`` more
times. It is shown as 16 hex characters and as six dictionary words:
the 64 bits split into 11-bit chunks, with a 2-bit checksum filling the
last two bits of the sixth chunk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .bits import chunk, dechunk
from .dictionary import index_for, word_for
from .errors import (
    ChecksumMismatch,
    InputTooLong,
    InputTooShort,
    InvalidRoundCount,
)
from .hashes import FOLDED_SIZE, HashAlgorithm, iterate

logger = logging.getLogger(__name__)

WORD_BITS = 11
WORD_COUNT = 6
MIN_SECRET_LENGTH = 10


def checksum(value: bytes) -> int:
    """Sum the 32 two-bit fields of a 64-bit value, modulo 4."""
    if len(value) != FOLDED_SIZE:
        raise ValueError(f"checksum needs {FOLDED_SIZE} bytes, got {len(value)}")

    total = 0
    for byte in value:
        total += (byte >> 6) & 3
        total += (byte >> 4) & 3
        total += (byte >> 2) & 3
        total += byte & 3
    return total & 3


def embed_checksum(value: bytes) -> list[int]:
    """Split a 64-bit value into six 11-bit chunks carrying its checksum."""
    chunks = chunk(WORD_BITS, value)
    chunks[-1] |= checksum(value)
    return chunks


def to_words(value: bytes) -> tuple[str, ...]:
    """Encode a 64-bit value as six dictionary words."""
    return tuple(word_for(index) for index in embed_checksum(value))


def parse_rounds(rounds: int | str) -> int:
    """Convert a round count to a non-negative int.

    Raises:
        InvalidRoundCount: If rounds is not an integer or is negative.
    """
    if isinstance(rounds, bool):
        raise InvalidRoundCount(rounds)
    if isinstance(rounds, int):
        count = rounds
    else:
        try:
            count = int(str(rounds).strip())
        except ValueError:
            raise InvalidRoundCount(rounds) from None
    if count < 0:
        raise InvalidRoundCount(rounds)
    return count


def _as_bytes(data: bytes | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


@dataclass(frozen=True)
class OneTimePassword:
    """A generated one-time password."""

    value: bytes  # 8 bytes
    words: tuple[str, ...]  # 6 words

    @property
    def hex(self) -> str:
        """Lowercase hex form (16 characters)."""
        return self.value.hex()

    def __str__(self) -> str:
        return " ".join(self.words)

    @classmethod
    def from_value(cls, value: bytes) -> "OneTimePassword":
        """Build from a folded 64-bit value."""
        return cls(value=bytes(value), words=to_words(value))


def generate(
    algorithm: HashAlgorithm | str,
    rounds: int | str,
    seed: bytes | str,
    secret: bytes | str,
) -> OneTimePassword:
    """Compute the one-time password for a sequence number.

    ``seed + secret`` is hashed once and then ``rounds`` more times, so
    ``rounds=0`` means a single hash.

    Args:
        algorithm: HashAlgorithm or a token such as ``otp-md5``
        rounds: Sequence number, int or decimal string
        seed: Public seed, used verbatim
        secret: Pass phrase

    Raises:
        UnknownHashAlgorithm: If algorithm is an unrecognized token.
        InvalidRoundCount: If rounds is negative or not a number.
    """
    if not isinstance(algorithm, HashAlgorithm):
        algorithm = HashAlgorithm.from_token(algorithm)
    count = parse_rounds(rounds)

    secret = _as_bytes(secret)
    if len(secret) < MIN_SECRET_LENGTH:
        logger.warning(
            f"Pass phrase is shorter than {MIN_SECRET_LENGTH} characters; "
            "RFC 2289 recommends a longer one"
        )

    value = iterate(algorithm, count + 1, _as_bytes(seed) + secret)
    return OneTimePassword.from_value(value)


def split_words(words: str | Sequence[str]) -> list[str]:
    """Accept either a whitespace-separated string or a sequence of words."""
    if isinstance(words, str):
        return words.split()
    return list(words)


def words_to_bytes(words: str | Sequence[str], verify: bool = False) -> bytes:
    """Decode six words back to the 64-bit value they encode.

    Args:
        words: Six words, as a sequence or a whitespace-separated string
        verify: Reject words whose embedded checksum does not match

    Raises:
        InputTooShort: Fewer than six words.
        InputTooLong: More than six words.
        InvalidWordCharacter: A word contains a non-letter.
        UnknownWord: A word is not in the dictionary.
        ChecksumMismatch: verify is set and the checksum is wrong.
    """
    word_list = split_words(words)
    if len(word_list) < WORD_COUNT:
        raise InputTooShort(len(word_list))
    if len(word_list) > WORD_COUNT:
        raise InputTooLong(len(word_list))

    indices = [index_for(word) for word in word_list]

    # 66 bits: 8 payload bytes, then the 2 checksum bits in a ninth byte
    packed = dechunk(WORD_BITS, indices)
    value = packed[:FOLDED_SIZE]

    if verify and indices[-1] & 3 != checksum(value):
        raise ChecksumMismatch(word_list)

    logger.debug(f"Decoded {WORD_COUNT} words (checksum verified: {verify})")
    return value


def parse(words: str | Sequence[str], verify: bool = False) -> str:
    """Decode six words to the lowercase hex of the value they encode."""
    return words_to_bytes(words, verify=verify).hex()
