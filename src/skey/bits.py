"""Fixed-width bit packing.

Splits a byte buffer into unsigned chunks of ``width`` bits and back,
reading and writing bits most-significant first.

Converting 2 bytes to 7-bit chunks:

    byte 0   byte 1
    01101101 01001101
    0110110 1010011 0100000
    chunk 0 chunk 1 chunk 2

The last chunk is right-padded with zero bits.
"""

from __future__ import annotations

from typing import Iterable


def _check_width(width: int) -> None:
    if width < 1:
        raise ValueError(f"chunk width must be positive, got {width}")


def chunk(width: int, data: bytes) -> list[int]:
    """Split data into ``ceil(8 * len(data) / width)`` chunks of ``width`` bits."""
    _check_width(width)

    total_bits = len(data) * 8
    chunks = [0] * -(-total_bits // width)

    for position in range(total_bits):
        bit = (data[position // 8] >> (7 - position % 8)) & 1
        chunks[position // width] |= bit << (width - 1 - position % width)

    return chunks


def dechunk(width: int, chunks: Iterable[int]) -> bytes:
    """Pack ``width``-bit chunks into bytes; the last byte is zero-padded.

    Raises:
        ValueError: If a chunk does not fit in ``width`` bits.
    """
    _check_width(width)

    values = list(chunks)
    limit = 1 << width
    for value in values:
        if not 0 <= value < limit:
            raise ValueError(f"chunk value {value} does not fit in {width} bits")

    total_bits = len(values) * width
    packed = bytearray(-(-total_bits // 8))

    for position in range(total_bits):
        bit = (values[position // width] >> (width - 1 - position % width)) & 1
        packed[position // 8] |= bit << (7 - position % 8)

    return bytes(packed)
