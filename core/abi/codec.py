"""
ABI Word Codec

Solidity ABI encoding for static types. Every static value occupies
exactly one 32-byte word:

- bytesN: left-aligned, right-padded with zero bytes
- bool: uint256 0 or 1
- uintN: big-endian, left-padded with zero bytes

A tuple made only of static types is the concatenation of its words,
with no head/tail offsets.
"""
from __future__ import annotations

import logging
from typing import Sequence

from core.schemas.errors import AbiDecodeError

logger = logging.getLogger(__name__)

WORD_SIZE = 32
UINT32_MAX = 2**32 - 1


def encode_fixed_bytes(value: bytes, size: int = WORD_SIZE) -> bytes:
    """
    Encode a bytesN value into one word.

    Shorter values are right-padded with zeros. Longer values keep
    their first `size` bytes, as Solidity's bytes-to-bytesN conversion does.
    """
    if not 0 < size <= WORD_SIZE:
        raise ValueError(f"bytesN size must be in 1..{WORD_SIZE}, got {size}")
    if len(value) > size:
        logger.debug("Truncating %d-byte value to bytes%d slot", len(value), size)
    return bytes(value[:size]).ljust(WORD_SIZE, b"\x00")


def encode_bool(value: bool) -> bytes:
    return encode_uint(1 if value else 0, bits=8)


def encode_uint(value: int, bits: int = 256) -> bytes:
    """Encode an unsigned integer of `bits` width into one big-endian word."""
    if value < 0 or value >= 1 << bits:
        raise ValueError(f"Value {value} out of range for uint{bits}")
    return value.to_bytes(WORD_SIZE, "big")


def encode_u32(value: int) -> bytes:
    return encode_uint(value, bits=32)


def split_words(data: bytes, count: int) -> list[bytes]:
    """
    Split `data` into exactly `count` words.

    Raises:
        AbiDecodeError: If the length is not count * 32
    """
    expected = count * WORD_SIZE
    if len(data) != expected:
        raise AbiDecodeError(
            f"Expected {expected} bytes ({count} words), got {len(data)}",
            details={"expected": expected, "actual": len(data)},
        )
    return [data[i:i + WORD_SIZE] for i in range(0, expected, WORD_SIZE)]


def decode_fixed_bytes(word: bytes, size: int = WORD_SIZE, *, validate: bool = True, offset: int | None = None) -> bytes:
    """Decode a bytesN word; with validate, the padding must be zero."""
    if validate and any(word[size:]):
        raise AbiDecodeError(f"Non-zero padding in bytes{size} word", offset=offset)
    return bytes(word[:size])


def decode_uint(word: bytes, bits: int = 256, *, validate: bool = True, offset: int | None = None) -> int:
    """
    Decode an unsigned integer word.

    With validate, any bit above `bits` is an error; without it the
    value is masked to `bits` like a lenient decoder would.
    """
    value = int.from_bytes(word, "big")
    if value >= 1 << bits:
        if validate:
            raise AbiDecodeError(f"Value does not fit in uint{bits}", offset=offset)
        value &= (1 << bits) - 1
    return value


def decode_bool(word: bytes, *, validate: bool = True, offset: int | None = None) -> bool:
    value = int.from_bytes(word, "big")
    if validate and value not in (0, 1):
        raise AbiDecodeError(f"Invalid bool word value: {value}", offset=offset)
    return value != 0


def decode_u32(word: bytes, *, validate: bool = True, offset: int | None = None) -> int:
    return decode_uint(word, bits=32, validate=validate, offset=offset)


def encode_static_tuple(words: Sequence[bytes]) -> bytes:
    """Concatenate pre-encoded words into a static tuple encoding."""
    for i, word in enumerate(words):
        if len(word) != WORD_SIZE:
            raise ValueError(f"Word {i} has length {len(word)}, expected {WORD_SIZE}")
    return b"".join(words)


__all__ = [
    "WORD_SIZE",
    "UINT32_MAX",
    "encode_fixed_bytes",
    "encode_bool",
    "encode_uint",
    "encode_u32",
    "encode_static_tuple",
    "split_words",
    "decode_fixed_bytes",
    "decode_uint",
    "decode_bool",
    "decode_u32",
]
