"""
Hashing Utilities
SHA-256 hashing and 0x-prefixed hex helpers shared by the verifier,
the prover backend and the fixture exporter.

This module provides:
- SHA-256 hashing for raw bytes
- Hex encoding/decoding with 0x prefix
- Hash of a concatenation (key/value binding for proofs)

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- All operations are deterministic
"""
from __future__ import annotations

import hashlib

# SHA-256 processes input in 64-byte blocks, plus 9 bytes of mandatory padding
SHA256_BLOCK_SIZE = 64


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def sha256_block_count(length: int) -> int:
    """Number of compression-function calls SHA-256 makes for `length` bytes."""
    return (length + 9 + SHA256_BLOCK_SIZE - 1) // SHA256_BLOCK_SIZE


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two byte sequences.

    Used to bind a proof to its verifying key: sha256(vkey + public_values)
    """
    return sha256(left + right)


__all__ = [
    "SHA256_BLOCK_SIZE",
    "sha256",
    "sha256_block_count",
    "to_hex",
    "from_hex",
    "hash_concat",
]
