"""
CLI Input Decoding

Turns operator-supplied strings into the raw bytes the program reads.

- pubkey / signature: 0x-prefixed hex (either case), or base64 as found in the DKIM
  `p=` and `b=` tags (folding whitespace allowed)
- email header: 0x-prefixed hex (either case), otherwise the UTF-8 text itself
- pubkey file: DER bytes, or a PEM "PUBLIC KEY" block
"""

from __future__ import annotations

import base64
import binascii
import re
from pathlib import Path

from Crypto.IO import PEM

from core.crypto.hashing import from_hex
from core.schemas.errors import InputEncodingError

_WHITESPACE = re.compile(r"\s+")


def _has_hex_prefix(text: str) -> bool:
    return text[:2].lower() == "0x"


def _decode_prefixed_hex(text: str, field_name: str) -> bytes:
    try:
        return from_hex("0x" + text[2:])
    except ValueError as e:
        raise InputEncodingError(str(e), field_name=field_name) from e


def decode_binary_arg(value: str, field_name: str) -> bytes:
    """
    Decode a hex or base64 argument.

    Raises:
        InputEncodingError: If the value is neither valid hex nor base64
    """
    text = _WHITESPACE.sub("", value)
    if _has_hex_prefix(text):
        return _decode_prefixed_hex(text, field_name)
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InputEncodingError(
            f"{field_name} must be 0x-prefixed hex or base64: {e}",
            field_name=field_name,
        ) from e


def decode_header_arg(value: str) -> bytes:
    """Decode the email header argument (hex if 0x/0X-prefixed, else UTF-8 text)."""
    if _has_hex_prefix(value):
        return _decode_prefixed_hex(value, "email_header")
    return value.encode("utf-8")


def read_pubkey_file(path: str | Path) -> bytes:
    """
    Read a public key file as DER.

    Raises:
        InputEncodingError: If the file is missing or holds a malformed PEM block
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise InputEncodingError(f"Cannot read key file: {e}", field_name="pubkey") from e

    if data.lstrip().startswith(b"-----BEGIN"):
        try:
            der, _marker, _encrypted = PEM.decode(data.decode("ascii"))
        except (ValueError, UnicodeDecodeError) as e:
            raise InputEncodingError(f"Malformed PEM key file: {e}", field_name="pubkey") from e
        return der
    return data


__all__ = [
    "decode_binary_arg",
    "decode_header_arg",
    "read_pubkey_file",
]
