"""
Schemas & Public Values
File: public_values.py

Purpose: The public record committed by the DKIM program, and its fixed
ABI layout for on-chain verification.

Layout (Solidity `PublicValuesStruct`, static tuple, 160 bytes):

    word 0  bytes32 pubkey
    word 1  bytes32 signature
    word 2  bool    verified
    word 3  bytes32 email_header
    word 4  uint32  max_headers_length

The model keeps the full input values; only the byte-level encoding maps
variable-length bytes into 32-byte slots (right-padded with zeros, values
longer than 32 bytes keep their first 32 bytes). Field order is part of the
protocol: reordering is a breaking change for every downstream decoder.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from core.abi import (
    WORD_SIZE,
    UINT32_MAX,
    decode_bool,
    decode_fixed_bytes,
    decode_u32,
    encode_bool,
    encode_fixed_bytes,
    encode_static_tuple,
    encode_u32,
    split_words,
)

PUBLIC_VALUES_FIELDS: tuple[str, ...] = (
    "pubkey",
    "signature",
    "verified",
    "email_header",
    "max_headers_length",
)

PUBLIC_VALUES_SIZE = WORD_SIZE * len(PUBLIC_VALUES_FIELDS)


class PublicValuesStruct(BaseModel):
    """
    Public record of one DKIM verification.

    Immutable once built. `verified` is carried through from the verifier
    and never recomputed here.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    pubkey: bytes = Field(..., description="DER-encoded RSA public key")
    signature: bytes = Field(..., description="Raw signature bytes")
    verified: bool = Field(..., description="Result of the DKIM signature check")
    email_header: bytes = Field(..., description="Header bytes fed to verification")
    max_headers_length: int = Field(
        ...,
        ge=0,
        le=UINT32_MAX,
        description="Declared header length bound (uint32)",
    )

    def abi_encode(self) -> bytes:
        """Encode as a static Solidity tuple (5 words)."""
        return encode_static_tuple([
            encode_fixed_bytes(self.pubkey),
            encode_fixed_bytes(self.signature),
            encode_bool(self.verified),
            encode_fixed_bytes(self.email_header),
            encode_u32(self.max_headers_length),
        ])

    @classmethod
    def abi_decode(cls, data: bytes, validate: bool = True) -> "PublicValuesStruct":
        """
        Decode committed public values.

        Byte fields come back in their 32-byte slot form.

        Args:
            data: Exactly PUBLIC_VALUES_SIZE bytes
            validate: Reject non-canonical bool and uint32 words

        Raises:
            AbiDecodeError: On wrong length or, with validate, malformed words
        """
        words = split_words(bytes(data), len(PUBLIC_VALUES_FIELDS))
        return cls(
            pubkey=decode_fixed_bytes(words[0], validate=validate, offset=0),
            signature=decode_fixed_bytes(words[1], validate=validate, offset=WORD_SIZE),
            verified=decode_bool(words[2], validate=validate, offset=2 * WORD_SIZE),
            email_header=decode_fixed_bytes(words[3], validate=validate, offset=3 * WORD_SIZE),
            max_headers_length=decode_u32(words[4], validate=validate, offset=4 * WORD_SIZE),
        )

    def slot_form(self) -> "PublicValuesStruct":
        """Return the record as it reads back after an encode/decode cycle."""
        return type(self).abi_decode(self.abi_encode())


def commit_public_values(
    pubkey: bytes,
    signature: bytes,
    email_header: bytes,
    max_headers_length: int,
    verified: bool,
) -> bytes:
    """Build the public record from verifier inputs and output, and encode it."""
    return PublicValuesStruct(
        pubkey=pubkey,
        signature=signature,
        verified=verified,
        email_header=email_header,
        max_headers_length=max_headers_length,
    ).abi_encode()


__all__ = [
    "PUBLIC_VALUES_FIELDS",
    "PUBLIC_VALUES_SIZE",
    "PublicValuesStruct",
    "commit_public_values",
]
