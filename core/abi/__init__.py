"""
Solidity ABI encoding for static values.

Used to lay out committed public values so an on-chain verifier can
decode them without schema negotiation.
"""
from .codec import (
    WORD_SIZE,
    UINT32_MAX,
    encode_fixed_bytes,
    encode_bool,
    encode_uint,
    encode_u32,
    encode_static_tuple,
    split_words,
    decode_fixed_bytes,
    decode_uint,
    decode_bool,
    decode_u32,
)

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
