"""
Core cryptographic utilities.

Provides SHA-256/hex helpers and the DKIM RSA signature verifier.
"""
from .hashing import (
    sha256,
    sha256_block_count,
    to_hex,
    from_hex,
    hash_concat,
)
from .dkim import (
    SIGNATURE_SIZE,
    VerificationOutcome,
    check_dkim_signature,
    header_length_bound,
    parse_rsa_public_key,
    verify_dkim_signature,
)

__all__ = [
    "sha256",
    "sha256_block_count",
    "to_hex",
    "from_hex",
    "hash_concat",
    "SIGNATURE_SIZE",
    "VerificationOutcome",
    "check_dkim_signature",
    "header_length_bound",
    "parse_rsa_public_key",
    "verify_dkim_signature",
]
