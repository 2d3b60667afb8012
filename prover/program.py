"""
DKIM Program

The program run inside the proving environment: read the four inputs,
verify the DKIM signature, commit the ABI-encoded public values.

The committed record is the only output the outside world sees.
"""

from __future__ import annotations

from core.crypto.dkim import (
    VerificationOutcome,
    check_dkim_signature,
    parse_rsa_public_key,
)
from core.crypto.hashing import sha256, sha256_block_count
from core.schemas.public_values import commit_public_values

from prover.stdin import ProgramIO

PROGRAM_NAME = "zk-email-dkim"
PROGRAM_VERSION = "1"

# Execution metric weights
CYCLES_PER_SHA256_BLOCK = 3_000
CYCLES_PER_RSA_LIMB_PRODUCT = 40
RSA_PUBLIC_EXPONENT_SQUARINGS = 17
KEY_PARSE_CYCLES = 5_000

_OUTCOMES_AFTER_HASH = frozenset({
    VerificationOutcome.KEY_PARSE_ERROR,
    VerificationOutcome.CRYPTO_MISMATCH,
    VerificationOutcome.OK,
})


def program_id(strict_header_slice: bool = False) -> bytes:
    """
    Stable identifier of the program build.

    The header-slice rule changes what the program proves, so it is part
    of the identity and therefore of the verifying key.
    """
    variant = "strict" if strict_header_slice else "lenient"
    return f"{PROGRAM_NAME}/v{PROGRAM_VERSION}/{variant}".encode("utf-8")


def program_digest(strict_header_slice: bool = False) -> bytes:
    return sha256(program_id(strict_header_slice))


def estimate_verification_cycles(
    pubkey: bytes,
    email_header: bytes,
    max_headers_length: int,
    outcome: VerificationOutcome,
) -> int:
    """
    Deterministic cost of one verification, by how far the check got.

    Shape failures cost nothing beyond the reads; past the shape checks we
    pay for the hash, then the key parse, then the modular exponentiation.
    """
    if outcome not in _OUTCOMES_AFTER_HASH:
        return 0

    cycles = CYCLES_PER_SHA256_BLOCK * sha256_block_count(
        len(email_header[:max_headers_length])
    )
    cycles += KEY_PARSE_CYCLES

    key = parse_rsa_public_key(pubkey)
    if key is not None:
        limbs = (key.size_in_bits() + 31) // 32
        cycles += RSA_PUBLIC_EXPONENT_SQUARINGS * limbs * limbs * CYCLES_PER_RSA_LIMB_PRODUCT
    return cycles


def main(io: ProgramIO, *, strict_header_slice: bool = False) -> None:
    """Program entrypoint."""
    pubkey = io.read_bytes()
    signature = io.read_bytes()
    email_header = io.read_bytes()
    max_headers_length = io.read_u32()

    outcome = check_dkim_signature(
        pubkey,
        signature,
        email_header,
        max_headers_length,
        strict_header_slice=strict_header_slice,
    )
    io.charge(estimate_verification_cycles(pubkey, email_header, max_headers_length, outcome))

    io.commit_slice(commit_public_values(
        pubkey=pubkey,
        signature=signature,
        email_header=email_header,
        max_headers_length=max_headers_length,
        verified=outcome.verified,
    ))


__all__ = [
    "PROGRAM_NAME",
    "PROGRAM_VERSION",
    "program_id",
    "program_digest",
    "estimate_verification_cycles",
    "main",
]
