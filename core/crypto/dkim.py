"""
DKIM Signature Verifier

Checks an RSA/SHA-256 DKIM signature over a truncated email header.

Rules, in order:
1. signature must be exactly SIGNATURE_SIZE bytes
2. header length must not exceed max_headers_length // 8
3. SHA-256 over header[:max_headers_length]
4. pubkey must parse as a DER RSA SubjectPublicKeyInfo
5. RSASSA-PKCS1-v1_5 verification of the signature over the digest

Every failure, structural or cryptographic, collapses to ``False``.
The tagged VerificationOutcome exists for host-side diagnostics only;
the attested record carries the boolean.

The functions here hold no state and never raise for bytes input,
so concurrent calls need no locking.
"""
from __future__ import annotations

import logging
from enum import Enum

from Crypto.Hash import SHA256
from Crypto.PublicKey import RSA
from Crypto.Signature import pkcs1_15
from Crypto.Util.asn1 import DerBitString, DerObjectId, DerSequence

logger = logging.getLogger(__name__)

# Signature length fixed by the protocol
SIGNATURE_SIZE = 8

# max_headers_length is divided by this before the header length bound check
HEADER_LENGTH_DIVISOR = 8

# ASN.1 SEQUENCE tag, first byte of every DER-encoded key
_DER_SEQUENCE_TAG = 0x30

_RSA_ENCRYPTION_OID = "1.2.840.113549.1.1.1"


class VerificationOutcome(str, Enum):
    """Why a DKIM check passed or failed."""
    OK = "ok"
    BAD_SIGNATURE_SHAPE = "bad_signature_shape"
    HEADER_TOO_LONG = "header_too_long"
    HEADER_SLICE_OUT_OF_RANGE = "header_slice_out_of_range"
    KEY_PARSE_ERROR = "key_parse_error"
    CRYPTO_MISMATCH = "crypto_mismatch"

    @property
    def verified(self) -> bool:
        return self is VerificationOutcome.OK


def header_length_bound(max_headers_length: int) -> int:
    """Largest header length accepted for a given max_headers_length."""
    return max_headers_length // HEADER_LENGTH_DIVISOR


def _is_rsa_subject_public_key_info(pubkey: bytes) -> bool:
    """
    True if pubkey is SEQUENCE { AlgorithmIdentifier(rsaEncryption), BIT STRING }.

    Bare PKCS#1 RSAPublicKey structures and X.509 certificates both start
    with a SEQUENCE and import as RSA keys, but they are not the DKIM
    ``p=`` payload and must not verify.
    """
    try:
        spki = DerSequence().decode(pubkey, strict=True, nr_elements=2)
        algorithm, subject_public_key = spki[0], spki[1]
        if not isinstance(algorithm, bytes) or not isinstance(subject_public_key, bytes):
            return False
        algorithm_id = DerSequence().decode(algorithm, strict=True, nr_elements=(1, 2))
        if not isinstance(algorithm_id[0], bytes):
            return False
        oid = DerObjectId().decode(algorithm_id[0], strict=True).value
        DerBitString().decode(subject_public_key, strict=True)
    except (ValueError, IndexError, TypeError, EOFError):
        return False
    return oid == _RSA_ENCRYPTION_OID


def parse_rsa_public_key(pubkey: bytes) -> RSA.RsaKey | None:
    """
    Parse a DER-encoded RSA SubjectPublicKeyInfo (the DKIM ``p=`` payload).

    PKCS#1 RSAPublicKey, X.509 certificates, PEM, OpenSSH and private keys
    are rejected.

    Returns:
        The parsed key, or None when the bytes are not a DER RSA SubjectPublicKeyInfo
    """
    pubkey = bytes(pubkey)
    if not pubkey or pubkey[0] != _DER_SEQUENCE_TAG:
        return None
    if not _is_rsa_subject_public_key_info(pubkey):
        return None
    try:
        key = RSA.import_key(pubkey)
    except (ValueError, IndexError, TypeError):
        return None
    if key.has_private():
        return None
    return key


def check_dkim_signature(
    pubkey: bytes,
    signature: bytes,
    email_header: bytes,
    max_headers_length: int,
    *,
    signature_size: int = SIGNATURE_SIZE,
    strict_header_slice: bool = False,
) -> VerificationOutcome:
    """
    Run the DKIM check and report which rule decided the result.

    Args:
        pubkey: DER-encoded RSA public key
        signature: Raw signature bytes
        email_header: Canonicalized header bytes that were signed
        max_headers_length: Declared upper bound, caller supplied
        signature_size: Expected signature length (protocol default 8)
        strict_header_slice: When True, a header shorter than
            max_headers_length is an out-of-range slice and fails;
            when False the available bytes are hashed

    Returns:
        VerificationOutcome; only OK means the signature verified
    """
    if len(signature) != signature_size:
        return VerificationOutcome.BAD_SIGNATURE_SHAPE

    if len(email_header) > header_length_bound(max_headers_length):
        return VerificationOutcome.HEADER_TOO_LONG

    if strict_header_slice and len(email_header) < max_headers_length:
        return VerificationOutcome.HEADER_SLICE_OUT_OF_RANGE

    digest = SHA256.new(bytes(email_header[:max_headers_length]))

    key = parse_rsa_public_key(pubkey)
    if key is None:
        return VerificationOutcome.KEY_PARSE_ERROR

    try:
        pkcs1_15.new(key).verify(digest, bytes(signature))
    except (ValueError, TypeError):
        return VerificationOutcome.CRYPTO_MISMATCH

    return VerificationOutcome.OK


def verify_dkim_signature(
    pubkey: bytes,
    signature: bytes,
    email_header: bytes,
    max_headers_length: int,
    *,
    signature_size: int = SIGNATURE_SIZE,
    strict_header_slice: bool = False,
) -> bool:
    """
    Verify a DKIM RSA/SHA-256 signature over the truncated header.

    Returns True iff the signature verifies; all failure kinds give False.
    """
    outcome = check_dkim_signature(
        pubkey,
        signature,
        email_header,
        max_headers_length,
        signature_size=signature_size,
        strict_header_slice=strict_header_slice,
    )
    logger.debug("DKIM check outcome: %s", outcome.value)
    return outcome.verified


__all__ = [
    "SIGNATURE_SIZE",
    "HEADER_LENGTH_DIVISOR",
    "VerificationOutcome",
    "header_length_bound",
    "parse_rsa_public_key",
    "check_dkim_signature",
    "verify_dkim_signature",
]
