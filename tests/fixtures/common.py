"""
Common test fixtures shared by all modules.

Provides factory functions for DKIM test material:
- RSA key pairs and their DER public keys
- PKCS#1 v1.5 / SHA-256 signatures over a header prefix
- Prover stdin for the DKIM program

Key generation is slow, so generated keys are cached per bit size.
"""

from functools import lru_cache

from Crypto.Hash import SHA256
from Crypto.PublicKey import RSA
from Crypto.Signature import pkcs1_15
from Crypto.Util.asn1 import DerBitString, DerNull, DerObjectId, DerSequence

from prover.stdin import ProverStdin

TEST_HEADER = b"test-header"
TEST_MAX_HEADERS_LENGTH = 88
TEST_SIGNATURE_SIZE = 8


@lru_cache(maxsize=None)
def make_rsa_key(bits: int = 1024, slot: int = 0) -> RSA.RsaKey:
    """Generate (once per bits/slot pair) an RSA private key."""
    return RSA.generate(bits)


def make_public_der(key: RSA.RsaKey | None = None) -> bytes:
    """DER SubjectPublicKeyInfo for a key (the DKIM p= payload)."""
    key = key or make_rsa_key()
    return key.public_key().export_key(format="DER")


def sign_header(
    header: bytes = TEST_HEADER,
    max_headers_length: int = TEST_MAX_HEADERS_LENGTH,
    key: RSA.RsaKey | None = None,
) -> bytes:
    """RSASSA-PKCS1-v1_5 signature over SHA-256(header[:max_headers_length])."""
    key = key or make_rsa_key()
    return pkcs1_15.new(key).sign(SHA256.new(header[:max_headers_length]))


def make_pkcs1_public_der(key: RSA.RsaKey | None = None) -> bytes:
    """Bare PKCS#1 RSAPublicKey: SEQUENCE { n, e }."""
    key = key or make_rsa_key()
    return DerSequence([key.n, key.e]).encode()


def make_certificate_der(key: RSA.RsaKey | None = None) -> bytes:
    """Minimal v1 X.509 certificate wrapping the key's SubjectPublicKeyInfo."""
    key = key or make_rsa_key()
    algorithm = DerSequence([
        DerObjectId("1.2.840.113549.1.1.11").encode(),
        DerNull().encode(),
    ]).encode()
    name = DerSequence([]).encode()
    tbs = DerSequence([
        1,
        algorithm,
        name,
        DerSequence([]).encode(),
        name,
        make_public_der(key),
    ]).encode()
    return DerSequence([tbs, algorithm, DerBitString(bytes(16)).encode()]).encode()


def flip_byte(data: bytes, index: int) -> bytes:
    """Return data with the byte at index inverted."""
    mutated = bytearray(data)
    mutated[index] ^= 0xFF
    return bytes(mutated)


def make_dkim_stdin(
    pubkey: bytes | None = None,
    signature: bytes | None = None,
    email_header: bytes = TEST_HEADER,
    max_headers_length: int = TEST_MAX_HEADERS_LENGTH,
) -> ProverStdin:
    """Stdin with the four DKIM program inputs."""
    return ProverStdin.for_dkim(
        pubkey if pubkey is not None else make_public_der(),
        signature if signature is not None else bytes(TEST_SIGNATURE_SIZE),
        email_header,
        max_headers_length,
    )
