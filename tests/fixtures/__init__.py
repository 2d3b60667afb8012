"""
Test fixtures package for zk-email tests.

This package provides factory functions for creating test objects.
- common.py: RSA keys (SPKI, PKCS#1, certificate DER), DKIM signatures and program stdin

Usage:
    from fixtures import make_public_der, sign_header

    def test_something():
        pubkey = make_public_der()
        signature = sign_header(b"test-header", 88)
"""

from .common import (
    TEST_HEADER,
    TEST_MAX_HEADERS_LENGTH,
    TEST_SIGNATURE_SIZE,
    flip_byte,
    make_certificate_der,
    make_dkim_stdin,
    make_pkcs1_public_der,
    make_public_der,
    make_rsa_key,
    sign_header,
)

__all__ = [
    "TEST_HEADER",
    "TEST_MAX_HEADERS_LENGTH",
    "TEST_SIGNATURE_SIZE",
    "flip_byte",
    "make_certificate_der",
    "make_dkim_stdin",
    "make_pkcs1_public_der",
    "make_public_der",
    "make_rsa_key",
    "sign_header",
]
