"""
Pytest configuration and shared fixtures for zk-email tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

TEST_HEADER = _common.TEST_HEADER
TEST_MAX_HEADERS_LENGTH = _common.TEST_MAX_HEADERS_LENGTH
make_rsa_key = _common.make_rsa_key
make_public_der = _common.make_public_der
sign_header = _common.sign_header
make_dkim_stdin = _common.make_dkim_stdin


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(scope="session")
def rsa_key():
    """Provide a 1024-bit RSA key pair shared across the session."""
    return make_rsa_key(1024)


@pytest.fixture(scope="session")
def other_rsa_key():
    """Provide a second, unrelated 1024-bit RSA key pair."""
    return make_rsa_key(1024, slot=1)


@pytest.fixture(scope="session")
def pubkey_der(rsa_key):
    """Provide the DER SubjectPublicKeyInfo of rsa_key."""
    return make_public_der(rsa_key)


@pytest.fixture(scope="session")
def full_signature(rsa_key):
    """Provide a full-length signature over the test header."""
    return sign_header(TEST_HEADER, TEST_MAX_HEADERS_LENGTH, rsa_key)


@pytest.fixture
def dkim_stdin(pubkey_der):
    """Provide program stdin with the test header and an 8-byte signature."""
    return make_dkim_stdin(pubkey=pubkey_der)


@pytest.fixture
def isolated_env(monkeypatch, tmp_path):
    """Run in an empty directory and home with no ZKEMAIL_* variables set."""
    import os
    for name in list(os.environ):
        if name.startswith("ZKEMAIL_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    return tmp_path


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
