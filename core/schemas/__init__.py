"""
Schemas
File: __init__.py

Purpose: Export the error taxonomy shared by every layer.

Public value schemas live in core.schemas.public_values and are imported
from there directly; they depend on core.abi, which in turn raises the
errors defined here.
"""

from .errors import (
    AbiDecodeError,
    ConfigurationError,
    ErrorCodes,
    ExecutionMismatchError,
    FixtureError,
    InputEncodingError,
    ProofGenerationError,
    ProofVerificationError,
    StdinReadError,
    ZkEmailError,
    ZkEmailException,
)

__all__ = [
    "AbiDecodeError",
    "ConfigurationError",
    "ErrorCodes",
    "ExecutionMismatchError",
    "FixtureError",
    "InputEncodingError",
    "ProofGenerationError",
    "ProofVerificationError",
    "StdinReadError",
    "ZkEmailError",
    "ZkEmailException",
]
