"""
Schemas & Errors
File: errors.py

Purpose: Standard error taxonomy for the zk-email host tooling.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

The DKIM verifier itself never raises: every interior failure collapses
to a ``False`` result. These errors belong to the layers around it
(ABI decoding, prover stdin, proving backend, fixture IO, CLI inputs).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used by the host tooling."""

    # Encoding Errors
    ABI_DECODE_ERROR = "ABI_DECODE_ERROR"
    INPUT_ENCODING_ERROR = "INPUT_ENCODING_ERROR"

    # Program IO Errors
    STDIN_READ_ERROR = "STDIN_READ_ERROR"

    # Prover Errors
    PROOF_GENERATION_FAILED = "PROOF_GENERATION_FAILED"
    PROOF_VERIFICATION_FAILED = "PROOF_VERIFICATION_FAILED"
    EXECUTION_MISMATCH = "EXECUTION_MISMATCH"

    # Host Errors
    FIXTURE_IO_ERROR = "FIXTURE_IO_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class ZkEmailError(BaseModel):
    """
    Base error model for structured error communication.

    Used when an error has to be reported as data (JSON CLI output)
    rather than raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.PROOF_VERIFICATION_FAILED],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class ZkEmailException(Exception):
    """
    Base exception for all host-side zk-email errors.

    Carries structured error information and can be converted to a
    ZkEmailError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "ZKEMAIL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> ZkEmailError:
        """Convert this exception to a ZkEmailError model."""
        return ZkEmailError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class AbiDecodeError(ZkEmailException):
    """Raised when committed public values cannot be decoded."""

    def __init__(
        self,
        message: str,
        offset: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if offset is not None:
            full_details["offset"] = offset
        super().__init__(
            message=message,
            code=ErrorCodes.ABI_DECODE_ERROR,
            details=full_details,
        )


class InputEncodingError(ZkEmailException):
    """Raised when an operator-supplied input cannot be decoded to bytes."""

    def __init__(
        self,
        message: str,
        field_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_name:
            full_details["field"] = field_name
        super().__init__(
            message=message,
            code=ErrorCodes.INPUT_ENCODING_ERROR,
            details=full_details,
        )


class StdinReadError(ZkEmailException):
    """Raised when the program reads past the end of stdin or hits a type mismatch."""

    def __init__(
        self,
        message: str,
        position: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if position is not None:
            full_details["position"] = position
        super().__init__(
            message=message,
            code=ErrorCodes.STDIN_READ_ERROR,
            details=full_details,
        )


class ProofGenerationError(ZkEmailException):
    """Raised when the proving backend fails to execute or prove the program."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_GENERATION_FAILED,
            details=details,
        )


class ProofVerificationError(ZkEmailException):
    """Raised when a proof does not verify against a verifying key."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_VERIFICATION_FAILED,
            details=details,
        )


class ExecutionMismatchError(ZkEmailException):
    """Raised when the committed result disagrees with a host-side re-check."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EXECUTION_MISMATCH,
            details=details,
        )


class FixtureError(ZkEmailException):
    """Raised when an EVM fixture cannot be built or written."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.FIXTURE_IO_ERROR,
            details=full_details,
        )


class ConfigurationError(ZkEmailException):
    """Raised when configuration names an unknown backend or holds invalid values."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIGURATION_ERROR,
            details=details,
        )
