"""
Prover Artifacts

Keys, execution reports and proofs exchanged between the host and a
proving backend. Byte fields serialize to JSON as 0x-prefixed hex.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from core.crypto.hashing import from_hex, to_hex
from core.schemas.public_values import PublicValuesStruct

ProofMode = Literal["core", "plonk"]


def _coerce_hex(value: Any) -> Any:
    if isinstance(value, str):
        return from_hex(value)
    return value


class ExecutionReport(BaseModel):
    """Cost summary of one program execution."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    total_instruction_count: int = Field(..., ge=0)
    stdin_bytes: int = Field(default=0, ge=0)
    committed_bytes: int = Field(default=0, ge=0)


class ProvingKey(BaseModel):
    """Handle on the program a backend proves."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    program_id: str = Field(..., min_length=1)
    strict_header_slice: bool = False


class VerifyingKey(BaseModel):
    """Commitment to the program; stays the same for every input."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    digest: bytes = Field(..., min_length=32, max_length=32)

    @field_validator("digest", mode="before")
    @classmethod
    def _decode_digest(cls, value: Any) -> Any:
        return _coerce_hex(value)

    @field_serializer("digest")
    def _serialize_digest(self, value: bytes) -> str:
        return to_hex(value)

    def bytes32(self) -> str:
        """Verifying key as a 0x-prefixed 32-byte hex string."""
        return to_hex(self.digest)


class ProofWithPublicValues(BaseModel):
    """A proof together with the public values it commits to."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: ProofMode = "core"
    proof: bytes = Field(..., description="Proof bytes, selector included")
    public_values: bytes = Field(..., description="ABI-encoded committed values")

    @field_validator("proof", "public_values", mode="before")
    @classmethod
    def _decode_bytes(cls, value: Any) -> Any:
        return _coerce_hex(value)

    @field_serializer("proof", "public_values")
    def _serialize_bytes(self, value: bytes) -> str:
        return to_hex(value)

    def to_bytes(self) -> bytes:
        """Proof bytes as submitted to an on-chain verifier."""
        return self.proof

    def decode_public_values(self, validate: bool = True) -> PublicValuesStruct:
        return PublicValuesStruct.abi_decode(self.public_values, validate=validate)

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.model_dump(mode="json"), indent=2))
        return path

    @classmethod
    def load(cls, path: str | Path) -> "ProofWithPublicValues":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Proof file not found: {path}")
        return cls.model_validate(json.loads(path.read_text()))


__all__ = [
    "ProofMode",
    "ExecutionReport",
    "ProvingKey",
    "VerifyingKey",
    "ProofWithPublicValues",
]
