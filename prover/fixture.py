"""
EVM Fixture Export

Writes a JSON fixture that Solidity tests load to verify a proof
on-chain end to end. The fixture is a convenience artifact for contract
testing, not part of the verification contract.

JSON keys are camelCase. Byte fields hold the 32-byte slot values decoded
from the committed public values, as arrays of integers; `publicValues`
and `proof` are 0x-prefixed hex. `pubkeyHash` carries the verification
result under the name the contracts expect.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from core.crypto.hashing import to_hex
from core.schemas.errors import AbiDecodeError, FixtureError

from prover.artifacts import ProofWithPublicValues, VerifyingKey

logger = logging.getLogger(__name__)

FIXTURE_FILE = "fixture.json"


class ZkEmailProofFixture(BaseModel):
    """Proof, verifying key and decoded public values for contract tests."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    pubkey: list[int] = Field(..., alias="pubkey")
    signature: list[int] = Field(..., alias="signature")
    email_header: list[int] = Field(..., alias="emailHeader")
    pubkey_hash: bool = Field(..., alias="pubkeyHash")
    max_headers_length: int = Field(..., alias="maxHeadersLength")
    vkey: str = Field(..., alias="vkey")
    public_values: str = Field(..., alias="publicValues")
    proof: str = Field(..., alias="proof")

    def to_json(self) -> str:
        return json.dumps(self.model_dump(by_alias=True), indent=2)


def build_fixture(proof: ProofWithPublicValues, vk: VerifyingKey) -> ZkEmailProofFixture:
    """
    Decode a proof's public values into a fixture.

    Raises:
        FixtureError: If the public values do not decode
    """
    try:
        values = proof.decode_public_values()
    except AbiDecodeError as e:
        raise FixtureError(f"Cannot decode public values: {e.message}", details=e.details) from e

    return ZkEmailProofFixture(
        pubkey=list(values.pubkey),
        signature=list(values.signature),
        email_header=list(values.email_header),
        pubkey_hash=values.verified,
        max_headers_length=values.max_headers_length,
        vkey=vk.bytes32(),
        public_values=to_hex(proof.public_values),
        proof=to_hex(proof.to_bytes()),
    )


def save_fixture(fixture: ZkEmailProofFixture, out_dir: str | Path, file_name: str = FIXTURE_FILE) -> Path:
    """
    Write the fixture as pretty JSON, creating the directory.

    Raises:
        FixtureError: If the directory or file cannot be written
    """
    out_path = Path(out_dir)
    target = out_path / file_name
    try:
        out_path.mkdir(parents=True, exist_ok=True)
        target.write_text(fixture.to_json())
    except OSError as e:
        raise FixtureError(f"Failed to write fixture: {e}", path=str(target)) from e

    logger.info("Fixture written to %s", target)
    return target


def load_fixture(path: str | Path) -> ZkEmailProofFixture:
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except (OSError, ValueError) as e:
        raise FixtureError(f"Failed to read fixture: {e}", path=str(path)) from e
    return ZkEmailProofFixture.model_validate(data)


__all__ = [
    "FIXTURE_FILE",
    "ZkEmailProofFixture",
    "build_fixture",
    "save_fixture",
    "load_fixture",
]
