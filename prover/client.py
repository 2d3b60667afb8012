"""
Prover Client

Interface to a proving backend, shaped like a zkVM host SDK:
execute, setup, prove, verify.

MockProverClient runs the program in-process and emits a deterministic
proof that binds the public values to the verifying key. It proves
nothing cryptographically; it exists so the host flow (execute, prove,
verify, fixture export) runs end to end without a real backend.
"""

from __future__ import annotations

import hmac
import logging
from abc import ABC, abstractmethod
from typing import Callable

from core.config.runtime import ProverConfig
from core.crypto.hashing import hash_concat, sha256
from core.schemas.errors import (
    AbiDecodeError,
    ConfigurationError,
    ProofGenerationError,
    ProofVerificationError,
    StdinReadError,
)

from prover import program
from prover.artifacts import (
    ExecutionReport,
    ProofMode,
    ProofWithPublicValues,
    ProvingKey,
    VerifyingKey,
)
from prover.stdin import ProgramIO, ProverStdin

logger = logging.getLogger(__name__)

SELECTOR_SIZE = 4


class ProverClient(ABC):
    """Interface for executing, proving and verifying the DKIM program."""

    @abstractmethod
    def execute(self, stdin: ProverStdin) -> tuple[bytes, ExecutionReport]:
        """Run the program without proving; return committed bytes and cost."""
        raise NotImplementedError

    @abstractmethod
    def setup(self) -> tuple[ProvingKey, VerifyingKey]:
        raise NotImplementedError

    @abstractmethod
    def prove(
        self,
        pk: ProvingKey,
        stdin: ProverStdin,
        mode: ProofMode = "core",
    ) -> ProofWithPublicValues:
        raise NotImplementedError

    @abstractmethod
    def verify(self, proof: ProofWithPublicValues, vk: VerifyingKey) -> None:
        """
        Check a proof against a verifying key.

        Raises:
            ProofVerificationError: If the proof does not verify
        """
        raise NotImplementedError


def mode_selector(mode: str) -> bytes:
    """4-byte prefix that tags proof bytes with the proof system."""
    return sha256(mode.encode("utf-8"))[:SELECTOR_SIZE]


class MockProverClient(ProverClient):
    """In-process backend with deterministic, non-cryptographic proofs."""

    def __init__(self, strict_header_slice: bool = False):
        self.strict_header_slice = strict_header_slice

    def _run(self, stdin: ProverStdin, strict_header_slice: bool) -> tuple[bytes, ExecutionReport]:
        io = ProgramIO(stdin)
        try:
            program.main(io, strict_header_slice=strict_header_slice)
        except StdinReadError as e:
            raise ProofGenerationError(
                f"Program execution failed: {e.message}",
                details=e.details,
            ) from e

        report = ExecutionReport(
            total_instruction_count=io.cycles,
            stdin_bytes=stdin.total_bytes,
            committed_bytes=len(io.committed),
        )
        return io.committed, report

    def execute(self, stdin: ProverStdin) -> tuple[bytes, ExecutionReport]:
        public_values, report = self._run(stdin, self.strict_header_slice)
        logger.info(
            "Executed program: %d cycles, %d bytes committed",
            report.total_instruction_count,
            report.committed_bytes,
        )
        return public_values, report

    def setup(self) -> tuple[ProvingKey, VerifyingKey]:
        pid = program.program_id(self.strict_header_slice)
        pk = ProvingKey(
            program_id=pid.decode("utf-8"),
            strict_header_slice=self.strict_header_slice,
        )
        vk = VerifyingKey(digest=program.program_digest(self.strict_header_slice))
        return pk, vk

    def prove(
        self,
        pk: ProvingKey,
        stdin: ProverStdin,
        mode: ProofMode = "core",
    ) -> ProofWithPublicValues:
        public_values, report = self._run(stdin, pk.strict_header_slice)
        vk_digest = program.program_digest(pk.strict_header_slice)
        proof = mode_selector(mode) + hash_concat(vk_digest, public_values)
        logger.info(
            "Generated %s proof over %d cycles",
            mode,
            report.total_instruction_count,
        )
        return ProofWithPublicValues(mode=mode, proof=proof, public_values=public_values)

    def verify(self, proof: ProofWithPublicValues, vk: VerifyingKey) -> None:
        try:
            proof.decode_public_values()
        except AbiDecodeError as e:
            raise ProofVerificationError(
                f"Malformed public values: {e.message}",
                details=e.details,
            ) from e

        expected = mode_selector(proof.mode) + hash_concat(vk.digest, proof.public_values)
        if not hmac.compare_digest(expected, proof.to_bytes()):
            raise ProofVerificationError(
                "Proof does not match verifying key and public values",
                details={"vkey": vk.bytes32(), "mode": proof.mode},
            )
        logger.info("Verified %s proof against vkey %s", proof.mode, vk.bytes32())


_BACKENDS: dict[str, Callable[[ProverConfig], ProverClient]] = {
    "mock": lambda cfg: MockProverClient(strict_header_slice=cfg.strict_header_slice),
}


def get_prover_client(config: ProverConfig | None = None) -> ProverClient:
    """
    Create the prover client named by configuration.

    Raises:
        ConfigurationError: If the backend name is unknown
    """
    config = config or ProverConfig()
    factory = _BACKENDS.get(config.backend)
    if factory is None:
        raise ConfigurationError(
            f"Unknown prover backend: {config.backend!r}",
            details={"available": sorted(_BACKENDS)},
        )
    return factory(config)


__all__ = [
    "ProverClient",
    "MockProverClient",
    "mode_selector",
    "get_prover_client",
]
