"""
Host-side proving for the DKIM program.

Usage:
    from prover import ProverStdin, get_prover_client

    client = get_prover_client()
    stdin = ProverStdin.for_dkim(pubkey, signature, email_header, max_headers_length)

    public_values, report = client.execute(stdin)

    pk, vk = client.setup()
    proof = client.prove(pk, stdin)
    client.verify(proof, vk)
"""

from .stdin import ProgramIO, ProverStdin
from .artifacts import (
    ExecutionReport,
    ProofMode,
    ProofWithPublicValues,
    ProvingKey,
    VerifyingKey,
)
from .client import MockProverClient, ProverClient, get_prover_client
from .fixture import (
    FIXTURE_FILE,
    ZkEmailProofFixture,
    build_fixture,
    load_fixture,
    save_fixture,
)

__all__ = [
    "ProgramIO",
    "ProverStdin",
    "ExecutionReport",
    "ProofMode",
    "ProofWithPublicValues",
    "ProvingKey",
    "VerifyingKey",
    "MockProverClient",
    "ProverClient",
    "get_prover_client",
    "FIXTURE_FILE",
    "ZkEmailProofFixture",
    "build_fixture",
    "load_fixture",
    "save_fixture",
]
