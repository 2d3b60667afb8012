"""
CLI Run Command

Execute the DKIM program, or prove it and verify the proof.

Usage:
    zkemail run --execute --pubkey <key> --signature <sig> --email-header <hdr> --max-headers-length N
    zkemail run --prove --pubkey <key> --signature <sig> --email-header <hdr> --max-headers-length N [--out proof.json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, field, asdict
from typing import Any

from core.crypto.dkim import verify_dkim_signature
from core.crypto.hashing import to_hex
from core.schemas.errors import (
    ExecutionMismatchError,
    ProofVerificationError,
    ZkEmailException,
)
from core.schemas.public_values import PublicValuesStruct
from prover import ProverStdin, get_prover_client

from zkemail_cli.config import CLIConfig
from zkemail_cli.inputs import decode_binary_arg, decode_header_arg, read_pubkey_file


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass(frozen=True)
class DkimInputs:
    """Decoded program inputs, in stdin read order."""
    pubkey: bytes
    signature: bytes
    email_header: bytes
    max_headers_length: int

    def to_stdin(self) -> ProverStdin:
        return ProverStdin.for_dkim(
            self.pubkey,
            self.signature,
            self.email_header,
            self.max_headers_length,
        )


@dataclass
class ExecuteSummary:
    """Decoded public values and cost of one execution."""
    pubkey: str = ""
    signature: str = ""
    email_header: str = ""
    verified: bool = False
    max_headers_length: int = 0
    cycles: int = 0
    values_correct: bool = False
    errors: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["errors"]:
            del d["errors"]
        return d


def get_config(args: Namespace) -> CLIConfig:
    config = getattr(args, "cli_config", None)
    return config if config is not None else CLIConfig()


def collect_inputs(args: Namespace) -> DkimInputs:
    """
    Decode the input arguments shared by run and evm.

    Raises:
        InputEncodingError: If an argument cannot be decoded
    """
    if args.pubkey_file:
        pubkey = read_pubkey_file(args.pubkey_file)
    else:
        pubkey = decode_binary_arg(args.pubkey, "pubkey")

    return DkimInputs(
        pubkey=pubkey,
        signature=decode_binary_arg(args.signature, "signature"),
        email_header=decode_header_arg(args.email_header),
        max_headers_length=args.max_headers_length,
    )


def check_public_values(
    inputs: DkimInputs,
    decoded: PublicValuesStruct,
    strict_header_slice: bool = False,
) -> None:
    """
    Re-run verification on the host and compare with what the program committed.

    Raises:
        ExecutionMismatchError: If the committed record differs from the host's
    """
    expected_verified = verify_dkim_signature(
        inputs.pubkey,
        inputs.signature,
        inputs.email_header,
        inputs.max_headers_length,
        strict_header_slice=strict_header_slice,
    )
    expected = PublicValuesStruct(
        pubkey=inputs.pubkey,
        signature=inputs.signature,
        verified=expected_verified,
        email_header=inputs.email_header,
        max_headers_length=inputs.max_headers_length,
    ).slot_form()

    if decoded != expected:
        mismatched = [
            name for name in PublicValuesStruct.model_fields
            if getattr(decoded, name) != getattr(expected, name)
        ]
        raise ExecutionMismatchError(
            f"Committed public values differ from host check: {', '.join(mismatched)}",
            details={"fields": mismatched},
        )


def print_summary_human(summary: ExecuteSummary) -> None:
    """Print summary in human-readable format."""
    print(f"pubkey: {summary.pubkey}")
    print(f"signature: {summary.signature}")
    print(f"email_header: {summary.email_header}")
    print(f"verified: {str(summary.verified).lower()}")
    print(f"max_headers_length: {summary.max_headers_length}")
    if summary.values_correct:
        print("Values are correct!")
    for err in summary.errors:
        print(f"error: {err['message']}", file=sys.stderr)
    print(f"Number of cycles: {summary.cycles}")


def print_summary_json(summary: ExecuteSummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def execute(inputs: DkimInputs, config: CLIConfig, output_json: bool = False) -> int:
    prover_config = config.runtime.prover
    client = get_prover_client(prover_config)

    public_values, report = client.execute(inputs.to_stdin())
    logger.info("Program executed successfully.")

    decoded = PublicValuesStruct.abi_decode(public_values)
    summary = ExecuteSummary(
        pubkey=to_hex(decoded.pubkey),
        signature=to_hex(decoded.signature),
        email_header=to_hex(decoded.email_header),
        verified=decoded.verified,
        max_headers_length=decoded.max_headers_length,
        cycles=report.total_instruction_count,
    )

    try:
        check_public_values(inputs, decoded, prover_config.strict_header_slice)
        summary.values_correct = True
    except ExecutionMismatchError as e:
        summary.errors.append(e.to_error_model().model_dump())

    if output_json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS if summary.values_correct else EXIT_VERIFICATION_FAILED


def prove(inputs: DkimInputs, config: CLIConfig, out_path: str | None = None) -> int:
    prover_config = config.runtime.prover
    client = get_prover_client(prover_config)

    pk, vk = client.setup()
    proof = client.prove(pk, inputs.to_stdin(), mode=prover_config.proof_mode)
    print("Successfully generated proof!")

    try:
        client.verify(proof, vk)
    except ProofVerificationError as e:
        print(f"Proof verification failed: {e.message}", file=sys.stderr)
        return EXIT_VERIFICATION_FAILED
    print("Successfully verified proof!")

    if out_path:
        saved = proof.save(out_path)
        print(f"Proof saved to: {saved}")

    return EXIT_SUCCESS


def run_cmd(args: Namespace) -> int:
    """
    Execute the run command.

    Exactly one of --execute / --prove must be given.

    Returns:
        Exit code
    """
    if args.execute == args.prove:
        print("Error: You must specify either --execute or --prove", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    config = get_config(args)

    try:
        inputs = collect_inputs(args)
    except ZkEmailException as e:
        print(f"Input error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.execute:
        output_json = args.json or config.default_output_format == "json"
        return execute(inputs, config, output_json=output_json)
    return prove(inputs, config, out_path=args.out)
