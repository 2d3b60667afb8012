"""
CLI EVM Command

Generate a plonk proof and write the fixture Solidity tests load.

Usage:
    zkemail evm --pubkey <key> --signature <sig> --email-header <hdr> --max-headers-length N [--fixture-dir DIR]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace

from core.schemas.errors import ProofVerificationError, ZkEmailException
from prover import build_fixture, get_prover_client, save_fixture

from zkemail_cli.commands.run import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    collect_inputs,
    get_config,
)


logger = logging.getLogger(__name__)


def evm_cmd(args: Namespace) -> int:
    """
    Execute the evm command.

    Returns:
        Exit code
    """
    config = get_config(args)

    try:
        inputs = collect_inputs(args)
    except ZkEmailException as e:
        print(f"Input error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    client = get_prover_client(config.runtime.prover)
    pk, vk = client.setup()
    proof = client.prove(pk, inputs.to_stdin(), mode="plonk")

    try:
        client.verify(proof, vk)
    except ProofVerificationError as e:
        print(f"Proof verification failed: {e.message}", file=sys.stderr)
        return EXIT_VERIFICATION_FAILED

    fixture = build_fixture(proof, vk)

    # The verifying key is the same for every input.
    print(f"Verification Key: {fixture.vkey}")
    print(f"Public Values: {fixture.public_values}")
    print(f"Proof Bytes: {fixture.proof}")

    fixture_dir = args.fixture_dir or config.runtime.fixture.output_dir
    path = save_fixture(fixture, fixture_dir, config.runtime.fixture.file_name)
    print(f"Fixture saved to: {path}")

    return EXIT_SUCCESS
