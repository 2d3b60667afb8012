"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m zkemail_cli run --execute --pubkey KEY --signature SIG --email-header HDR --max-headers-length N [--json]
    python -m zkemail_cli run --prove --pubkey KEY --signature SIG --email-header HDR --max-headers-length N [--out PATH]
    python -m zkemail_cli evm --pubkey KEY --signature SIG --email-header HDR --max-headers-length N [--fixture-dir DIR]
    python -m zkemail_cli config --init|--show

Environment Variables:
    ZKEMAIL_LOG_LEVEL               Log level (default: INFO)
    ZKEMAIL_LOG_FILE                Also log to this file
    ZKEMAIL_PROVER_BACKEND          Prover backend (default: mock)
    ZKEMAIL_PROOF_MODE              Proof mode for `run --prove`: core, plonk
    ZKEMAIL_STRICT_HEADER_SLICE     Fail headers shorter than max_headers_length
    ZKEMAIL_FIXTURE_DIR             Output directory for the EVM fixture
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from zkemail_cli import __version__
from zkemail_cli.commands import run, evm
from zkemail_cli.config import load_config, get_default_config_template


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _uint32(value: str) -> int:
    number = int(value)
    if not 0 <= number <= 2**32 - 1:
        raise argparse.ArgumentTypeError(f"must be a uint32, got {value}")
    return number


def add_input_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the four program inputs, in stdin read order."""
    key_group = parser.add_mutually_exclusive_group(required=True)
    key_group.add_argument(
        "--pubkey",
        type=str,
        help="DER RSA public key as 0x-hex or base64 (DKIM p= tag)",
    )
    key_group.add_argument(
        "--pubkey-file",
        type=Path,
        help="Path to a DER or PEM public key file",
    )
    parser.add_argument(
        "--signature",
        type=str,
        required=True,
        help="Signature as 0x-hex or base64 (DKIM b= tag)",
    )
    parser.add_argument(
        "--email-header",
        type=str,
        required=True,
        help="Canonicalized header: UTF-8 text, or 0x-hex for raw bytes",
    )
    parser.add_argument(
        "--max-headers-length",
        type=_uint32,
        required=True,
        help="Declared maximum header length (uint32)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="zkemail",
        description="zk-email CLI - Execute, prove and export DKIM signature verification.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to JSON or YAML configuration file (default: ./zkemail.json, ./zkemail.yaml or ~/.config/zkemail/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- run command ---
    run_parser = subparsers.add_parser(
        "run",
        help="Execute the program or generate and verify a proof",
        description="Run DKIM verification in the prover; exactly one of --execute/--prove.",
    )
    run_parser.add_argument(
        "--execute",
        action="store_true",
        default=False,
        help="Execute without proving and print the committed values",
    )
    run_parser.add_argument(
        "--prove",
        action="store_true",
        default=False,
        help="Generate a proof and verify it",
    )
    add_input_arguments(run_parser)
    run_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Save the proof as JSON (prove mode)",
    )
    run_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary (execute mode)",
    )
    run_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )
    run_parser.set_defaults(func=run.run_cmd)

    # --- evm command ---
    evm_parser = subparsers.add_parser(
        "evm",
        help="Generate a plonk proof and an EVM test fixture",
        description="Prove, then write fixture.json for Solidity verifier tests.",
    )
    add_input_arguments(evm_parser)
    evm_parser.add_argument(
        "--fixture-dir",
        type=str,
        default=None,
        help="Directory for fixture.json (default: from config)",
    )
    evm_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )
    evm_parser.set_defaults(func=evm.evm_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
        description="Create or show configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default=None,
        help="Config file path (default: ./zkemail.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path or "zkemail.json")
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (ZKEMAIL_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config = load_config(Path(args.path) if args.path else None)
        config_dict = {
            "log_level": config.log_level,
            "log_file": config.log_file,
            "output_format": config.default_output_format,
            **config.runtime.to_dict(),
        }
        print(json.dumps(config_dict, indent=2))
        return EXIT_SUCCESS

    print("Usage: zkemail config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
