"""
CLI command modules.
"""

from zkemail_cli.commands import run, evm

__all__ = ["run", "evm"]
