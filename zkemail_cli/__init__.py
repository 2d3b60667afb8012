"""
zk-email CLI

Command-line interface for proving DKIM signature verification.

Usage:
    python -m zkemail_cli run --execute --pubkey <key> --signature <sig> --email-header <hdr> --max-headers-length N
    python -m zkemail_cli run --prove --pubkey <key> --signature <sig> --email-header <hdr> --max-headers-length N
    python -m zkemail_cli evm --pubkey <key> --signature <sig> --email-header <hdr> --max-headers-length N
    python -m zkemail_cli config --init
"""

__version__ = "0.1.0"
