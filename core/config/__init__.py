"""
Runtime Configuration Module

Provides configuration loading and management for the zk-email prover.
"""

from .runtime import (
    DEFAULT_FIXTURE_DIR,
    PROOF_MODES,
    FixtureConfig,
    ProverConfig,
    RuntimeConfig,
)

__all__ = [
    "DEFAULT_FIXTURE_DIR",
    "PROOF_MODES",
    "FixtureConfig",
    "ProverConfig",
    "RuntimeConfig",
]
