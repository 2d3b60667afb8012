"""
Runtime Configuration

Central configuration for the prover backend, proof mode and fixture output.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from typing import Any

from dotenv import load_dotenv

load_dotenv()

PROOF_MODES = ("core", "plonk")

DEFAULT_FIXTURE_DIR = "contracts/src/fixtures"


@dataclass
class ProverConfig:
    """Configuration for the proving backend."""
    backend: str = "mock"
    proof_mode: str = "core"
    strict_header_slice: bool = False

    def __post_init__(self):
        if self.proof_mode not in PROOF_MODES:
            raise ValueError(
                f"proof_mode must be one of {PROOF_MODES}, got {self.proof_mode!r}"
            )


@dataclass
class FixtureConfig:
    """Configuration for EVM fixture export."""
    output_dir: str = DEFAULT_FIXTURE_DIR
    file_name: str = "fixture.json"


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Built from:
    - A dictionary (a parsed JSON or YAML config file)
    - Environment variable overrides
    - Programmatic construction
    """
    prover: ProverConfig = field(default_factory=ProverConfig)
    fixture: FixtureConfig = field(default_factory=FixtureConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - ZKEMAIL_PROVER_BACKEND: Prover backend name
        - ZKEMAIL_PROOF_MODE: Proof mode (core, plonk)
        - ZKEMAIL_STRICT_HEADER_SLICE: Fail when the header is shorter than max_headers_length (true/false)
        - ZKEMAIL_FIXTURE_DIR: Directory for the EVM fixture
        """
        overrides: dict[str, Any] = {}

        if os.getenv("ZKEMAIL_PROVER_BACKEND"):
            overrides.setdefault("prover", {})["backend"] = os.getenv("ZKEMAIL_PROVER_BACKEND")
        if os.getenv("ZKEMAIL_PROOF_MODE"):
            overrides.setdefault("prover", {})["proof_mode"] = os.getenv("ZKEMAIL_PROOF_MODE")
        if os.getenv("ZKEMAIL_STRICT_HEADER_SLICE"):
            overrides.setdefault("prover", {})["strict_header_slice"] = (
                os.getenv("ZKEMAIL_STRICT_HEADER_SLICE", "false").lower() == "true"
            )

        if os.getenv("ZKEMAIL_FIXTURE_DIR"):
            overrides.setdefault("fixture", {})["output_dir"] = os.getenv("ZKEMAIL_FIXTURE_DIR")

        return overrides

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        prover_data = data.get("prover", {})
        fixture_data = data.get("fixture", {})

        prover = ProverConfig(**prover_data) if prover_data else ProverConfig()
        fixture = FixtureConfig(**fixture_data) if fixture_data else FixtureConfig()

        return cls(
            prover=prover,
            fixture=fixture,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "prover" in overrides:
            for key, value in overrides["prover"].items():
                setattr(new_config.prover, key, value)
            new_config.prover.__post_init__()

        if "fixture" in overrides:
            for key, value in overrides["fixture"].items():
                setattr(new_config.fixture, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "prover": {
                "backend": self.prover.backend,
                "proof_mode": self.prover.proof_mode,
                "strict_header_slice": self.prover.strict_header_slice,
            },
            "fixture": {
                "output_dir": self.fixture.output_dir,
                "file_name": self.fixture.file_name,
            },
            "extra": self.extra,
        }
