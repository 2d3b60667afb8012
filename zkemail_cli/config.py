"""
CLI Configuration

Configuration management for the zk-email CLI.
Supports environment variables and JSON or YAML configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from core.config.runtime import RuntimeConfig


# Environment variable prefix
ENV_PREFIX = "ZKEMAIL_"


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    # Prover and fixture settings
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)


YAML_SUFFIXES = (".yaml", ".yml")


def read_config_data(path: Path) -> dict[str, Any]:
    """Parse a JSON or, by file suffix, YAML configuration file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        if path.suffix.lower() in YAML_SUFFIXES:
            import yaml
            data = yaml.safe_load(f) or {}
        else:
            data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Config file must hold a mapping: {path}")
    return data


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON or YAML file."""
    data = read_config_data(path)

    config = CLIConfig()

    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)
    config.default_output_format = data.get("output_format", config.default_output_format)

    config.runtime = RuntimeConfig.from_dict(data)

    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / "zkemail.json",
            Path.cwd() / ".zkemail.json",
            Path.cwd() / "zkemail.yaml",
            Path.home() / ".config" / "zkemail" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    # Merge env into config (env takes precedence)
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", config.log_level)
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        config.default_output_format = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT", config.default_output_format)

    config.runtime = config.runtime.with_env_overrides()

    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "log_level": "INFO",
  "log_file": null,
  "output_format": "human",
  "prover": {
    "backend": "mock",
    "proof_mode": "core",
    "strict_header_slice": false
  },
  "fixture": {
    "output_dir": "contracts/src/fixtures",
    "file_name": "fixture.json"
  }
}
"""
