"""
CLI Configuration

Configuration management for the Merkle generator CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path


# Environment variable prefix
ENV_PREFIX = "MERKLE_"

OUTPUT_FORMATS = ("human", "json")


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    # YAML runtime config (csv source, output files)
    runtime_config: str | None = None

    @property
    def json_output(self) -> bool:
        return self.default_output_format == "json"


def load_config_from_env() -> CLIConfig:
    """Load configuration from environment variables."""
    config = CLIConfig()

    config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", config.log_level)
    config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    config.default_output_format = os.getenv(
        f"{ENV_PREFIX}OUTPUT_FORMAT", config.default_output_format
    )
    config.runtime_config = os.getenv(f"{ENV_PREFIX}RUNTIME_CONFIG")

    return config


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    config = CLIConfig()

    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)
    config.default_output_format = data.get(
        "default_output_format", config.default_output_format
    )
    config.runtime_config = data.get("runtime_config", config.runtime_config)

    if config.default_output_format not in OUTPUT_FORMATS:
        raise ValueError(
            f"default_output_format must be one of {OUTPUT_FORMATS}, "
            f"got {config.default_output_format!r}"
        )

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
            Path.cwd() / "merkle.json",
            Path.cwd() / ".merkle.json",
            Path.home() / ".config" / "merkle" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    env_config = load_config_from_env()

    # Env takes precedence
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = env_config.log_level
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = env_config.log_file
    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        config.default_output_format = env_config.default_output_format
    if os.getenv(f"{ENV_PREFIX}RUNTIME_CONFIG"):
        config.runtime_config = env_config.runtime_config

    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "log_level": "WARNING",
  "log_file": null,
  "default_output_format": "human",
  "runtime_config": "merkle.yaml"
}
"""


def get_default_runtime_template() -> str:
    """Get a template YAML runtime configuration."""
    return """csv:
  file_path: data/airdrop.csv
  has_header: true
output:
  write_files: true
  leaves_file_limit: 1000
  preview_count: 5
  spot_check_index: 100
"""
