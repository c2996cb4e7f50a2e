"""
Runtime Configuration

Central configuration for airdrop tree generation.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from typing import Any, Optional
from pathlib import Path

from dotenv import load_dotenv

from core.schemas.errors import ConfigError

load_dotenv()


@dataclass
class CSVConfig:
    """Configuration for the airdrop CSV source."""
    file_path: Optional[str] = None
    has_header: bool = True


@dataclass
class OutputConfig:
    """Configuration for generated reports and files."""
    write_files: bool = True
    leaves_file_limit: int = 1000
    preview_count: int = 5
    spot_check_index: int = 100


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for the Merkle generator.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    csv: CSVConfig = field(default_factory=CSVConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MERKLE_CSV_FILE: Airdrop CSV path
        - MERKLE_LEAVES_FILE_LIMIT: Max entries for writing the leaves file
        - MERKLE_PREVIEW_COUNT: Entries shown before eliding output
        - MERKLE_WRITE_FILES: Write .root/.leaves/.proof files (true/false)
        """
        overrides: dict[str, Any] = {}

        if os.getenv("MERKLE_CSV_FILE"):
            overrides.setdefault("csv", {})["file_path"] = os.getenv("MERKLE_CSV_FILE")

        try:
            if os.getenv("MERKLE_LEAVES_FILE_LIMIT"):
                overrides.setdefault("output", {})["leaves_file_limit"] = int(
                    os.getenv("MERKLE_LEAVES_FILE_LIMIT", "1000")
                )
            if os.getenv("MERKLE_PREVIEW_COUNT"):
                overrides.setdefault("output", {})["preview_count"] = int(
                    os.getenv("MERKLE_PREVIEW_COUNT", "5")
                )
        except ValueError as e:
            raise ConfigError(f"Invalid integer in environment: {e}") from e

        if os.getenv("MERKLE_WRITE_FILES"):
            overrides.setdefault("output", {})["write_files"] = (
                os.getenv("MERKLE_WRITE_FILES", "true").lower() == "true"
            )

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        csv_data = data.get("csv", {}) or {}
        output_data = data.get("output", {}) or {}

        try:
            csv = CSVConfig(**csv_data)
            output = OutputConfig(**output_data)
        except TypeError as e:
            raise ConfigError(f"Unknown configuration key: {e}") from e

        return cls(csv=csv, output=output)

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "csv" in overrides:
            for key, value in overrides["csv"].items():
                setattr(new_config.csv, key, value)

        if "output" in overrides:
            for key, value in overrides["output"].items():
                setattr(new_config.output, key, value)

        return new_config

    def validate(self) -> None:
        """
        Validate settings needed to process an airdrop CSV.

        Raises:
            ConfigError: If a required setting is missing or out of range
        """
        if not self.csv.file_path:
            raise ConfigError("csv.file_path is required")
        if self.output.leaves_file_limit < 0:
            raise ConfigError("output.leaves_file_limit must be non-negative")
        if self.output.preview_count < 0:
            raise ConfigError("output.preview_count must be non-negative")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "csv": {
                "file_path": self.csv.file_path,
                "has_header": self.csv.has_header,
            },
            "output": {
                "write_files": self.output.write_files,
                "leaves_file_limit": self.output.leaves_file_limit,
                "preview_count": self.output.preview_count,
                "spot_check_index": self.output.spot_check_index,
            },
        }
