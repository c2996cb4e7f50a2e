"""
Runtime Configuration Module

Provides configuration loading and management for the Merkle generator.
"""

from .runtime import (
    RuntimeConfig,
    CSVConfig,
    OutputConfig,
)

__all__ = [
    "RuntimeConfig",
    "CSVConfig",
    "OutputConfig",
]
