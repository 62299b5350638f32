"""Configuration management."""

from .settings import ComparisonSettings
from .manager import (
    ConfigManager,
    ConfigError,
    DatasetConfig,
    OutputConfig,
    JobConfig,
    create_sample_config
)

__all__ = [
    "ComparisonSettings",
    "ConfigManager",
    "ConfigError",
    "DatasetConfig",
    "OutputConfig",
    "JobConfig",
    "create_sample_config",
]
