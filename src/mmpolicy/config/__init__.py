"""Configuration management for mmpolicy.

This module provides configuration loading with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (MMPOLICY_*)
3. Config file (~/.mmpolicy/config.toml)
4. Default values (lowest priority)
"""

from mmpolicy.config.env import EnvReader
from mmpolicy.config.loader import (
    ConfigError,
    get_config,
    get_default_config_path,
    get_tool_path,
    load_config_file,
)
from mmpolicy.config.models import LoggingConfig, MmpolicyConfig, ToolPathsConfig

__all__ = [
    # Models
    "LoggingConfig",
    "MmpolicyConfig",
    "ToolPathsConfig",
    # Loader
    "ConfigError",
    "EnvReader",
    "get_config",
    "get_default_config_path",
    "get_tool_path",
    "load_config_file",
]
