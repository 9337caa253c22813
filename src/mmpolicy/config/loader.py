"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (MMPOLICY_*)
3. Config file (~/.mmpolicy/config.toml)
4. Default values

Environment variables:
- MMPOLICY_CONFIG_PATH: Path to config file (overrides default location)
- MMPOLICY_MMAPPLYPOLICY_PATH: Path to mmapplypolicy executable
- MMPOLICY_LOG_LEVEL: Log level (debug, info, warning, error)
- MMPOLICY_LOG_FORMAT: Log format (text, json)
- MMPOLICY_LOG_FILE: Log file path
- MMPOLICY_LOG_INCLUDE_STDERR: Also log to stderr when a log file is set
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from mmpolicy.config.env import EnvReader
from mmpolicy.config.models import LoggingConfig, MmpolicyConfig, ToolPathsConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".mmpolicy"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


class ConfigError(Exception):
    """Raised when the configuration file or values are invalid."""

    pass


def get_default_config_path(env: EnvReader | None = None) -> Path:
    """Get the default config file path.

    Can be overridden by MMPOLICY_CONFIG_PATH environment variable.
    """
    env = env or EnvReader()
    env_path = env.get_str("MMPOLICY_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        path: Path to config file. If None, uses default location.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.

    Raises:
        ConfigError: If the file exists but cannot be read or parsed.
    """
    if path is None:
        path = get_default_config_path()

    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with open(path, "rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config file {path}: {e}") from e

    logger.debug("Loaded config from %s", path)
    return config


def _section(file_config: dict[str, Any], name: str) -> dict[str, Any]:
    section = file_config.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table, got {section!r}")
    return section


def _typed(section: dict[str, Any], section_name: str, key: str, expected: type) -> Any:
    value = section.get(key)
    if value is None:
        return None
    # bool is an int subclass
    is_stray_bool = isinstance(value, bool) and expected is not bool
    if is_stray_bool or not isinstance(value, expected):
        raise ConfigError(f"{section_name}.{key} has invalid value {value!r}")
    return value


def _file_path(section: dict[str, Any], section_name: str, key: str) -> Path | None:
    value = _typed(section, section_name, key, str)
    return Path(value).expanduser() if value else None


def get_tool_path(
    config_path: Path | None = None,
    env: EnvReader | None = None,
) -> Path | None:
    """Resolve the mmapplypolicy path from environment and config file only.

    Unlike get_config(), the [logging] section is neither read nor
    validated.

    Returns:
        Configured path, or None to look the tool up in PATH.

    Raises:
        ConfigError: If the config file or its [tools] section is invalid.
    """
    env = env or EnvReader()
    env_path = env.get_path("MMPOLICY_MMAPPLYPOLICY_PATH")
    if env_path is not None:
        return env_path

    file_config = load_config_file(config_path or get_default_config_path(env))
    return _file_path(_section(file_config, "tools"), "tools", "mmapplypolicy")


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    mmapplypolicy_path: Path | None = None,
    log_level: str | None = None,
    log_file: Path | None = None,
    log_format: str | None = None,
    env: EnvReader | None = None,
) -> MmpolicyConfig:
    """Get mmpolicy configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides MMPOLICY_CONFIG_PATH).
        mmapplypolicy_path: CLI override for the mmapplypolicy path.
        log_level: CLI override for the log level.
        log_file: CLI override for the log file.
        log_format: CLI override for the log format.
        env: Environment reader; defaults to reading os.environ.

    Returns:
        MmpolicyConfig with merged configuration.

    Raises:
        ConfigError: If the config file or a resulting value is invalid.
    """
    env = env or EnvReader()
    file_config = load_config_file(config_path or get_default_config_path(env))

    tools_file = _section(file_config, "tools")
    tools = ToolPathsConfig(
        mmapplypolicy=(
            mmapplypolicy_path
            or env.get_path("MMPOLICY_MMAPPLYPOLICY_PATH")
            or _file_path(tools_file, "tools", "mmapplypolicy")
        ),
    )

    logging_file = _section(file_config, "logging")
    env_log_file = env.get_str("MMPOLICY_LOG_FILE")
    include_stderr = env.get_bool("MMPOLICY_LOG_INCLUDE_STDERR")
    if include_stderr is None:
        include_stderr = _typed(logging_file, "logging", "include_stderr", bool)
    max_bytes = _typed(logging_file, "logging", "max_bytes", int)
    backup_count = _typed(logging_file, "logging", "backup_count", int)

    try:
        logging_config = LoggingConfig(
            level=(
                log_level
                or env.get_str("MMPOLICY_LOG_LEVEL")
                or _typed(logging_file, "logging", "level", str)
                or "info"
            ),
            file=(
                log_file
                or (Path(env_log_file).expanduser() if env_log_file else None)
                or _file_path(logging_file, "logging", "file")
            ),
            format=(
                log_format
                or env.get_str("MMPOLICY_LOG_FORMAT")
                or _typed(logging_file, "logging", "format", str)
                or "text"
            ),
            include_stderr=bool(include_stderr),
            max_bytes=max_bytes if max_bytes is not None else 10_485_760,
            backup_count=backup_count if backup_count is not None else 5,
        )
    except ValueError as e:
        raise ConfigError(f"Invalid logging configuration: {e}") from e

    return MmpolicyConfig(tools=tools, logging=logging_config)
