"""Environment variable reader with dependency injection support.

This module provides the EnvReader class for reading environment variables
with type conversion. It accepts an optional env mapping so code depending
on the environment can be tested without touching os.environ.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)


class EnvReader:
    """Environment variable reader with type conversion.

    Example:
        # Production usage (reads from os.environ)
        reader = EnvReader()
        level = reader.get_str("MMPOLICY_LOG_LEVEL", "info")

        # Testing usage (inject custom env)
        reader = EnvReader(env={"MMPOLICY_LOG_LEVEL": "debug"})
        level = reader.get_str("MMPOLICY_LOG_LEVEL", "info")  # Returns "debug"
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Initialize the environment reader.

        Args:
            env: Optional mapping to use instead of os.environ.
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def get_str(self, var: str, default: str | None = None) -> str | None:
        """Get a string from environment variable.

        Empty values count as unset.
        """
        value = self._env.get(var)
        if not value:
            return default
        return value

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Get a boolean from environment variable.

        "true", "1", "yes" and "on" (any case) are true; any other set
        value is false.
        """
        value = self._env.get(var)
        if value is None:
            return default
        return value.strip().lower() in ("true", "1", "yes", "on")

    def get_path(self, var: str, default: Path | None = None) -> Path | None:
        """Get a path from environment variable, with ``~`` expanded.

        Paths that do not exist are returned anyway, with a warning.
        """
        value = self._env.get(var)
        if not value:
            return default
        path = Path(value).expanduser()
        if not path.exists():
            logger.warning(
                "Environment variable %s points to non-existent path: %s",
                var,
                value,
            )
        return path
