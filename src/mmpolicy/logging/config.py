"""Root logger setup from LoggingConfig."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from mmpolicy.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from mmpolicy.config.models import LoggingConfig

logger = logging.getLogger(__name__)

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def _make_formatter(config: LoggingConfig) -> logging.Formatter:
    if config.format.casefold() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)


def _open_log_file(file: Path, config: LoggingConfig) -> RotatingFileHandler:
    path = Path(file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=config.max_bytes,
        backupCount=config.backup_count,
        encoding="utf-8",
    )


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root logger's handlers according to ``config``.

    Records go to a rotating log file when ``config.file`` is set, and to
    stderr when no file is set, when ``include_stderr`` is true, or when
    the file cannot be opened. The failure to open the file is then logged
    as a warning on stderr.
    """
    level = logging.getLevelName(config.level.upper())
    formatter = _make_formatter(config)

    handlers: list[logging.Handler] = []
    open_error: OSError | None = None
    if config.file is not None:
        try:
            handlers.append(_open_log_file(config.file, config))
        except OSError as e:
            open_error = e

    if not handlers or config.include_stderr:
        handlers.append(logging.StreamHandler(sys.stderr))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if open_error is not None:
        logger.warning("Could not open log file %s: %s", config.file, open_error)
