"""Structured logging module for mmpolicy.

Provides configurable logging with JSON format support and file rotation.
"""

from mmpolicy.logging.config import configure_logging
from mmpolicy.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "configure_logging",
]
