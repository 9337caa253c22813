"""Core utilities shared across mmpolicy."""

from mmpolicy.core.subprocess_utils import run_command

__all__ = ["run_command"]
