"""Exit codes for the mmpolicy command line.

Ranges:
- 0: success
- 1-9: general errors
- 10-19: validation and configuration errors
- 20-29: target errors
- 30-39: tool errors
- 40-49: operation errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes returned by ``mmpolicy`` commands."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_ARGUMENTS = 2

    POLICY_VALIDATION_ERROR = 10
    CONFIG_ERROR = 11

    TARGET_NOT_FOUND = 20

    TOOL_NOT_AVAILABLE = 30

    OPERATION_FAILED = 40
    POLICY_FILE_ERROR = 41
