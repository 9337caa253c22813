"""Execution layer module for mmpolicy.

This module runs policies with the external policy engine:
- options: RunOptions forwarded to mmapplypolicy
- mmapplypolicy: Writing the policy file and running mmapplypolicy
- errors: Errors for each stage of a run
"""

from mmpolicy.executor.errors import (
    ApplyPolicyFailedError,
    ApplyPolicyStartError,
    EngineConfigError,
    ExecutionError,
    InvalidFileListPrefixError,
    PolicyFileError,
)
from mmpolicy.executor.mmapplypolicy import (
    DEFAULT_COMMAND,
    build_command,
    report_paths,
    resolve_command,
    run_policy,
    validate_report_prefix,
    write_policy_file,
)
from mmpolicy.executor.options import RunOptions

__all__ = [
    "DEFAULT_COMMAND",
    "RunOptions",
    "build_command",
    "report_paths",
    "resolve_command",
    "run_policy",
    "validate_report_prefix",
    "write_policy_file",
    # Errors
    "ApplyPolicyFailedError",
    "ApplyPolicyStartError",
    "EngineConfigError",
    "ExecutionError",
    "InvalidFileListPrefixError",
    "PolicyFileError",
]
