"""Errors raised while running a policy.

Each error names the stage that failed: validating arguments, resolving
the engine, writing the policy file, starting the engine, or the engine
itself. Catching ExecutionError covers every stage of a run.
"""

from __future__ import annotations

from pathlib import Path


class ExecutionError(Exception):
    """Base class for errors raised while running a policy."""

    pass


class InvalidFileListPrefixError(ExecutionError):
    """Raised when the report prefix cannot be used with ``-f``."""

    def __init__(self, prefix: Path) -> None:
        self.prefix = prefix
        super().__init__(
            f"Invalid report prefix {prefix}: prefix needs to be either an "
            "existing directory or have a file name component in its path"
        )


class PolicyFileError(ExecutionError):
    """Raised when the policy file cannot be created or written.

    ``cause`` is the underlying OSError, or the InvalidClauseError for a
    policy that cannot be written as valid text.
    """

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Writing policy file {path} failed: {cause}")


class EngineConfigError(ExecutionError):
    """Raised when the configured engine path cannot be resolved."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"Cannot resolve mmapplypolicy path: {cause}")


class ApplyPolicyStartError(ExecutionError):
    """Raised when the policy engine cannot be started."""

    def __init__(self, command: str, cause: OSError) -> None:
        self.command = command
        self.cause = cause
        super().__init__(f"{command} failed to start: {cause}")


class ApplyPolicyFailedError(ExecutionError):
    """Raised when the policy engine exits with a non-zero status."""

    def __init__(self, command: str, returncode: int, stderr: str = "") -> None:
        """Initialize the error.

        Args:
            command: Engine command that was run.
            returncode: Exit status of the engine. Negative values are the
                signal number that terminated it.
            stderr: Diagnostic output captured from the engine.
        """
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        message = f"{command} failed with exit status {returncode}"
        diagnostic = stderr.strip()
        if diagnostic:
            message += f": {diagnostic}"
        super().__init__(message)
