"""Policy executor using mmapplypolicy.

This module writes a policy to a file and runs ``mmapplypolicy`` on it:

    mmapplypolicy <target> -P <policy-file> [options] [-f <report-prefix>]

The call blocks until the engine exits. There is no timeout and no retry;
callers wanting either wrap this function themselves. Files written along
the way (the policy file, partial reports) are left in place on failure.

Engine stdout is inherited unless an information level is given: ``-L 0``
discards it and other levels send it to our stderr.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for mmapplypolicy
import sys
import time
from pathlib import Path

from mmpolicy.config import ConfigError, get_tool_path
from mmpolicy.core.subprocess_utils import run_command
from mmpolicy.executor.errors import (
    ApplyPolicyFailedError,
    ApplyPolicyStartError,
    EngineConfigError,
    InvalidFileListPrefixError,
    PolicyFileError,
)
from mmpolicy.executor.options import RunOptions
from mmpolicy.policy.exceptions import InvalidClauseError
from mmpolicy.policy.types import ExternalList, Policy
from mmpolicy.policy.writer import validate_policy, write_policy

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "mmapplypolicy"


def _has_file_name(path: Path) -> bool:
    return path.name not in ("", ".", "..")


def validate_report_prefix(prefix: Path) -> None:
    """Check that ``prefix`` can be passed to ``mmapplypolicy -f``.

    Raises:
        InvalidFileListPrefixError: If ``prefix`` is neither an existing
            directory nor a path with a file name component.
    """
    if not prefix.is_dir() and not _has_file_name(prefix):
        raise InvalidFileListPrefixError(prefix)


def report_paths(policy: Policy, report_prefix: Path | None) -> list[Path]:
    """Return the list files the engine writes for ``policy``.

    ``mmapplypolicy -f`` writes one file per EXTERNAL LIST rule:
    ``<dir>/list.<name>`` when the prefix is a directory, otherwise
    ``<prefix>.list.<name>`` next to the prefix.

    Args:
        policy: Policy that was run.
        report_prefix: Value given to ``-f``, or None.

    Returns:
        Report paths in rule order; empty if no prefix was given.
    """
    if report_prefix is None:
        return []

    is_dir = report_prefix.is_dir()

    paths = []
    for rule in policy.rules:
        if not isinstance(rule.rule_type, ExternalList):
            continue
        list_name = rule.rule_type.name.value
        if is_dir:
            paths.append(report_prefix / f"list.{list_name}")
        else:
            file_name = f"{report_prefix.name}.list.{list_name}"
            paths.append(report_prefix.with_name(file_name))
    return paths


def build_command(
    target: str | Path,
    policy_path: Path,
    report_prefix: Path | None,
    options: RunOptions,
    command: str | Path = DEFAULT_COMMAND,
) -> list[str]:
    """Build the ``mmapplypolicy`` command line."""
    cmd = [str(command), str(target), "-P", str(policy_path)]
    cmd.extend(options.to_args())
    if report_prefix is not None:
        cmd.extend(["-f", str(report_prefix)])
    return cmd


def resolve_command() -> str | Path:
    """Return the engine executable from configuration, or the PATH default.

    Only the tool path is read: ``MMPOLICY_MMAPPLYPOLICY_PATH``, then
    ``[tools] mmapplypolicy`` in the config file.

    Raises:
        EngineConfigError: If the config file cannot be read or is invalid.
    """
    try:
        configured = get_tool_path()
    except ConfigError as e:
        raise EngineConfigError(e) from e
    return configured if configured is not None else DEFAULT_COMMAND


def _engine_stdout(options: RunOptions) -> int | None:
    # Without -L the engine inherits our stdout
    if options.information_level is None:
        return None
    if options.is_quiet:
        return subprocess.DEVNULL
    try:
        return sys.stderr.fileno()
    except (AttributeError, OSError, ValueError):
        # stderr replaced by an object without a descriptor
        return None


def write_policy_file(policy: Policy, policy_path: Path) -> None:
    """Write ``policy`` to ``policy_path``, replacing any existing file.

    Raises:
        PolicyFileError: If the policy cannot be written as valid text,
            checked before the file is touched, or if the file cannot be
            created or written.
    """
    try:
        validate_policy(policy)
    except InvalidClauseError as e:
        raise PolicyFileError(policy_path, e) from e

    try:
        with open(policy_path, "w", encoding="utf-8", newline="\n") as f:
            write_policy(policy, f)
    except OSError as e:
        raise PolicyFileError(policy_path, e) from e


def run_policy(
    policy: Policy,
    target: str | Path,
    policy_path: str | Path,
    report_prefix: str | Path | None = None,
    options: RunOptions | None = None,
    command: str | Path | None = None,
) -> list[Path]:
    """Write ``policy`` to ``policy_path`` and run it on ``target``.

    Args:
        policy: Policy to run.
        target: File system device or directory to scan.
        policy_path: Where to write the policy file.
        report_prefix: Directory or file prefix for generated lists (``-f``).
        options: Options forwarded to the engine. None means no options.
        command: Engine executable. None uses the configured path, falling
            back to ``mmapplypolicy`` on PATH.

    Returns:
        Paths of the list files written by the engine, one per EXTERNAL LIST
        rule, or an empty list if no report prefix was given.

    Raises:
        InvalidFileListPrefixError: If ``report_prefix`` is unusable.
        EngineConfigError: If ``command`` is None and the configuration
            cannot be read.
        PolicyFileError: If the policy cannot be written as valid text, or
            the policy file cannot be written.
        ApplyPolicyStartError: If the engine cannot be started.
        ApplyPolicyFailedError: If the engine exits with a non-zero status.
    """
    options = options if options is not None else RunOptions()
    policy_path = Path(policy_path)
    prefix = Path(report_prefix) if report_prefix is not None else None

    if command is None:
        command = resolve_command()

    if prefix is not None:
        validate_report_prefix(prefix)

    write_policy_file(policy, policy_path)

    cmd = build_command(target, policy_path, prefix, options, command)
    command_name = Path(str(command)).name

    logger.info(
        "Running policy %s on %s",
        policy.name.value,
        target,
        extra={
            "policy": policy.name.value,
            "policy_path": str(policy_path),
            "rule_count": len(policy.rules),
        },
    )

    start_time = time.monotonic()
    try:
        _, stderr, returncode = run_command(
            cmd,
            capture_output=False,
            stdout=_engine_stdout(options),
            stderr=subprocess.PIPE,
        )
    except OSError as e:
        logger.error(
            "%s failed to start",
            command_name,
            extra={
                "policy": policy.name.value,
                "command": str(command),
                "error": str(e),
            },
        )
        raise ApplyPolicyStartError(command_name, e) from e

    elapsed = time.monotonic() - start_time

    if returncode != 0:
        logger.error(
            "%s returned non-zero exit code",
            command_name,
            extra={
                "policy": policy.name.value,
                "returncode": returncode,
                "elapsed_seconds": round(elapsed, 3),
            },
        )
        raise ApplyPolicyFailedError(command_name, returncode, stderr)

    reports = report_paths(policy, prefix)
    logger.info(
        "Policy %s completed",
        policy.name.value,
        extra={
            "policy": policy.name.value,
            "elapsed_seconds": round(elapsed, 3),
            "report_count": len(reports),
        },
    )
    return reports
