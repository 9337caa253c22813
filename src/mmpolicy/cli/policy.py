"""CLI commands for policy files.

This module provides commands working on YAML policy files:
- render: Print or write the mmapplypolicy policy text
- validate: Check that a policy can be loaded and written
- run: Run a policy with mmapplypolicy
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, NoReturn

import click

from mmpolicy.cli.exit_codes import ExitCode
from mmpolicy.cli.options import mm_options, run_options_from_params
from mmpolicy.executor import (
    ApplyPolicyFailedError,
    ApplyPolicyStartError,
    InvalidFileListPrefixError,
    PolicyFileError,
    run_policy,
)
from mmpolicy.executor.mmapplypolicy import DEFAULT_COMMAND
from mmpolicy.policy import (
    InvalidClauseError,
    Policy,
    PolicyValidationError,
    load_policy,
    render_policy,
    validate_policy,
)

logger = logging.getLogger(__name__)

_policy_argument = click.argument(
    "policy_file",
    type=click.Path(path_type=Path, dir_okay=False),
)


def _fail(message: str, code: ExitCode) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(code)


def _load(policy_file: Path) -> Policy:
    """Load and check a policy file, exiting on errors."""
    try:
        policy = load_policy(policy_file)
        validate_policy(policy)
    except FileNotFoundError as e:
        _fail(str(e), ExitCode.TARGET_NOT_FOUND)
    except OSError as e:
        _fail(f"Reading {policy_file} failed: {e}", ExitCode.GENERAL_ERROR)
    except (PolicyValidationError, InvalidClauseError) as e:
        _fail(str(e), ExitCode.POLICY_VALIDATION_ERROR)
    return policy


@click.command("render")
@_policy_argument
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write the policy text to this file instead of stdout.",
)
def render_command(policy_file: Path, output: Path | None) -> None:
    """Render a YAML policy as mmapplypolicy policy text.

    Examples:

        # Print the policy text
        mmpolicy render size.yaml

        # Write it to a file
        mmpolicy render size.yaml -o /work/.policy/size.policy
    """
    text = render_policy(_load(policy_file))

    if output is None:
        click.echo(text, nl=False)
        return

    try:
        output.write_text(text, encoding="utf-8")
    except OSError as e:
        _fail(f"Writing {output} failed: {e}", ExitCode.POLICY_FILE_ERROR)
    logger.info("Wrote policy to %s", output)


@click.command("validate")
@_policy_argument
def validate_command(policy_file: Path) -> None:
    """Validate a YAML policy file."""
    policy = _load(policy_file)
    click.echo(
        f"Policy '{policy.name.value}' is valid ({len(policy.rules)} rules)"
    )


@click.command("run")
@_policy_argument
@click.argument("target")
@click.option(
    "--policy-file",
    "policy_path",
    type=click.Path(path_type=Path, dir_okay=False),
    required=True,
    help="Where to write the policy text passed to `mmapplypolicy -P`.",
)
@click.option(
    "--report-prefix",
    type=click.Path(path_type=Path),
    default=None,
    help="Directory or file prefix for generated lists, `mmapplypolicy -f`.",
)
@click.option(
    "--mmapplypolicy",
    "mmapplypolicy_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Path to the mmapplypolicy executable.",
)
@mm_options
@click.pass_context
def run_command(
    ctx: click.Context,
    policy_file: Path,
    target: str,
    policy_path: Path,
    report_prefix: Path | None,
    mmapplypolicy_path: Path | None,
    **mm_params: Any,
) -> None:
    """Run a YAML policy on TARGET with mmapplypolicy.

    TARGET is the file system device or directory to scan. Paths of the
    generated lists are printed one per line.

    Examples:

        mmpolicy run size.yaml /data/test \\
            --policy-file /work/.policy/size.policy \\
            --report-prefix /work/.policy/report \\
            --mm-I defer --mm-L 0 --mm-choice-algorithm fast
    """
    policy = _load(policy_file)
    options = run_options_from_params(mm_params)

    command: Path | str | None = mmapplypolicy_path
    if command is None:
        config = (ctx.obj or {}).get("config")
        if config is not None and config.tools.mmapplypolicy is not None:
            command = config.tools.mmapplypolicy
        else:
            command = DEFAULT_COMMAND

    try:
        reports = run_policy(
            policy,
            target,
            policy_path,
            report_prefix=report_prefix,
            options=options,
            command=command,
        )
    except InvalidFileListPrefixError as e:
        _fail(str(e), ExitCode.INVALID_ARGUMENTS)
    except PolicyFileError as e:
        _fail(str(e), ExitCode.POLICY_FILE_ERROR)
    except ApplyPolicyStartError as e:
        _fail(str(e), ExitCode.TOOL_NOT_AVAILABLE)
    except ApplyPolicyFailedError as e:
        _fail(str(e), ExitCode.OPERATION_FAILED)

    for report in reports:
        click.echo(str(report))
