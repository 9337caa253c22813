"""CLI module for mmpolicy."""

import logging
from pathlib import Path

import click

from mmpolicy.cli.exit_codes import ExitCode
from mmpolicy.config import ConfigError, get_config
from mmpolicy.logging import configure_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="mmpolicy")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.mmpolicy/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Construct, write and run IBM Storage Scale file system policies."""
    ctx.ensure_object(dict)

    try:
        config = get_config(
            config_path=config_path,
            log_level=log_level,
            log_file=log_file,
            log_format="json" if log_json else None,
        )
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(ExitCode.CONFIG_ERROR) from e

    configure_logging(config.logging)
    logger.debug(
        "mmpolicy starting: log_level=%s, mmapplypolicy=%s",
        config.logging.level,
        config.tools.mmapplypolicy or "PATH",
    )

    ctx.obj["config"] = config


def _register_commands() -> None:
    from mmpolicy.cli.policy import render_command, run_command, validate_command

    main.add_command(render_command)
    main.add_command(validate_command)
    main.add_command(run_command)


_register_commands()
