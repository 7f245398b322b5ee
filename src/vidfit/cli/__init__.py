"""Command-line interface for vidfit."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from vidfit.cli.exit_codes import ExitCode
from vidfit.cli.output import error_exit
from vidfit.config import configure_logging_from_cli, get_config
from vidfit.config.models import VidfitConfig
from vidfit.errors import ConfigError

_logging_configured: bool = False

logger = logging.getLogger(__name__)


def _configure_logging(
    config: VidfitConfig,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging once per process from config plus CLI overrides."""
    global _logging_configured
    if _logging_configured:
        return

    configure_logging_from_cli(
        config.logging,
        level=log_level,
        file=log_file,
        format="json" if log_json else None,
    )
    _logging_configured = True


@click.group()
@click.version_option(package_name="vidfit")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: warning).",
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
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.vidfit/config.toml).",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
    config_path: Path | None,
) -> None:
    """vidfit - Compress a video to a target file size with two-pass encoding."""
    ctx.ensure_object(dict)

    # Tests may pass a prepared config
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = get_config(config_path)
        except ConfigError as e:
            error_exit(e.message, ExitCode.CONFIG_ERROR)

    _configure_logging(ctx.obj["config"], log_level, log_file, log_json)
    logger.debug("vidfit starting: subcommand=%s", ctx.invoked_subcommand)


# Defer import to avoid circular dependency
def _register_commands() -> None:
    from vidfit.cli.compress import compress_command
    from vidfit.cli.inspect import inspect_command

    main.add_command(compress_command)
    main.add_command(inspect_command)


_register_commands()
