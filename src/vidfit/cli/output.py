"""JSON and human-readable output helpers shared by all commands."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from typing import Any, NoReturn

import click

from vidfit.cli.exit_codes import ExitCode
from vidfit.errors import (
    CompressionError,
    ConfigError,
    EncodeFailedError,
    InsufficientBitrateError,
    InvalidRequestError,
    MetadataUnavailableError,
    ToolNotAvailableError,
)

_ERROR_EXIT_CODES: tuple[tuple[type[CompressionError], ExitCode], ...] = (
    (InvalidRequestError, ExitCode.INVALID_REQUEST),
    (ConfigError, ExitCode.CONFIG_ERROR),
    (InsufficientBitrateError, ExitCode.INSUFFICIENT_BITRATE),
    (ToolNotAvailableError, ExitCode.TOOL_NOT_AVAILABLE),
    (MetadataUnavailableError, ExitCode.METADATA_UNAVAILABLE),
    (EncodeFailedError, ExitCode.ENCODE_FAILED),
)


@dataclass
class CLIResult:
    """Result of a successful command, printable as text or JSON."""

    message: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> str:
        output: dict[str, Any] = {"status": "completed", "message": self.message}
        output.update(self.data)
        return json.dumps(output, indent=2, default=str)


def exit_code_for(error: CompressionError) -> ExitCode:
    """Map a pipeline error to its exit code."""
    if isinstance(error, EncodeFailedError) and error.interrupted:
        return ExitCode.INTERRUPTED
    for error_type, code in _ERROR_EXIT_CODES:
        if isinstance(error, error_type):
            return code
    return ExitCode.GENERAL_ERROR


def error_exit(
    message: str,
    code: ExitCode | int,
    json_output: bool = False,
) -> NoReturn:
    """Print an error and exit with ``code``.

    JSON output goes to stderr as ``{"status": "failed", "error": {...}}``.
    """
    if isinstance(code, ExitCode):
        code_name = code.name
        exit_value = int(code)
    else:
        code_name = "UNKNOWN_ERROR"
        exit_value = code

    if json_output:
        click.echo(
            json.dumps(
                {
                    "status": "failed",
                    "error": {
                        "code": code_name,
                        "message": message,
                    },
                }
            ),
            err=True,
        )
    else:
        click.echo(f"{click.style('Error:', bold=True)} {message}", err=True)

    sys.exit(exit_value)


def fail_with(error: CompressionError, json_output: bool = False) -> NoReturn:
    error_exit(error.message, exit_code_for(error), json_output)


def success_output(result: CLIResult, json_output: bool = False) -> None:
    if json_output:
        click.echo(result.to_json())
    else:
        click.echo(result.message)


def warning_output(message: str, json_output: bool = False) -> None:
    """Print a warning to stderr. Suppressed in JSON mode."""
    if not json_output:
        label = click.style("Warning:", fg="yellow", bold=True)
        click.echo(f"{label} {message}", err=True)
