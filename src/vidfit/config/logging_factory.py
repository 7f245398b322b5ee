"""Merge CLI logging flags into the configured LoggingConfig."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from vidfit.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Return ``base`` with every non-None flag applied.

    Raises:
        ValueError: If an override fails LoggingConfig validation.
    """
    flags = {
        "level": level,
        "file": file,
        "format": format,
        "include_stderr": include_stderr,
    }
    return replace(base, **{k: v for k, v in flags.items() if v is not None})


def configure_logging_from_cli(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Apply the ``--log-*`` flags and install the root handlers.

    Returns:
        The effective LoggingConfig.
    """
    from vidfit.logging import configure_logging

    effective = build_logging_config(
        base,
        level=level,
        file=file,
        format=format,
        include_stderr=include_stderr,
    )
    configure_logging(effective)
    return effective
