"""CLI inspect command: show the metadata the planner works from."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

import click

from vidfit.cli.exit_codes import ExitCode
from vidfit.cli.output import CLIResult, error_exit, fail_with, success_output
from vidfit.config.models import VidfitConfig
from vidfit.errors import MetadataUnavailableError, ToolNotAvailableError
from vidfit.introspector import FFprobeIntrospector
from vidfit.models import VideoMetadata

logger = logging.getLogger(__name__)


def format_metadata(path: Path, metadata: VideoMetadata) -> str:
    lines = [
        f"File: {path}",
        f"  Resolution:   {metadata.width}x{metadata.height}",
        f"  Duration:     {metadata.duration_seconds:g} seconds",
        f"  Frame rate:   {metadata.frame_rate}",
        f"  Pixel format: {metadata.pixel_format}",
    ]
    if metadata.is_full_range:
        lines.append("  Range:        full (will be converted to limited)")
    return "\n".join(lines)


@click.command("inspect")
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output as JSON.",
)
@click.pass_obj
def inspect_command(obj: dict, file: Path, json_output: bool) -> None:
    """Probe FILE and print the properties used for planning."""
    config: VidfitConfig = obj["config"]

    if not file.exists():
        error_exit(f"File not found: {file}", ExitCode.TARGET_NOT_FOUND, json_output)

    try:
        introspector = FFprobeIntrospector(config.tools.ffprobe)
        metadata = introspector.get_video_metadata(file)
    except (ToolNotAvailableError, MetadataUnavailableError) as e:
        fail_with(e, json_output)

    success_output(
        CLIResult(
            message=format_metadata(file, metadata),
            data={"file": str(file), "metadata": dataclasses.asdict(metadata)},
        ),
        json_output,
    )
