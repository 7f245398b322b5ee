"""CLI compress command."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import click

from vidfit.cli.exit_codes import ExitCode
from vidfit.cli.formatting import (
    format_file_size,
    format_settings_summary,
    format_size_report,
)
from vidfit.cli.output import (
    CLIResult,
    error_exit,
    fail_with,
    success_output,
    warning_output,
)
from vidfit.cli.validation import build_compress_request
from vidfit.config.models import VidfitConfig
from vidfit.encoder import (
    FFmpegEncoder,
    FFmpegProgress,
    build_encode_job,
    build_ffmpeg_command,
)
from vidfit.errors import CompressionError
from vidfit.introspector import FFprobeIntrospector
from vidfit.models import (
    CompressionPlan,
    CompressionRequest,
    EncodeJob,
    VideoMetadata,
)
from vidfit.naming import build_output_path
from vidfit.pipeline import CompressionOutcome, plan_compression, run_compression
from vidfit.tools import find_tool, require_tool

logger = logging.getLogger(__name__)

# The real prefix is a random name reserved when the encode starts
DRY_RUN_PASSLOG = "<passlog>"


class _PassProgressPrinter:
    """Print a single updating percentage line per pass on stderr."""

    def __init__(self, duration_seconds: float) -> None:
        self._duration = duration_seconds
        self._last: tuple[int, int] | None = None

    def __call__(self, job: EncodeJob, progress: FFmpegProgress) -> None:
        percent = int(progress.get_percent(self._duration))
        if self._last == (job.pass_number, percent):
            return
        self._last = (job.pass_number, percent)
        click.echo(f"\r  Pass {job.pass_number}/2: {percent:3d}%", nl=False, err=True)
        if percent >= 100:
            click.echo("", err=True)


def _dry_run_commands(
    request: CompressionRequest,
    metadata: VideoMetadata,
    plan: CompressionPlan,
    output_path: Path,
    config: VidfitConfig,
) -> list[list[str]]:
    ffmpeg_path = find_tool("ffmpeg", config.tools.ffmpeg) or "ffmpeg"
    directory = config.temp_directory or output_path.parent
    passlog_prefix = directory / DRY_RUN_PASSLOG
    return [
        build_ffmpeg_command(
            build_encode_job(
                pass_number,
                request,
                metadata,
                plan,
                passlog_prefix,
                output_path,
                config.encoding,
            ),
            ffmpeg_path,
            config.encoding,
        )
        for pass_number in (1, 2)
    ]


def _plan_data(
    request: CompressionRequest, plan: CompressionPlan, output_path: Path
) -> dict[str, Any]:
    return {
        "input": str(request.input_path),
        "output": str(output_path),
        "codec": request.codec.value,
        "target_size_mb": request.target_size_mb,
        "total_kbps": plan.bitrate.total_kbps,
        "video_kbps": plan.bitrate.video_kbps,
        "audio_kbps": plan.bitrate.audio_kbps,
        "final_height": plan.resolution.final_height,
        "frame_rate": plan.frame_rate,
        "filters": plan.filter_chain.render(),
    }


def _outcome_data(outcome: CompressionOutcome) -> dict[str, Any]:
    verdict = outcome.verdict
    return {
        "size_bytes": outcome.result.size_bytes,
        "actual_size_mb": round(verdict.actual_mb, 3),
        "tolerance_mb": verdict.tolerance_mb,
        "size_status": verdict.status.value,
    }


@click.command("compress")
@click.argument("input_file", type=click.Path(path_type=Path))
@click.argument("target_size_mb")
@click.argument("resolution")
@click.option(
    "--no-sound",
    "-n",
    "no_sound",
    is_flag=True,
    default=False,
    help="Remove the audio track.",
)
@click.option(
    "--fps",
    "frame_rate",
    default=None,
    help="Output frame rate (e.g., 30, 29.97, 30000/1001). Default: source rate.",
)
@click.option(
    "--codec",
    type=click.Choice(["h264", "h265"], case_sensitive=False),
    default="h264",
    show_default=True,
    help="Video codec.",
)
@click.option(
    "--output-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory for the output file (default: current directory).",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Print the FFmpeg commands without running them.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output result as JSON.",
)
@click.pass_obj
def compress_command(
    obj: dict,
    input_file: Path,
    target_size_mb: str,
    resolution: str,
    no_sound: bool,
    frame_rate: str | None,
    codec: str,
    output_dir: Path | None,
    dry_run: bool,
    json_output: bool,
) -> None:
    """Compress INPUT_FILE to about TARGET_SIZE_MB megabytes.

    RESOLUTION is 'auto' to let the bitrate decide (1080p and above may drop
    to 720p or 480p) or a target height such as 720. The source is never
    upscaled.

    \b
    Examples:
        vidfit compress clip.mp4 25 auto
        vidfit compress clip.mov 8 480 --no-sound --fps 24
        vidfit compress clip.mkv 50 1080 --codec h265
    """
    config: VidfitConfig = obj["config"]

    try:
        request = build_compress_request(
            input_file,
            target_size_mb,
            resolution,
            frame_rate=frame_rate,
            codec=codec,
            remove_audio=no_sound,
        )
    except CompressionError as e:
        fail_with(e, json_output)

    if not input_file.is_file():
        error_exit(
            f"Input file not found: {input_file}",
            ExitCode.TARGET_NOT_FOUND,
            json_output,
        )

    try:
        ffmpeg_path = None
        if not dry_run:
            ffmpeg_path = require_tool("ffmpeg", config.tools.ffmpeg)
        metadata = FFprobeIntrospector(config.tools.ffprobe).get_video_metadata(
            input_file
        )
        plan = plan_compression(request, metadata, config.encoding)
    except CompressionError as e:
        fail_with(e, json_output)

    output_path = build_output_path(request, metadata, plan, output_dir)
    if not json_output:
        click.echo(format_settings_summary(request, metadata, plan, output_path.name))

    if dry_run:
        commands = _dry_run_commands(request, metadata, plan, output_path, config)
        message = "\n".join(
            f"Pass {number}: {' '.join(cmd)}"
            for number, cmd in enumerate(commands, start=1)
        )
        message += (
            f"\n{DRY_RUN_PASSLOG} is replaced by a unique pass-log prefix at run time."
        )
        data = _plan_data(request, plan, output_path)
        data["commands"] = commands
        success_output(CLIResult(message=message, data=data), json_output)
        return

    progress = None if json_output else _PassProgressPrinter(metadata.duration_seconds)
    encoder = FFmpegEncoder(ffmpeg_path, config.encoding, progress)
    try:
        outcome = run_compression(
            request,
            metadata,
            encoder,
            output_path,
            plan=plan,
            settings=config.encoding,
            temp_directory=config.temp_directory,
        )
    except CompressionError as e:
        if not json_output:
            click.echo("", err=True)
        fail_with(e, json_output)

    verdict = outcome.verdict
    if not verdict.ok:
        warning_output(
            f"Final size {verdict.actual_mb:.2f} MB deviates from the "
            f"{verdict.target_mb:g} MB target by more than "
            f"{verdict.tolerance_mb} MB.",
            json_output,
        )

    message = "\n".join(
        [
            click.style("Compression complete!", fg="green", bold=True),
            f"Output: {output_path} ({format_file_size(outcome.result.size_bytes)})",
            format_size_report(verdict),
        ]
    )
    data = _plan_data(request, plan, output_path)
    data.update(_outcome_data(outcome))
    success_output(CLIResult(message=message, data=data), json_output)
