"""FFmpeg command construction for two-pass encodes."""

from __future__ import annotations

import logging
import platform
from pathlib import Path

from vidfit.config.models import DEFAULT_ENCODING_SETTINGS, EncodingSettings
from vidfit.models import OUTPUT_PIXEL_FORMAT, Codec, EncodeJob

logger = logging.getLogger(__name__)


def null_device() -> str:
    """Null output device for the analysis pass."""
    return "NUL" if platform.system() == "Windows" else "/dev/null"


def _build_codec_args(job: EncodeJob, settings: EncodingSettings) -> list[str]:
    args = ["-c:v", job.codec.encoder]
    if job.codec is Codec.H264:
        args.extend(["-tune", settings.x264_tune])
    return args


def _build_two_pass_args(job: EncodeJob) -> list[str]:
    if job.codec is Codec.H265:
        # libx265 takes its stats file through x265-params
        return [
            "-x265-params",
            f"pass={job.pass_number}:stats={job.passlog_prefix}.log",
        ]
    return [
        "-pass",
        str(job.pass_number),
        "-passlogfile",
        str(job.passlog_prefix),
    ]


def _build_audio_args(job: EncodeJob) -> list[str]:
    if job.audio is None:
        return ["-an"]
    return ["-c:a", job.audio.codec, "-b:a", f"{job.audio.bitrate_kbps}k"]


def build_ffmpeg_command(
    job: EncodeJob,
    ffmpeg_path: Path | str = "ffmpeg",
    settings: EncodingSettings = DEFAULT_ENCODING_SETTINGS,
) -> list[str]:
    """Build the FFmpeg argument list for one pass.

    Both passes share every video argument so the analysis in pass 1 matches
    what pass 2 encodes. They differ only in the pass number, the audio
    arguments and the sink.

    Args:
        job: The pass to render.
        ffmpeg_path: FFmpeg executable.
        settings: Preset and tune settings.

    Returns:
        Command as a list of arguments.
    """
    cmd = [str(ffmpeg_path), "-y", "-nostdin"]

    # Input range tag must precede -i to apply to the input
    if job.full_range_input:
        cmd.extend(["-color_range", "pc"])
    cmd.extend(["-i", str(job.input_path)])

    cmd.extend(_build_codec_args(job, settings))
    cmd.extend(
        [
            "-b:v",
            f"{job.video_kbps}k",
            "-r",
            job.frame_rate,
            "-pix_fmt",
            OUTPUT_PIXEL_FORMAT,
            "-color_range",
            str(job.output_color_range),
            "-preset",
            settings.preset,
        ]
    )

    vf = job.filter_chain.render()
    if vf:
        cmd.extend(["-vf", vf])

    cmd.extend(_build_two_pass_args(job))
    cmd.extend(_build_audio_args(job))

    if job.sink is None:
        cmd.extend(["-f", "null", null_device()])
    else:
        cmd.append(str(job.sink))

    logger.debug("FFmpeg pass %d command: %s", job.pass_number, " ".join(cmd))
    return cmd
