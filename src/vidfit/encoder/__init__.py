"""Two-pass FFmpeg encoding."""

from vidfit.encoder.command import build_ffmpeg_command, null_device
from vidfit.encoder.ffmpeg import FFmpegEncoder
from vidfit.encoder.interface import Encoder, EncoderExit, ProgressCallback
from vidfit.encoder.orchestrator import TwoPassOrchestrator, build_encode_job
from vidfit.encoder.progress import FFmpegProgress, parse_stderr_progress
from vidfit.encoder.types import TwoPassContext

__all__ = [
    "Encoder",
    "EncoderExit",
    "FFmpegEncoder",
    "FFmpegProgress",
    "ProgressCallback",
    "TwoPassContext",
    "TwoPassOrchestrator",
    "build_encode_job",
    "build_ffmpeg_command",
    "null_device",
    "parse_stderr_progress",
]
