"""Output file naming.

Names record the settings that shaped the file, for example
``holiday_compressed_25MB_720p_h265_30fps_nosound.mp4``.
"""

from __future__ import annotations

import re
from pathlib import Path

from vidfit.models import (
    DEFAULT_CODEC,
    CompressionPlan,
    CompressionRequest,
    VideoMetadata,
)

DEFAULT_EXTENSION = ".mp4"

# NTSC rates get their conventional decimal label
_KNOWN_FRACTIONAL_RATES = {
    "30000/1001": "29.97",
    "24000/1001": "23.976",
}

_INTEGER_RE = re.compile(r"^\d+$")


def format_size_label(target_size_mb: float) -> str:
    """Render a numeric target size without a trailing ``.0``.

    Used only when the request carries no label as typed by the user.
    """
    if float(target_size_mb).is_integer():
        return str(int(target_size_mb))
    return repr(float(target_size_mb))


def fps_suffix(final_frame_rate: str, original_frame_rate: str) -> str:
    """Suffix describing a changed frame rate, or "" when unchanged."""
    if final_frame_rate == original_frame_rate:
        return ""
    if _INTEGER_RE.match(final_frame_rate):
        return f"_{final_frame_rate}fps"
    label = _KNOWN_FRACTIONAL_RATES.get(final_frame_rate)
    if label:
        return f"_{label}fps"
    return "_customfps"


def build_output_name(
    request: CompressionRequest,
    metadata: VideoMetadata,
    plan: CompressionPlan,
) -> str:
    """Build the output file name for a compression run."""
    input_path = Path(request.input_path)
    extension = input_path.suffix or DEFAULT_EXTENSION
    size_label = request.target_size_label or format_size_label(
        request.target_size_mb
    )

    parts = [
        f"{input_path.stem}_compressed",
        f"_{size_label}MB",
        f"_{plan.resolution.final_height}p",
    ]
    if request.codec is not DEFAULT_CODEC:
        parts.append(f"_{request.codec.value}")
    parts.append(fps_suffix(plan.frame_rate, metadata.frame_rate))
    if request.remove_audio:
        parts.append("_nosound")
    return "".join(parts) + extension


def build_output_path(
    request: CompressionRequest,
    metadata: VideoMetadata,
    plan: CompressionPlan,
    output_dir: Path | None = None,
) -> Path:
    """Place the output name in ``output_dir`` (default: current directory)."""
    directory = output_dir if output_dir is not None else Path.cwd()
    return directory / build_output_name(request, metadata, plan)
