"""Parse ffprobe JSON output into VideoMetadata."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from vidfit.errors import MetadataUnavailableError
from vidfit.models import VideoMetadata

logger = logging.getLogger(__name__)

# ffprobe reports unknown values as these placeholders
_UNKNOWN_VALUES = frozenset({"", "N/A", "0/0"})


def _first_video_stream(data: dict[str, Any]) -> dict[str, Any] | None:
    for stream in data.get("streams", []):
        if stream.get("codec_type", "video") == "video":
            return stream
    return None


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    if text in _UNKNOWN_VALUES:
        return None
    return text


def _positive_int(value: Any) -> int | None:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def parse_ffprobe_output(path: Path, data: dict[str, Any]) -> VideoMetadata:
    """Build VideoMetadata from ``ffprobe -show_streams -show_format`` JSON.

    Duration comes from the container (``format.duration``), frame rate
    from the stream's ``r_frame_rate`` so rational rates like
    ``30000/1001`` are kept exactly.

    Raises:
        MetadataUnavailableError: If there is no video stream, a field is
            missing, or the duration is not positive.
    """
    stream = _first_video_stream(data)
    if stream is None:
        raise MetadataUnavailableError(f"No video stream found in {path}")

    width = _positive_int(stream.get("width"))
    height = _positive_int(stream.get("height"))
    frame_rate = _text(stream.get("r_frame_rate"))
    pixel_format = _text(stream.get("pix_fmt"))
    duration_text = _text(data.get("format", {}).get("duration"))

    missing = [
        name
        for name, value in (
            ("width", width),
            ("height", height),
            ("duration", duration_text),
            ("frame rate", frame_rate),
            ("pixel format", pixel_format),
        )
        if value is None
    ]
    if missing:
        raise MetadataUnavailableError(
            f"Could not retrieve all necessary video information from {path} "
            f"(missing: {', '.join(missing)})"
        )

    try:
        duration = float(duration_text)
    except ValueError as e:
        raise MetadataUnavailableError(
            f"Invalid duration '{duration_text}' reported for {path}"
        ) from e
    if duration <= 0:
        raise MetadataUnavailableError(
            f"Non-positive duration ({duration_text}s) reported for {path}"
        )

    metadata = VideoMetadata(
        width=width,
        height=height,
        duration_seconds=duration,
        frame_rate=frame_rate,
        pixel_format=pixel_format,
    )
    logger.debug(
        "Probed %s: %dx%d, %.3fs, %s fps, %s",
        path,
        width,
        height,
        duration,
        frame_rate,
        pixel_format,
    )
    return metadata
