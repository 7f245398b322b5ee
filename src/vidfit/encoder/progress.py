"""FFmpeg stderr progress parsing.

FFmpeg rewrites one status line per update on stderr::

    frame= 1234 fps= 30 size= 2048kB time=00:01:23.45 bitrate=5000kbits/s speed=2x
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_FIELD_RE = re.compile(r"(\w+)=\s*(\S+)")
_CLOCK_RE = re.compile(r"^(\d+):(\d{2}):(\d{2})(?:\.(\d+))?$")

_NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class FFmpegProgress:
    """One status update from an encoding pass."""

    frame: int | None = None
    fps: float | None = None
    bitrate: str | None = None
    out_time_us: int | None = None  # Output time in microseconds
    speed: str | None = None

    @property
    def out_time_seconds(self) -> float | None:
        if self.out_time_us is None:
            return None
        return self.out_time_us / 1_000_000

    def get_percent(self, duration_seconds: float | None) -> float:
        """Share of ``duration_seconds`` encoded so far, 0.0 to 100.0.

        Returns 0.0 when either the output time or the duration is unknown.
        """
        out_time = self.out_time_seconds
        if out_time is None or not duration_seconds or duration_seconds <= 0:
            return 0.0
        return min(100.0, out_time / duration_seconds * 100)


def _clock_to_us(value: str) -> int | None:
    match = _CLOCK_RE.match(value)
    if match is None:
        return None
    hours, minutes, seconds, fraction = match.groups()
    # Centiseconds normally, but tolerate any precision
    micros = int((fraction or "").ljust(6, "0")[:6])
    return (int(hours) * 3600 + int(minutes) * 60 + int(seconds)) * 1_000_000 + micros


def _number(value: str | None, convert: type[int] | type[float]):
    if value is None:
        return None
    try:
        return convert(value)
    except ValueError:
        return None


def is_progress_line(line: str) -> bool:
    return "frame=" in line and "time=" in line


def parse_stderr_progress(line: str) -> FFmpegProgress | None:
    """Parse a stderr status line, or return None for any other line."""
    if "frame=" not in line:
        return None

    fields = {
        key: value
        for key, value in _FIELD_RE.findall(line)
        if value != _NOT_AVAILABLE
    }
    time_value = fields.get("time")
    return FFmpegProgress(
        frame=_number(fields.get("frame"), int),
        fps=_number(fields.get("fps"), float),
        bitrate=fields.get("bitrate"),
        out_time_us=_clock_to_us(time_value) if time_value else None,
        speed=fields.get("speed"),
    )
