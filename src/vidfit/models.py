"""Domain values for a compression run.

Inputs (VideoMetadata, CompressionRequest) are created once before planning.
Every planning stage derives a new frozen value from them, so the same inputs
always produce equal plans.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

BYTES_PER_MB = 1024 * 1024

FULL_RANGE_PIXEL_FORMAT = "yuvj420p"
OUTPUT_PIXEL_FORMAT = "yuv420p"

# FFmpeg color_range value for limited (TV/MPEG) range
LIMITED_COLOR_RANGE = 1


class Codec(Enum):
    """Target video codec."""

    H264 = "h264"
    H265 = "h265"

    @property
    def encoder(self) -> str:
        """FFmpeg encoder implementing this codec."""
        return _ENCODERS[self]


_ENCODERS = {
    Codec.H264: "libx264",
    Codec.H265: "libx265",
}

DEFAULT_CODEC = Codec.H264


class ResolutionMode(Enum):
    """Resolution selection mode other than an explicit height."""

    AUTO = "auto"


class SizeStatus(Enum):
    """Outcome of comparing realized size with the target."""

    OK = "ok"
    DEVIATES = "deviates"


@dataclass(frozen=True)
class VideoMetadata:
    """Probed properties of the source video stream."""

    width: int
    height: int
    duration_seconds: float
    frame_rate: str
    """Frame rate as reported by the probe ("30", "29.97" or "30000/1001")."""

    pixel_format: str

    @property
    def is_full_range(self) -> bool:
        """True if the source uses full-range (JPEG) YUV."""
        return self.pixel_format == FULL_RANGE_PIXEL_FORMAT


@dataclass(frozen=True)
class CompressionRequest:
    """Validated user request for one compression run."""

    input_path: Path
    target_size_mb: float
    resolution: ResolutionMode | int = ResolutionMode.AUTO
    remove_audio: bool = False
    frame_rate: str | None = None
    """Requested output frame rate, None to keep the source rate."""

    codec: Codec = DEFAULT_CODEC
    target_size_label: str | None = None
    """Target size exactly as the user typed it, used in output names."""

    @property
    def is_auto_resolution(self) -> bool:
        return self.resolution is ResolutionMode.AUTO


@dataclass(frozen=True)
class BitratePlan:
    """Bitrate budget derived from target size and duration."""

    total_kbps: int
    video_kbps: int
    audio_kbps: int
    min_video_kbps: float


@dataclass(frozen=True)
class ResolutionDecision:
    """Output height and whether a scale filter is needed."""

    final_height: int
    scale_required: bool


@dataclass(frozen=True)
class ScaleFilter:
    """Scale to a height; width follows the aspect ratio, rounded to even."""

    height: int

    def render(self) -> str:
        return f"scale=-2:{self.height}"


@dataclass(frozen=True)
class NormalizePixelFormat:
    """Convert frames to a fixed pixel format."""

    pixel_format: str = OUTPUT_PIXEL_FORMAT

    def render(self) -> str:
        return f"format={self.pixel_format}"


VideoFilter = ScaleFilter | NormalizePixelFormat


@dataclass(frozen=True)
class FilterChain:
    """Ordered video filters. An empty chain passes frames through unchanged."""

    filters: tuple[VideoFilter, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.filters)

    def render(self) -> str | None:
        """Render as an FFmpeg -vf argument, or None for an empty chain."""
        if not self.filters:
            return None
        return ",".join(f.render() for f in self.filters)


@dataclass(frozen=True)
class AudioSpec:
    """Audio encoding for the final pass."""

    bitrate_kbps: int
    codec: str = "aac"


@dataclass(frozen=True)
class EncodeJob:
    """Everything the encoder needs for one pass."""

    pass_number: int
    input_path: Path
    codec: Codec
    video_kbps: int
    frame_rate: str
    passlog_prefix: Path
    filter_chain: FilterChain = field(default_factory=FilterChain)
    full_range_input: bool = False
    """Tag the input as full range before it is read."""

    output_color_range: int = LIMITED_COLOR_RANGE
    audio: AudioSpec | None = None
    """None disables audio for this pass."""

    sink: Path | None = None
    """Output path, None to discard output (analysis pass)."""

    def __post_init__(self) -> None:
        if self.pass_number not in (1, 2):
            raise ValueError(f"pass_number must be 1 or 2, got {self.pass_number}")


@dataclass(frozen=True)
class EncodeResult:
    """Result of a completed two-pass encode."""

    output_path: Path
    size_bytes: int

    @property
    def size_mb(self) -> float:
        return self.size_bytes / BYTES_PER_MB


@dataclass(frozen=True)
class SizeVerdict:
    """Advisory comparison of actual and target size."""

    status: SizeStatus
    target_mb: float
    actual_mb: float
    tolerance_mb: int

    @property
    def ok(self) -> bool:
        return self.status is SizeStatus.OK

    @property
    def deviation_mb(self) -> float:
        return self.actual_mb - self.target_mb


@dataclass(frozen=True)
class CompressionPlan:
    """Everything decided before the encoder runs."""

    bitrate: BitratePlan
    resolution: ResolutionDecision
    filter_chain: FilterChain
    frame_rate: str
    """Output frame rate: the requested rate or the source rate."""
