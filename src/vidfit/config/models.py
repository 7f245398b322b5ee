"""Configuration data models.

This module defines dataclasses for vidfit configuration options.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

VALID_PRESETS = (
    "ultrafast",
    "superfast",
    "veryfast",
    "faster",
    "fast",
    "medium",
    "slow",
    "slower",
    "veryslow",
    "placebo",
)


@dataclass
class ToolPathsConfig:
    """Configuration for external tool paths.

    All paths are optional. If not specified, tools are looked up in PATH.
    """

    ffmpeg: Path | None = None
    ffprobe: Path | None = None


@dataclass(frozen=True)
class EncodingSettings:
    """Heuristic constants used while planning an encode.

    None of these values are derived; they are tuned defaults that can be
    overridden from the config file or environment.
    """

    audio_bitrate_kbps: int = 128
    """AAC bitrate reserved for the audio track when audio is kept."""

    min_video_bitrate_kbps: int = 100
    """Lowest acceptable H.264 video bitrate."""

    h265_min_bitrate_factor: float = 0.7
    """Multiplier applied to the minimum for H.265."""

    downscale_to_720_below_kbps: int = 2000
    """1080p+ sources drop to 720p below this video bitrate."""

    downscale_to_480_below_kbps: int = 1000
    """A source already stepped down to 720p drops to 480p below this."""

    preset: str = "medium"
    x264_tune: str = "film"

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.audio_bitrate_kbps <= 0:
            raise ValueError(
                f"audio_bitrate_kbps must be positive, got {self.audio_bitrate_kbps}"
            )
        if self.min_video_bitrate_kbps < 0:
            raise ValueError(
                "min_video_bitrate_kbps must not be negative, "
                f"got {self.min_video_bitrate_kbps}"
            )
        if not 0 < self.h265_min_bitrate_factor <= 1:
            raise ValueError(
                "h265_min_bitrate_factor must be in (0, 1], "
                f"got {self.h265_min_bitrate_factor}"
            )
        if self.downscale_to_480_below_kbps > self.downscale_to_720_below_kbps:
            raise ValueError(
                "downscale_to_480_below_kbps must not exceed "
                "downscale_to_720_below_kbps"
            )
        if self.preset not in VALID_PRESETS:
            raise ValueError(
                f"preset must be one of {', '.join(VALID_PRESETS)}, got {self.preset}"
            )


DEFAULT_ENCODING_SETTINGS = EncodingSettings()


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "warning"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class VidfitConfig:
    """Main configuration container."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    encoding: EncodingSettings = field(default_factory=EncodingSettings)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Directory for pass-log artifacts (None = next to the output file)
    temp_directory: Path | None = None
