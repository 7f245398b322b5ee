"""Validation of raw compress options.

Click hands over the positional arguments as strings; this model checks
their shape and turns them into a CompressionRequest.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from vidfit.errors import InvalidRequestError
from vidfit.models import Codec, CompressionRequest, ResolutionMode

_SIZE_RE = re.compile(r"^\d+(\.\d+)?$")
_HEIGHT_RE = re.compile(r"^\d+$")
_FRAME_RATE_RE = re.compile(r"^(\d+(\.\d+)?|\d+/\d+)$")

MIN_HEIGHT = 2


class CompressOptionsModel(BaseModel):
    """Pydantic model for the compress command's options."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    target_size_mb: str
    resolution: str
    frame_rate: str | None = None
    codec: str = Codec.H264.value
    remove_audio: bool = False

    @field_validator("target_size_mb")
    @classmethod
    def validate_target_size(cls, v: str) -> str:
        """Validate target size format."""
        v = v.strip()
        if not _SIZE_RE.match(v) or float(v) <= 0:
            raise ValueError(
                f"Invalid target size '{v}'. Must be a positive number of MB "
                "(e.g., '25' or '9.5')."
            )
        return v

    @field_validator("resolution")
    @classmethod
    def validate_resolution(cls, v: str) -> str:
        """Validate resolution: 'auto' or a height in pixels."""
        v = v.strip().casefold()
        if v == ResolutionMode.AUTO.value:
            return v
        if not _HEIGHT_RE.match(v) or int(v) < MIN_HEIGHT:
            raise ValueError(
                f"Invalid resolution '{v}'. Must be 'auto' or a height of at "
                f"least {MIN_HEIGHT} pixels (e.g., '720')."
            )
        return v

    @field_validator("frame_rate")
    @classmethod
    def validate_frame_rate(cls, v: str | None) -> str | None:
        """Validate frame rate: integer, decimal or N/D fraction."""
        if v is None:
            return None
        v = v.strip()
        if not _FRAME_RATE_RE.match(v):
            raise ValueError(
                f"Invalid frame rate '{v}'. Must be a number or a fraction "
                "(e.g., '30', '29.97' or '30000/1001')."
            )
        parts = v.split("/")
        if any(float(part) == 0 for part in parts):
            raise ValueError(f"Invalid frame rate '{v}'. Must be greater than zero.")
        return v

    @field_validator("codec")
    @classmethod
    def validate_codec(cls, v: str) -> str:
        """Validate codec name."""
        v = v.strip().casefold()
        valid = [c.value for c in Codec]
        if v not in valid:
            raise ValueError(f"Invalid codec '{v}'. Must be one of: {', '.join(valid)}")
        return v

    def to_request(self, input_path: Path) -> CompressionRequest:
        if self.resolution == ResolutionMode.AUTO.value:
            resolution: ResolutionMode | int = ResolutionMode.AUTO
        else:
            resolution = int(self.resolution)
        return CompressionRequest(
            input_path=input_path,
            target_size_mb=float(self.target_size_mb),
            resolution=resolution,
            remove_audio=self.remove_audio,
            frame_rate=self.frame_rate,
            codec=Codec(self.codec),
            target_size_label=self.target_size_mb,
        )


def _format_validation_error(e: ValidationError) -> str:
    messages = []
    for error in e.errors():
        msg = error.get("msg", "validation error")
        # pydantic prefixes messages raised from validators
        messages.append(msg.removeprefix("Value error, "))
    return "; ".join(messages)


def build_compress_request(
    input_path: Path,
    target_size_mb: str,
    resolution: str,
    *,
    frame_rate: str | None = None,
    codec: str = Codec.H264.value,
    remove_audio: bool = False,
) -> CompressionRequest:
    """Validate raw options and build the request.

    Raises:
        InvalidRequestError: If any option is malformed.
    """
    try:
        options = CompressOptionsModel(
            target_size_mb=target_size_mb,
            resolution=resolution,
            frame_rate=frame_rate,
            codec=codec,
            remove_audio=remove_audio,
        )
    except ValidationError as e:
        raise InvalidRequestError(_format_validation_error(e)) from e
    return options.to_request(input_path)
