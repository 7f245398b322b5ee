"""Bitrate planning from a target file size.

The whole file budget is ``target_size_mb`` mebibytes spread over the source
duration. Audio (when kept) gets a fixed share and the rest goes to video.
"""

from __future__ import annotations

import logging
import math
from fractions import Fraction

from vidfit.config.models import DEFAULT_ENCODING_SETTINGS, EncodingSettings
from vidfit.errors import InsufficientBitrateError
from vidfit.models import BitratePlan, Codec, CompressionRequest, VideoMetadata

logger = logging.getLogger(__name__)

BITS_PER_MB = 1024 * 1024 * 8


def compute_total_kbps(target_size_mb: float, duration_seconds: float) -> int | None:
    """Total bitrate in kbps that fills ``target_size_mb`` over the duration.

    Uses exact rational arithmetic on the decimal text of both values and
    truncates. Returns None when the duration is not positive.
    """
    duration = Fraction(str(duration_seconds))
    if duration <= 0:
        return None
    bits = Fraction(str(target_size_mb)) * BITS_PER_MB
    return math.floor(bits / duration / 1000)


def effective_minimum_kbps(
    codec: Codec, settings: EncodingSettings = DEFAULT_ENCODING_SETTINGS
) -> float:
    minimum = Fraction(settings.min_video_bitrate_kbps)
    if codec is Codec.H265:
        minimum *= Fraction(str(settings.h265_min_bitrate_factor))
    return float(minimum)


def plan_bitrate(
    request: CompressionRequest,
    metadata: VideoMetadata,
    settings: EncodingSettings = DEFAULT_ENCODING_SETTINGS,
) -> BitratePlan:
    """Split the size budget into video and audio bitrates.

    Raises:
        InsufficientBitrateError: If the video bitrate cannot be computed or
            falls below the codec's minimum.
    """
    minimum = effective_minimum_kbps(request.codec, settings)

    total_kbps = compute_total_kbps(request.target_size_mb, metadata.duration_seconds)
    if total_kbps is None:
        raise InsufficientBitrateError(None, minimum, request.codec.value)

    audio_kbps = 0 if request.remove_audio else settings.audio_bitrate_kbps
    video_kbps = total_kbps - audio_kbps

    if video_kbps < minimum:
        raise InsufficientBitrateError(video_kbps, minimum, request.codec.value)

    logger.debug(
        "Bitrate plan: total=%dk video=%dk audio=%dk (minimum %gk)",
        total_kbps,
        video_kbps,
        audio_kbps,
        minimum,
    )
    return BitratePlan(
        total_kbps=total_kbps,
        video_kbps=video_kbps,
        audio_kbps=audio_kbps,
        min_video_kbps=minimum,
    )
