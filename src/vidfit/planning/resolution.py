"""Output resolution selection.

Automatic mode steps 1080p+ sources down to 720p, and 720p down to 480p, when
the video bitrate is too thin for the larger frame. Explicit heights are
honored but never upscale. The result is always even because 4:2:0 chroma
needs even dimensions.
"""

from __future__ import annotations

import logging

from vidfit.config.models import DEFAULT_ENCODING_SETTINGS, EncodingSettings
from vidfit.models import (
    BitratePlan,
    CompressionRequest,
    ResolutionDecision,
    VideoMetadata,
)

logger = logging.getLogger(__name__)


def _auto_height(
    source_height: int, video_kbps: int, settings: EncodingSettings
) -> int:
    height = source_height
    if source_height >= 1080 and video_kbps < settings.downscale_to_720_below_kbps:
        height = 720
    if (
        height == 720
        and source_height >= 720
        and video_kbps < settings.downscale_to_480_below_kbps
    ):
        height = 480
    return height


def select_resolution(
    request: CompressionRequest,
    metadata: VideoMetadata,
    plan: BitratePlan,
    settings: EncodingSettings = DEFAULT_ENCODING_SETTINGS,
) -> ResolutionDecision:
    source_height = metadata.height
    if request.is_auto_resolution:
        height = _auto_height(source_height, plan.video_kbps, settings)
    else:
        height = request.resolution

    height = min(height, source_height)
    if height % 2:
        height -= 1

    scale_required = height != source_height or metadata.width % 2 == 1
    logger.debug(
        "Resolution: source %dp -> %dp (scale=%s)",
        source_height,
        height,
        scale_required,
    )
    return ResolutionDecision(final_height=height, scale_required=scale_required)
