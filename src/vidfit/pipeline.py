"""End-to-end compression pipeline.

``plan_compression`` chains the pure planning stages; ``run_compression``
adds the two-pass encode and the size check.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from vidfit.config.models import DEFAULT_ENCODING_SETTINGS, EncodingSettings
from vidfit.encoder.interface import Encoder
from vidfit.encoder.orchestrator import TwoPassOrchestrator
from vidfit.models import (
    CompressionPlan,
    CompressionRequest,
    EncodeResult,
    SizeVerdict,
    VideoMetadata,
)
from vidfit.planning import build_filter_chain, plan_bitrate, select_resolution
from vidfit.verify import verify_size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompressionOutcome:
    """Result of a completed compression run."""

    plan: CompressionPlan
    result: EncodeResult
    verdict: SizeVerdict


def plan_compression(
    request: CompressionRequest,
    metadata: VideoMetadata,
    settings: EncodingSettings = DEFAULT_ENCODING_SETTINGS,
) -> CompressionPlan:
    """Derive bitrate, resolution, filters and frame rate for a request.

    Raises:
        InsufficientBitrateError: If the target size cannot be met.
    """
    bitrate = plan_bitrate(request, metadata, settings)
    resolution = select_resolution(request, metadata, bitrate, settings)
    filter_chain = build_filter_chain(resolution, metadata.pixel_format)
    frame_rate = request.frame_rate or metadata.frame_rate
    return CompressionPlan(
        bitrate=bitrate,
        resolution=resolution,
        filter_chain=filter_chain,
        frame_rate=frame_rate,
    )


def run_compression(
    request: CompressionRequest,
    metadata: VideoMetadata,
    encoder: Encoder,
    output_path: Path,
    *,
    plan: CompressionPlan | None = None,
    settings: EncodingSettings = DEFAULT_ENCODING_SETTINGS,
    temp_directory: Path | None = None,
) -> CompressionOutcome:
    """Plan (unless ``plan`` is given), encode and verify.

    Raises:
        InsufficientBitrateError: If planning fails. Nothing is encoded.
        EncodeFailedError: If either pass fails.
    """
    if plan is None:
        plan = plan_compression(request, metadata, settings)

    orchestrator = TwoPassOrchestrator(
        encoder, temp_directory=temp_directory, settings=settings
    )
    result = orchestrator.run(request, metadata, plan, output_path)
    verdict = verify_size(request.target_size_mb, result.size_mb)
    logger.info(
        "Compressed %s to %.2f MB (target %g MB, %s)",
        request.input_path,
        verdict.actual_mb,
        verdict.target_mb,
        verdict.status.value,
    )
    return CompressionOutcome(plan=plan, result=result, verdict=verdict)
