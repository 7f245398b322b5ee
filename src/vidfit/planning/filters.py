"""Video filter chain construction."""

from __future__ import annotations

from vidfit.models import (
    FULL_RANGE_PIXEL_FORMAT,
    FilterChain,
    NormalizePixelFormat,
    ResolutionDecision,
    ScaleFilter,
    VideoFilter,
)


def build_filter_chain(decision: ResolutionDecision, pixel_format: str) -> FilterChain:
    """Build the ``-vf`` chain for both passes.

    Scaling is always followed by a pixel format normalization. A full-range
    source that is not scaled still gets the normalization so the output is
    plain yuv420p.
    """
    filters: list[VideoFilter] = []
    if decision.scale_required:
        filters.append(ScaleFilter(decision.final_height))
        filters.append(NormalizePixelFormat())
    elif pixel_format == FULL_RANGE_PIXEL_FORMAT:
        filters.append(NormalizePixelFormat())
    return FilterChain(tuple(filters))
