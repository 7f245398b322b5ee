"""Pure planning stages: bitrate, resolution and filter graph."""

from vidfit.planning.bitrate import (
    compute_total_kbps,
    effective_minimum_kbps,
    plan_bitrate,
)
from vidfit.planning.filters import build_filter_chain
from vidfit.planning.resolution import select_resolution

__all__ = [
    "build_filter_chain",
    "compute_total_kbps",
    "effective_minimum_kbps",
    "plan_bitrate",
    "select_resolution",
]
