"""Post-encode size check."""

from __future__ import annotations

import logging
import math

from vidfit.models import SizeStatus, SizeVerdict

logger = logging.getLogger(__name__)


def size_tolerance_mb(target_mb: float) -> int:
    """Allowed deviation: a tenth of the target, at least 1 MB."""
    return max(1, math.floor(target_mb / 10))


def verify_size(target_mb: float, actual_mb: float) -> SizeVerdict:
    """Compare the realized size with the target.

    Two-pass rate control lands close to the budget but not exactly on it,
    so a deviation is advisory and never fails the run.
    """
    tolerance = size_tolerance_mb(target_mb)
    deviates = abs(actual_mb - target_mb) > tolerance
    status = SizeStatus.DEVIATES if deviates else SizeStatus.OK
    if deviates:
        logger.warning(
            "Output size %.2f MB deviates from target %g MB by more than %d MB",
            actual_mb,
            target_mb,
            tolerance,
        )
    return SizeVerdict(
        status=status,
        target_mb=target_mb,
        actual_mb=actual_mb,
        tolerance_mb=tolerance,
    )
