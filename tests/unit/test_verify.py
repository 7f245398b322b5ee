"""Tests for the post-encode size check."""

from __future__ import annotations

import logging

import pytest

from vidfit.models import SizeStatus
from vidfit.verify import size_tolerance_mb, verify_size


class TestSizeTolerance:
    """Tests for size_tolerance_mb."""

    @pytest.mark.parametrize(
        ("target", "expected"),
        [(1, 1), (9.9, 1), (10, 1), (19.9, 1), (20, 2), (25, 2), (100, 10)],
    )
    def test_tenth_of_target_with_floor_of_one(self, target, expected) -> None:
        assert size_tolerance_mb(target) == expected


class TestVerifySize:
    """Tests for verify_size."""

    def test_exact_match_is_ok(self) -> None:
        verdict = verify_size(10, 10.0)

        assert verdict.status is SizeStatus.OK
        assert verdict.ok
        assert verdict.tolerance_mb == 1

    def test_at_tolerance_boundary_is_ok(self) -> None:
        assert verify_size(50, 55.0).ok
        assert verify_size(50, 45.0).ok

    def test_one_unit_outside_deviates(self) -> None:
        verdict = verify_size(50, 56.0)

        assert verdict.status is SizeStatus.DEVIATES
        assert verdict.deviation_mb == pytest.approx(6.0)

    def test_undershoot_deviates(self) -> None:
        assert verify_size(10, 8.5).status is SizeStatus.DEVIATES

    def test_deviation_logged(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            verify_size(10, 12.5)
        assert "deviates from target" in caplog.text

    def test_reference_case(self) -> None:
        verdict = verify_size(10, 9.6)

        assert verdict.ok
        assert verdict.actual_mb == 9.6
        assert verdict.target_mb == 10
