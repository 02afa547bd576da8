"""Tests for the ring segmenter."""

import pytest

from timerpie.core.rings import RadiusTier, RingSegment, segments


class TestSegments:
    """segments() splits remaining minutes into base-60 rings."""

    @pytest.mark.parametrize("remaining", [0, -1, -0.5])
    def test_nothing_remaining(self, remaining: float) -> None:
        assert segments(remaining) == []

    def test_partial_single_ring(self) -> None:
        assert segments(12.5) == [RingSegment(RadiusTier.OUTER, 12.5, False)]

    def test_exactly_one_hour_is_one_full_ring(self) -> None:
        assert segments(60) == [RingSegment(RadiusTier.OUTER, 60, True)]

    def test_ninety_minutes(self) -> None:
        assert segments(90) == [
            RingSegment(RadiusTier.OUTER, 30, False),
            RingSegment(RadiusTier.MIDDLE, 60, True),
        ]

    def test_exact_two_hours_shows_full_outer_ring_not_zero(self) -> None:
        rings = segments(120)
        assert rings[0] == RingSegment(RadiusTier.OUTER, 60, True)
        assert len(rings) == 2

    def test_just_over_two_hours_adds_inner_ring(self) -> None:
        rings = segments(120.5)
        assert [r.tier for r in rings] == [RadiusTier.OUTER, RadiusTier.MIDDLE, RadiusTier.INNER]
        assert rings[0].value == pytest.approx(0.5)
        assert not rings[0].is_full

    def test_three_hours_is_three_full_rings(self) -> None:
        rings = segments(180)
        assert len(rings) == 3
        assert all(r.is_full and r.value == 60 for r in rings)

    @pytest.mark.parametrize("remaining", [0.1, 30, 59.9, 61, 119, 150, 179.5])
    def test_only_the_first_ring_can_be_partial(self, remaining: float) -> None:
        rings = segments(remaining)
        assert all(r.is_full for r in rings[1:])
        assert all(r.is_full == (r.value == 60) for r in rings)
        assert sum(r.value for r in rings) == pytest.approx(remaining)
