"""Tests for tier computation."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pointsman.tiers import TIER_THRESHOLDS, LoyaltyTier, TierInfo, tier_for

TIER_ORDER = [tier.value for _threshold, tier, _discount in TIER_THRESHOLDS]


class TestTierFor:
    """tier_for maps lifetime points to tier and discount."""

    @pytest.mark.parametrize(
        "points,tier,discount",
        [
            (0, "bronze", 0),
            (99_999, "bronze", 0),
            (100_000, "silver", 3),
            (499_999, "silver", 3),
            (500_000, "gold", 5),
            (999_999, "gold", 5),
            (1_000_000, "platinum", 10),
            (25_000_000, "platinum", 10),
        ],
    )
    def test_thresholds(self, points, tier, discount):
        info = tier_for(points)
        assert info.tier == tier
        assert info.discount_percent == discount

    def test_next_tier_distance(self):
        """Bronze reports the points left to silver."""
        assert tier_for(40_000) == TierInfo(
            tier="bronze",
            discount_percent=0,
            next_tier="silver",
            amount_to_next=60_000,
        )

    def test_top_tier_has_no_next(self):
        info = tier_for(1_500_000)
        assert info.next_tier is None
        assert info.amount_to_next == 0

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            tier_for(-1)

    def test_label(self):
        assert tier_for(600_000).label == "Золото"
        assert LoyaltyTier.PLATINUM.label == "Платина"


class TestTierProperties:
    """Tier is a pure, monotonic function of lifetime points."""

    @given(st.integers(min_value=0, max_value=5_000_000), st.integers(min_value=0, max_value=5_000_000))
    def test_monotonic(self, a, b):
        low, high = sorted((a, b))
        assert TIER_ORDER.index(tier_for(low).tier) <= TIER_ORDER.index(tier_for(high).tier)
        assert tier_for(low).discount_percent <= tier_for(high).discount_percent

    @given(st.integers(min_value=0, max_value=5_000_000))
    def test_pure(self, points):
        assert tier_for(points) == tier_for(points)

    @given(st.integers(min_value=0, max_value=999_999))
    def test_amount_to_next_reaches_next_tier(self, points):
        info = tier_for(points)
        assert tier_for(points + info.amount_to_next).tier == info.next_tier
