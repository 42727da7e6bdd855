"""Loyalty tiers — pure mapping from lifetime points to tier and discount."""

from dataclasses import dataclass

from django.db import models
from django.utils.translation import gettext_lazy as _


class LoyaltyTier(models.TextChoices):
    """Account loyalty tiers."""

    BRONZE = "bronze", _("Бронза")
    SILVER = "silver", _("Серебро")
    GOLD = "gold", _("Золото")
    PLATINUM = "platinum", _("Платина")


# (minimum lifetime points, tier, discount percent), ascending
TIER_THRESHOLDS = (
    (0, LoyaltyTier.BRONZE, 0),
    (100_000, LoyaltyTier.SILVER, 3),
    (500_000, LoyaltyTier.GOLD, 5),
    (1_000_000, LoyaltyTier.PLATINUM, 10),
)


@dataclass(frozen=True)
class TierInfo:
    """Tier computed for a lifetime points total."""

    tier: str
    discount_percent: int
    next_tier: str | None = None
    amount_to_next: int = 0

    @property
    def label(self) -> str:
        return str(LoyaltyTier(self.tier).label)


def tier_for(lifetime_points: int) -> TierInfo:
    """
    Map cumulative lifetime points to a loyalty tier.

    Thresholds are on points ever earned, not on the spendable balance.

    Raises:
        ValueError: If lifetime_points is negative
    """
    if lifetime_points < 0:
        raise ValueError(f"lifetime_points must be >= 0, got {lifetime_points}")

    index = 0
    for i, (threshold, _tier, _discount) in enumerate(TIER_THRESHOLDS):
        if lifetime_points >= threshold:
            index = i

    _threshold, tier, discount = TIER_THRESHOLDS[index]
    if index + 1 < len(TIER_THRESHOLDS):
        next_threshold, next_tier, _ = TIER_THRESHOLDS[index + 1]
        return TierInfo(
            tier=tier.value,
            discount_percent=discount,
            next_tier=next_tier.value,
            amount_to_next=next_threshold - lifetime_points,
        )
    return TierInfo(tier=tier.value, discount_percent=discount)
