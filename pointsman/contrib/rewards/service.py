"""Reward service — catalog queries and atomic claims."""

import logging
from dataclasses import dataclass
from datetime import timedelta

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from pointsman.contrib.rewards.models import ClaimStatus, Reward, RewardClaim
from pointsman.exceptions import PointsmanError
from pointsman.gates import GateError, Gates
from pointsman.models import TransactionType
from pointsman.services.ledger import Ledger
from pointsman.signals import reward_claimed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClaimResult:
    """Outcome of a reward claim."""

    claim_id: int
    new_balance: int
    promo_code: str
    redemption_code: str


class RewardService:
    """
    Service for reward catalog operations.

    Uses @classmethod for extensibility (consistent with other contrib services).
    """

    @classmethod
    def catalog(cls, featured_only: bool = False) -> QuerySet[Reward]:
        """Active rewards, featured first within sort order when not filtered."""
        qs = Reward.objects.featured() if featured_only else Reward.objects.active()
        return qs.order_by("-is_featured", "sort_order", "points_cost", "id")

    @classmethod
    def get(cls, reward_id: int) -> Reward:
        try:
            return Reward.objects.get(pk=reward_id)
        except Reward.DoesNotExist:
            raise PointsmanError("REWARD_NOT_FOUND", reward_id=reward_id)

    @classmethod
    def claim(cls, account_id: str, reward_id: int, created_by: str = "") -> ClaimResult:
        """
        Claim a reward for points.

        All-or-nothing: stock decrement, the redemption leg (-points_cost),
        the award leg (+points_awarded) and the claim snapshot commit
        together or not at all.

        Raises:
            PointsmanError: REWARD_NOT_FOUND, ACCOUNT_NOT_FOUND
            GateError: REWARD_INACTIVE, OUT_OF_STOCK, INSUFFICIENT_POINTS
        """
        reward = cls.get(reward_id)
        Gates.reward_availability(reward)

        with transaction.atomic():
            account = Ledger.lock_account(account_id)

            if not Reward.objects.take_one(reward.pk):
                raise GateError("OUT_OF_STOCK", "G2_RewardAvailability", reward_id=reward.pk)

            Gates.sufficient_balance(account, reward.points_cost, code="INSUFFICIENT_POINTS")

            new_balance = account.balance
            reference = f"reward:{reward.pk}"

            if reward.points_cost > 0:
                result = Ledger.record(
                    account_id,
                    TransactionType.REDEMPTION,
                    -reward.points_cost,
                    f"Награда: {reward.name}",
                    reference=reference,
                    created_by=created_by,
                )
                new_balance = result.new_balance

            if reward.points_awarded > 0:
                result = Ledger.record(
                    account_id,
                    TransactionType.ADMIN_ADJUSTMENT,
                    reward.points_awarded,
                    f"Награда: {reward.name}",
                    reference=reference,
                    created_by=created_by,
                )
                new_balance = result.new_balance

            expires_at = None
            if reward.validity_days:
                expires_at = timezone.now() + timedelta(days=reward.validity_days)

            claim = RewardClaim.objects.create(
                reward=reward,
                account=account,
                reward_name=reward.name,
                points_cost_at_claim=reward.points_cost,
                points_awarded_at_claim=reward.points_awarded,
                promo_code_at_claim=reward.promo_code,
                expires_at=expires_at,
            )

            reward_claimed.send(sender=RewardClaim, claim=claim)

        logger.info(
            "Reward %s claimed by %s (-%d/+%d, code %s)",
            reward.pk,
            account_id,
            reward.points_cost,
            reward.points_awarded,
            claim.redemption_code,
        )
        return ClaimResult(
            claim_id=claim.pk,
            new_balance=new_balance,
            promo_code=claim.promo_code_at_claim,
            redemption_code=claim.redemption_code,
        )

    @classmethod
    def mark_used(cls, redemption_code: str) -> RewardClaim:
        """
        Mark a claim as used at the point of sale.

        Expiry is evaluated here, lazily; nothing sweeps expired claims.

        Raises:
            PointsmanError: CLAIM_NOT_FOUND, CLAIM_ALREADY_USED, CLAIM_EXPIRED
        """
        with transaction.atomic():
            try:
                claim = RewardClaim.objects.select_for_update().get(
                    redemption_code=redemption_code.strip().upper(),
                )
            except RewardClaim.DoesNotExist:
                raise PointsmanError("CLAIM_NOT_FOUND", redemption_code=redemption_code)

            if claim.status == ClaimStatus.USED:
                raise PointsmanError(
                    "CLAIM_ALREADY_USED",
                    redemption_code=claim.redemption_code,
                    used_at=claim.used_at.isoformat() if claim.used_at else None,
                )
            if claim.is_expired:
                raise PointsmanError(
                    "CLAIM_EXPIRED",
                    redemption_code=claim.redemption_code,
                    expires_at=claim.expires_at.isoformat(),
                )

            claim.status = ClaimStatus.USED
            claim.used_at = timezone.now()
            claim.save(update_fields=["status", "used_at"])

        logger.info("Reward claim %s used", claim.redemption_code)
        return claim

    @classmethod
    def claims_for(cls, account_id: str, status: str | None = None) -> QuerySet[RewardClaim]:
        """Claims of an account, most recent first."""
        qs = RewardClaim.objects.filter(account__account_id=account_id)
        if status:
            qs = qs.filter(status=status)
        return qs.order_by("-claimed_at", "-id")
