"""
Pointsman Gates - Validation rules.

G1: SufficientBalance - A debit cannot take the balance below zero
G2: RewardAvailability - Reward must be active and in stock
G3: QuestClaimable - Quest is completed, unclaimed, off cooldown and under its limit
G4: ReplayProtection - External event cannot be processed twice (persistent via DB)
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from django.db import IntegrityError, transaction
from django.utils import timezone

from pointsman.exceptions import PointsmanError

if TYPE_CHECKING:
    from pointsman.contrib.quests.models import Quest, QuestProgress
    from pointsman.contrib.rewards.models import Reward
    from pointsman.models import PointsAccount

logger = logging.getLogger(__name__)


class GateError(PointsmanError):
    """Gate validation error."""

    def __init__(self, code: str, gate_name: str, message: str | None = None, **data):
        self.gate_name = gate_name
        super().__init__(code, message=message, gate=gate_name, **data)


@dataclass
class GateResult:
    """Result of a gate check."""

    passed: bool
    gate_name: str
    message: str = ""


# =============================================================================
# Gates
# =============================================================================


class Gates:
    """Pointsman validation gates."""

    # =========================================================================
    # G1: Sufficient Balance
    # =========================================================================

    @classmethod
    def sufficient_balance(
        cls,
        account: "PointsAccount",
        points: int,
        code: str = "INSUFFICIENT_BALANCE",
    ) -> GateResult:
        """
        G1: Debiting `points` must not make the balance negative.

        Args:
            account: Account (locked by the caller when mutating)
            points: Points to debit (positive number)
            code: Error code to raise (INSUFFICIENT_POINTS for redemptions)

        Raises:
            GateError: If balance < points
        """
        if points > account.balance:
            raise GateError(
                code,
                "G1_SufficientBalance",
                account_id=account.account_id,
                available=account.balance,
                requested=points,
            )

        return GateResult(True, "G1_SufficientBalance")

    @classmethod
    def check_sufficient_balance(cls, *args, **kwargs) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.sufficient_balance(*args, **kwargs)
            return True
        except GateError:
            return False

    # =========================================================================
    # G2: Reward Availability
    # =========================================================================

    @classmethod
    def reward_availability(cls, reward: "Reward") -> GateResult:
        """
        G2: Reward must be active and, when stock is finite, in stock.

        This reads the row as loaded; the claim still relies on the
        compare-and-decrement for the final word on stock.

        Raises:
            GateError: REWARD_INACTIVE or OUT_OF_STOCK
        """
        if not reward.is_active:
            raise GateError("REWARD_INACTIVE", "G2_RewardAvailability", reward_id=reward.pk)

        if reward.stock_remaining is not None and reward.stock_remaining <= 0:
            raise GateError("OUT_OF_STOCK", "G2_RewardAvailability", reward_id=reward.pk)

        return GateResult(True, "G2_RewardAvailability")

    @classmethod
    def check_reward_availability(cls, reward: "Reward") -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.reward_availability(reward)
            return True
        except GateError:
            return False

    # =========================================================================
    # G3: Quest Claimable
    # =========================================================================

    @classmethod
    def quest_claimable(
        cls,
        quest: "Quest",
        progress: "QuestProgress | None",
        now: datetime | None = None,
    ) -> GateResult:
        """
        G3: Quest reward can be claimed now.

        Checks, in order: completed, not already claimed (non-repeatable),
        cooldown elapsed (repeatable), completion limit not reached.

        Args:
            quest: Quest definition
            progress: Account progress row (None if never started)
            now: Evaluation time (defaults to timezone.now())

        Raises:
            GateError: QUEST_NOT_COMPLETED, ALREADY_CLAIMED,
                QUEST_ON_COOLDOWN or MAX_COMPLETIONS_REACHED
        """
        now = now or timezone.now()

        if progress is None or not progress.is_completed:
            raise GateError(
                "QUEST_NOT_COMPLETED",
                "G3_QuestClaimable",
                quest=quest.slug,
                current_value=progress.current_value if progress else 0,
                target_value=quest.target_value,
            )

        if progress.reward_claimed and not quest.is_repeatable:
            raise GateError("ALREADY_CLAIMED", "G3_QuestClaimable", quest=quest.slug)

        if quest.is_repeatable and progress.last_completed_at:
            available_at = progress.last_completed_at + timedelta(
                hours=quest.repeat_cooldown_hours
            )
            if now < available_at:
                raise GateError(
                    "QUEST_ON_COOLDOWN",
                    "G3_QuestClaimable",
                    quest=quest.slug,
                    available_at=available_at.isoformat(),
                )

        if quest.max_completions is not None and progress.completion_count >= quest.max_completions:
            raise GateError(
                "MAX_COMPLETIONS_REACHED",
                "G3_QuestClaimable",
                quest=quest.slug,
                max_completions=quest.max_completions,
            )

        return GateResult(True, "G3_QuestClaimable")

    @classmethod
    def check_quest_claimable(cls, *args, **kwargs) -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.quest_claimable(*args, **kwargs)
            return True
        except GateError:
            return False

    # =========================================================================
    # G4: Replay Protection (persistent via DB)
    # =========================================================================

    @classmethod
    def replay_protection(cls, nonce: str, source: str = "order") -> GateResult:
        """
        G4: Event cannot be processed twice (persistent via DB).

        Runs inside the caller's transaction: if the points mutation that
        follows fails, the nonce is rolled back with it.

        Args:
            nonce: Unique event identifier (order:VH-123, referral:TG-2)
            source: Source name for categorization

        Raises:
            GateError: EVENT_ALREADY_PROCESSED
        """
        from pointsman.models import ProcessedEvent

        if not nonce:
            raise ValueError("Nonce is required.")

        try:
            with transaction.atomic():
                ProcessedEvent.objects.create(nonce=nonce, source=source)
        except IntegrityError:
            if ProcessedEvent.objects.filter(nonce=nonce).exists():
                logger.warning("G4_ReplayProtection: replay of %s event %s", source, nonce)
                raise GateError(
                    "EVENT_ALREADY_PROCESSED",
                    "G4_ReplayProtection",
                    nonce=nonce,
                    source=source,
                )
            raise

        return GateResult(True, "G4_ReplayProtection")

    @classmethod
    def check_replay_protection(cls, nonce: str, source: str = "order") -> bool:
        """Check without raising (returns bool)."""
        try:
            cls.replay_protection(nonce, source)
            return True
        except GateError:
            return False

    @classmethod
    def is_replay(cls, nonce: str) -> bool:
        """Check if nonce was already processed (doesn't record)."""
        from pointsman.models import ProcessedEvent
        return ProcessedEvent.objects.filter(nonce=nonce).exists()
