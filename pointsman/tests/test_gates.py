"""
Pointsman gate tests.

Tests for:
- Gates G1-G4 (all scenarios)
- ProcessedEvent cleanup
- Structured errors
"""

from datetime import timedelta
from io import StringIO
from unittest.mock import patch

import pytest
from django.core.management import call_command
from django.utils import timezone

from pointsman.contrib.quests.models import QuestProgress
from pointsman.exceptions import PointsmanError
from pointsman.gates import GateError, Gates
from pointsman.models import EventSource, ProcessedEvent

pytestmark = pytest.mark.django_db


# ═══════════════════════════════════════════════════════════════════
# G1: SufficientBalance
# ═══════════════════════════════════════════════════════════════════


class TestG1SufficientBalance:
    """G1: A debit cannot take the balance below zero."""

    def test_covered_debit_passes(self, funded_account):
        assert Gates.sufficient_balance(funded_account, 1000).passed

    def test_overdraft_raises(self, funded_account):
        with pytest.raises(GateError) as exc:
            Gates.sufficient_balance(funded_account, 1001)
        assert exc.value.gate_name == "G1_SufficientBalance"
        assert exc.value.code == "INSUFFICIENT_BALANCE"
        assert exc.value.data["requested"] == 1001

    def test_custom_code(self, funded_account):
        with pytest.raises(GateError) as exc:
            Gates.sufficient_balance(funded_account, 5000, code="INSUFFICIENT_POINTS")
        assert exc.value.code == "INSUFFICIENT_POINTS"

    def test_check_variant(self, funded_account):
        assert Gates.check_sufficient_balance(funded_account, 10)
        assert not Gates.check_sufficient_balance(funded_account, 10_000)


# ═══════════════════════════════════════════════════════════════════
# G2: RewardAvailability
# ═══════════════════════════════════════════════════════════════════


class TestG2RewardAvailability:
    """G2: Reward must be active and in stock."""

    def test_available(self, reward_drink):
        assert Gates.reward_availability(reward_drink).passed

    def test_out_of_stock(self, reward_drink):
        reward_drink.stock_remaining = 0
        with pytest.raises(GateError) as exc:
            Gates.reward_availability(reward_drink)
        assert exc.value.code == "OUT_OF_STOCK"

    def test_inactive_wins_over_stock(self, reward_drink):
        reward_drink.stock_remaining = 0
        reward_drink.is_active = False
        assert not Gates.check_reward_availability(reward_drink)
        with pytest.raises(GateError) as exc:
            Gates.reward_availability(reward_drink)
        assert exc.value.code == "REWARD_INACTIVE"

    def test_unbounded(self, reward_bonus):
        assert Gates.check_reward_availability(reward_bonus)


# ═══════════════════════════════════════════════════════════════════
# G3: QuestClaimable
# ═══════════════════════════════════════════════════════════════════


class TestG3QuestClaimable:
    """G3: Quest is completed, unclaimed, off cooldown and under its limit."""

    def test_no_progress(self, quest_once):
        with pytest.raises(GateError) as exc:
            Gates.quest_claimable(quest_once, None)
        assert exc.value.code == "QUEST_NOT_COMPLETED"

    def test_completed(self, account, quest_once):
        progress = QuestProgress(account=account, quest=quest_once, current_value=1, is_completed=True)
        assert Gates.quest_claimable(quest_once, progress).passed

    def test_cooldown_boundary(self, account, quest_daily):
        claimed_at = timezone.now()
        progress = QuestProgress(
            account=account,
            quest=quest_daily,
            current_value=1,
            is_completed=True,
            completion_count=1,
            last_completed_at=claimed_at,
        )

        assert not Gates.check_quest_claimable(
            quest_daily, progress, now=claimed_at + timedelta(hours=23, minutes=59)
        )
        assert Gates.check_quest_claimable(quest_daily, progress, now=claimed_at + timedelta(hours=24))

    def test_already_claimed_before_limit(self, account, quest_once):
        quest_once.max_completions = 1
        progress = QuestProgress(
            account=account,
            quest=quest_once,
            current_value=1,
            is_completed=True,
            reward_claimed=True,
            completion_count=1,
        )
        with pytest.raises(GateError) as exc:
            Gates.quest_claimable(quest_once, progress)
        assert exc.value.code == "ALREADY_CLAIMED"


# ═══════════════════════════════════════════════════════════════════
# G4: ReplayProtection
# ═══════════════════════════════════════════════════════════════════


class TestG4ReplayProtection:
    """G4: External event cannot be processed twice."""

    def test_first_time_passes(self, db):
        assert Gates.replay_protection("order:VH-1").passed
        assert Gates.is_replay("order:VH-1")

    def test_replay_raises(self, db):
        Gates.replay_protection("order:VH-1")
        with pytest.raises(GateError) as exc:
            Gates.replay_protection("order:VH-1")
        assert exc.value.code == "EVENT_ALREADY_PROCESSED"
        assert exc.value.gate_name == "G4_ReplayProtection"

    def test_check_variant(self, db):
        assert Gates.check_replay_protection("referral:TG-2", source="referral")
        assert not Gates.check_replay_protection("referral:TG-2", source="referral")

    def test_empty_nonce(self, db):
        with pytest.raises(ValueError):
            Gates.replay_protection("")


class TestProcessedEventCleanup:
    """Nonces past the retention window are pruned, recent ones kept."""

    @pytest.fixture
    def nonces(self, db):
        with patch("django.utils.timezone.now", return_value=timezone.now() - timedelta(days=100)):
            ProcessedEvent.objects.create(nonce="order:VH-OLD", source=EventSource.ORDER)
            ProcessedEvent.objects.create(nonce="referral:TG-OLD", source=EventSource.REFERRAL)
        ProcessedEvent.objects.create(nonce="order:VH-NEW", source=EventSource.ORDER)

    def test_old_events_removed(self, nonces):
        deleted, _ = ProcessedEvent.cleanup_old_events()

        assert deleted == 2
        assert list(ProcessedEvent.objects.values_list("nonce", flat=True)) == ["order:VH-NEW"]

    def test_by_source(self, nonces):
        deleted, _ = ProcessedEvent.cleanup_old_events(source=EventSource.REFERRAL)

        assert deleted == 1
        assert Gates.is_replay("order:VH-OLD")
        assert not Gates.is_replay("referral:TG-OLD")

    def test_pruned_order_can_be_processed_again(self, nonces):
        ProcessedEvent.cleanup_old_events()
        assert Gates.check_replay_protection("order:VH-OLD")

    def test_event_ref(self, nonces):
        assert ProcessedEvent.objects.get(nonce="referral:TG-OLD").event_ref == "TG-OLD"

    def test_command(self, nonces):
        out = StringIO()

        call_command("pointsman_cleanup", "--source", "order", stdout=out)

        assert "Deleted 1 order event nonces." in out.getvalue()
        assert ProcessedEvent.objects.count() == 2

    def test_command_dry_run(self, nonces):
        out = StringIO()

        call_command("pointsman_cleanup", "--dry-run", stdout=out)

        assert "Would delete 2 event nonces." in out.getvalue()
        assert ProcessedEvent.objects.count() == 3


class TestStructuredErrors:
    def test_as_dict(self):
        error = PointsmanError("OUT_OF_STOCK", reward_id=7)

        assert error.as_dict() == {
            "code": "OUT_OF_STOCK",
            "message": "Reward is out of stock",
            "data": {"reward_id": 7},
        }
        assert str(error) == "[OUT_OF_STOCK] Reward is out of stock"
        assert not error.is_transient

    def test_custom_message(self):
        assert PointsmanError("INVALID_AMOUNT", "Нельзя ноль").message == "Нельзя ноль"

    def test_gate_error_carries_gate(self):
        error = GateError("OUT_OF_STOCK", "G2_RewardAvailability")
        assert isinstance(error, PointsmanError)
        assert error.data["gate"] == "G2_RewardAvailability"
