"""Tests for quest progress and reward claims."""

from datetime import timedelta
from io import StringIO
from unittest.mock import patch

import pytest
from django.core.management import call_command
from django.utils import timezone

from pointsman.contrib.quests import QuestService
from pointsman.contrib.quests.models import Quest, QuestProgress, QuestState, progress_percent
from pointsman.exceptions import PointsmanError
from pointsman.gates import GateError
from pointsman.models import PointsTransaction
from pointsman.services.ledger import Ledger
from pointsman.signals import quest_completed

pytestmark = pytest.mark.django_db


class TestProgress:
    def test_first_update_creates_row(self, account, quest_orders):
        progress = QuestService.update_progress("TG-1001", "order_5")

        assert progress.current_value == 1
        assert not progress.is_completed
        assert progress.state == QuestState.IN_PROGRESS
        assert QuestProgress.objects.count() == 1

    def test_clamped_at_target(self, account, quest_orders):
        progress = QuestService.update_progress("TG-1001", quest_orders.pk, delta=50)

        assert progress.current_value == 5
        assert progress.is_completed
        assert progress.progress_percent == 100.0

    def test_noop_once_completed(self, account, quest_once):
        QuestService.update_progress("TG-1001", "link_telegram")
        progress = QuestService.update_progress("TG-1001", "link_telegram", delta=3)

        assert progress.current_value == 1
        assert progress.state == QuestState.COMPLETED

    def test_completion_signal_sent_once(self, account, quest_once):
        received = []

        def handler(sender, progress, **kwargs):
            received.append(progress.quest.slug)

        quest_completed.connect(handler)
        try:
            QuestService.update_progress("TG-1001", "link_telegram")
            QuestService.update_progress("TG-1001", "link_telegram")
        finally:
            quest_completed.disconnect(handler)

        assert received == ["link_telegram"]

    @pytest.mark.parametrize("delta", [0, -1])
    def test_non_positive_delta_rejected(self, account, quest_orders, delta):
        with pytest.raises(PointsmanError) as exc:
            QuestService.update_progress("TG-1001", "order_5", delta=delta)
        assert exc.value.code == "INVALID_AMOUNT"

    def test_inactive_quest_not_found(self, account, quest_orders):
        quest_orders.is_active = False
        quest_orders.save()

        with pytest.raises(PointsmanError) as exc:
            QuestService.update_progress("TG-1001", "order_5")
        assert exc.value.code == "QUEST_NOT_FOUND"

    def test_unknown_quest(self, account):
        with pytest.raises(PointsmanError) as exc:
            QuestService.update_progress("TG-1001", "nope")
        assert exc.value.code == "QUEST_NOT_FOUND"

    def test_percent(self):
        assert progress_percent(2, 5) == 40.0
        assert progress_percent(9, 5) == 100.0
        assert progress_percent(0, 0) == 100.0


class TestClaim:
    def test_claim_credits_reward(self, funded_account, quest_once):
        """Claiming a 100 point quest on 1000 leaves 1100."""
        QuestService.update_progress("TG-1001", "link_telegram")

        result = QuestService.claim("TG-1001", "link_telegram")

        assert result.new_balance == 1100
        tx = PointsTransaction.objects.get(pk=result.transaction_id)
        assert tx.transaction_type == "task_completion"
        assert tx.amount == 100
        assert tx.balance_after == 1100
        assert tx.description == "Привязать Telegram"
        assert tx.reference == "quest:link_telegram"

        progress = QuestService.get_progress("TG-1001", "link_telegram")
        assert progress.reward_claimed
        assert progress.completion_count == 1
        assert progress.last_completed_at is not None
        assert progress.state == QuestState.CLAIMED

    def test_zero_point_quest(self, funded_account, quest_once):
        """A quest without points is still claimed once and writes no transaction."""
        quest_once.reward_points = 0
        quest_once.save()
        QuestService.update_progress("TG-1001", "link_telegram")

        result = QuestService.claim("TG-1001", "link_telegram")

        assert result.transaction_id is None
        assert result.new_balance == 1000
        assert not PointsTransaction.objects.filter(transaction_type="task_completion").exists()
        progress = QuestService.get_progress("TG-1001", "link_telegram")
        assert progress.reward_claimed
        assert progress.completion_count == 1
        with pytest.raises(GateError) as exc:
            QuestService.claim("TG-1001", "link_telegram")
        assert exc.value.code == "ALREADY_CLAIMED"

    def test_not_started(self, account, quest_once):
        with pytest.raises(GateError) as exc:
            QuestService.claim("TG-1001", "link_telegram")
        assert exc.value.code == "QUEST_NOT_COMPLETED"

    def test_not_completed(self, account, quest_orders):
        QuestService.update_progress("TG-1001", "order_5", delta=4)

        with pytest.raises(GateError) as exc:
            QuestService.claim("TG-1001", "order_5")
        assert exc.value.code == "QUEST_NOT_COMPLETED"
        assert Ledger.get_balance("TG-1001") == 0

    def test_second_claim_rejected(self, account, quest_once):
        """A non-repeatable quest pays out exactly once."""
        QuestService.update_progress("TG-1001", "link_telegram")
        QuestService.claim("TG-1001", "link_telegram")

        with pytest.raises(GateError) as exc:
            QuestService.claim("TG-1001", "link_telegram")

        assert exc.value.code == "ALREADY_CLAIMED"
        assert Ledger.get_balance("TG-1001") == 100
        assert PointsTransaction.objects.filter(transaction_type="task_completion").count() == 1

    def test_progress_after_claim_is_ignored(self, account, quest_once):
        QuestService.update_progress("TG-1001", "link_telegram")
        QuestService.claim("TG-1001", "link_telegram")

        progress = QuestService.update_progress("TG-1001", "link_telegram")
        assert progress.reward_claimed
        assert progress.completion_count == 1


class TestRepeatable:
    """Repeatable quests reset after a claim and respect cooldown and limits."""

    def test_reset_after_claim(self, account, quest_daily):
        QuestService.update_progress("TG-1001", "daily_login")
        QuestService.claim("TG-1001", "daily_login")

        progress = QuestService.get_progress("TG-1001", "daily_login")
        assert progress.current_value == 0
        assert not progress.is_completed
        assert not progress.reward_claimed
        assert progress.completion_count == 1
        assert progress.state == QuestState.CLAIMED

    def test_cooldown(self, account, quest_daily):
        start = timezone.now()

        with patch("django.utils.timezone.now", return_value=start):
            QuestService.update_progress("TG-1001", "daily_login")
            QuestService.claim("TG-1001", "daily_login")

        with patch("django.utils.timezone.now", return_value=start + timedelta(hours=12)):
            QuestService.update_progress("TG-1001", "daily_login")
            with pytest.raises(GateError) as exc:
                QuestService.claim("TG-1001", "daily_login")
        assert exc.value.code == "QUEST_ON_COOLDOWN"

        with patch("django.utils.timezone.now", return_value=start + timedelta(hours=25)):
            result = QuestService.claim("TG-1001", "daily_login")

        assert result.new_balance == 20
        assert QuestService.get_progress("TG-1001", "daily_login").completion_count == 2

    def test_max_completions(self, account, quest_daily):
        quest_daily.repeat_cooldown_hours = 0
        quest_daily.max_completions = 2
        quest_daily.save()

        for _ in range(2):
            QuestService.update_progress("TG-1001", "daily_login")
            QuestService.claim("TG-1001", "daily_login")

        QuestService.update_progress("TG-1001", "daily_login")
        with pytest.raises(GateError) as exc:
            QuestService.claim("TG-1001", "daily_login")

        assert exc.value.code == "MAX_COMPLETIONS_REACHED"
        assert Ledger.get_balance("TG-1001") == 20

    def test_listing_shows_cooldown(self, account, quest_daily):
        QuestService.update_progress("TG-1001", "daily_login")
        QuestService.claim("TG-1001", "daily_login")

        (status,) = QuestService.list_for_account("TG-1001")
        assert status.completion_count == 1
        assert status.available_at is not None
        assert status.available_at > timezone.now()


class TestActivity:
    def test_activity_advances_matching_quests(self, account, quest_orders, quest_once):
        QuestService.record_activity("TG-1001", "order")
        QuestService.record_activity("TG-1001", "order")

        assert QuestService.get_progress("TG-1001", "order_5").current_value == 2
        assert QuestService.get_progress("TG-1001", "link_telegram") is None

    def test_inactive_quests_skipped(self, account, quest_orders):
        quest_orders.is_active = False
        quest_orders.save()

        assert QuestService.record_activity("TG-1001", "order") == []


class TestListing:
    def test_lists_without_creating_rows(self, account, quest_once, quest_orders):
        QuestService.update_progress("TG-1001", "order_5", delta=2)

        statuses = {s.quest.slug: s for s in QuestService.list_for_account("TG-1001")}

        assert statuses["link_telegram"].state == QuestState.NOT_STARTED
        assert statuses["order_5"].state == QuestState.IN_PROGRESS
        assert statuses["order_5"].progress_percent == 40.0
        assert QuestProgress.objects.count() == 1

    def test_unknown_account_sees_catalog(self, db, quest_once):
        (status,) = QuestService.list_for_account("TG-404")
        assert status.state == QuestState.NOT_STARTED


class TestSeedCommand:
    def test_installs_defaults_idempotently(self, db):
        out = StringIO()
        call_command("pointsman_seed_quests", stdout=out)
        call_command("pointsman_seed_quests", stdout=out)

        assert Quest.objects.count() == 5
        daily = Quest.objects.get(slug="daily_login")
        assert daily.is_repeatable
        assert daily.repeat_cooldown_hours == 24
        assert Quest.objects.get(slug="order_5").target_value == 5
        assert "Created 0 quests" in out.getvalue()

    def test_update_overwrites(self, db):
        call_command("pointsman_seed_quests", stdout=StringIO())
        Quest.objects.filter(slug="link_email").update(reward_points=1)

        call_command("pointsman_seed_quests", "--update", stdout=StringIO())
        assert Quest.objects.get(slug="link_email").reward_points == 50
