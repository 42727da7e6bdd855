"""Tests for Pointsman models and admin registration."""

import pytest
from django.contrib import admin

from pointsman.contrib.inbox.models import Notification
from pointsman.contrib.quests.models import Quest, QuestProgress
from pointsman.contrib.rewards.models import Reward, RewardClaim, generate_redemption_code
from pointsman.models import PointsAccount, PointsTransaction, ProcessedEvent
from pointsman.services.ledger import Ledger

pytestmark = pytest.mark.django_db


class TestPointsAccount:
    def test_defaults(self, account):
        assert account.balance == 0
        assert account.lifetime_points == 0
        assert account.tier == "bronze"
        assert account.discount_percent == 0
        assert not account.welcome_bonus_received

    def test_str(self, funded_account):
        assert str(funded_account) == "TG-1001: 1000pts | bronze"

    def test_tier_info(self, account):
        Ledger.adjust("TG-1001", 500_000)
        account.refresh_from_db()

        assert account.tier == "gold"
        assert account.tier_info.next_tier == "platinum"
        assert account.tier_info.amount_to_next == 500_000


class TestPointsTransaction:
    def test_str(self, funded_account):
        tx = PointsTransaction.objects.get(account=funded_account)
        assert str(tx) == "+1000pts — Стартовый баланс"
        assert tx.is_credit

    def test_debit_str_falls_back_to_type(self, funded_account):
        Ledger.record("TG-1001", "redemption", -10)
        tx = Ledger.get_history("TG-1001").first()
        assert str(tx) == "-10pts — redemption"
        assert not tx.is_credit


class TestRedemptionCode:
    def test_format(self):
        code = generate_redemption_code()
        assert code.startswith("RWD-")
        assert len(code) == 12
        assert code[4:].isalnum() and code[4:].upper() == code[4:]


class TestAdminRegistration:
    @pytest.mark.parametrize(
        "model",
        [
            PointsAccount,
            PointsTransaction,
            ProcessedEvent,
            Quest,
            QuestProgress,
            Reward,
            RewardClaim,
            Notification,
        ],
    )
    def test_registered(self, model):
        assert admin.site.is_registered(model)

    def test_transaction_log_is_read_only(self, rf):
        model_admin = admin.site._registry[PointsTransaction]
        request = rf.get("/")

        assert not model_admin.has_add_permission(request)
        assert not model_admin.has_change_permission(request)
        assert not model_admin.has_delete_permission(request)

    def test_tier_badge(self, account):
        model_admin = admin.site._registry[PointsAccount]
        assert "Бронза" in model_admin.tier_badge(account)
