"""Pytest fixtures for Pointsman tests."""

import pytest
from django.core.cache import cache

from pointsman.contrib.quests.models import Quest, QuestType
from pointsman.contrib.rewards.models import Reward, RewardType
from pointsman.services.ledger import Ledger


@pytest.fixture(autouse=True)
def clear_cache():
    """Account summaries must not leak between tests."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def account(db):
    """Create an empty points account."""
    return Ledger.open_account("TG-1001", display_name="Иван")


@pytest.fixture
def funded_account(account):
    """Account holding 1000 points."""
    Ledger.adjust("TG-1001", 1000, "Стартовый баланс")
    account.refresh_from_db()
    return account


@pytest.fixture
def other_account(db):
    """Create a second account."""
    return Ledger.open_account("TG-2002", display_name="Мария")


@pytest.fixture
def quest_once(db):
    """Non-repeatable single-step quest worth 100 points."""
    return Quest.objects.create(
        slug="link_telegram",
        title="Привязать Telegram",
        quest_type=QuestType.LINK_TELEGRAM,
        target_value=1,
        reward_points=100,
    )


@pytest.fixture
def quest_orders(db):
    """Five orders quest worth 300 points."""
    return Quest.objects.create(
        slug="order_5",
        title="Постоянный клиент",
        quest_type=QuestType.ORDER,
        target_value=5,
        reward_points=300,
    )


@pytest.fixture
def quest_daily(db):
    """Repeatable daily quest with a 24h cooldown."""
    return Quest.objects.create(
        slug="daily_login",
        title="Ежедневный визит",
        quest_type=QuestType.DAILY_LOGIN,
        target_value=1,
        reward_points=10,
        is_repeatable=True,
        repeat_cooldown_hours=24,
    )


@pytest.fixture
def reward_bonus(db):
    """Reward costing 500 and awarding 15000 points."""
    return Reward.objects.create(
        name="Бонусный пакет",
        reward_type=RewardType.BONUS_POINTS,
        points_cost=500,
        points_awarded=15000,
        promo_code="BONUS15K",
    )


@pytest.fixture
def reward_drink(db):
    """Stock-limited free drink costing 10000 points."""
    return Reward.objects.create(
        name="Бесплатный кофе",
        reward_type=RewardType.FREE_DRINK,
        points_cost=10000,
        stock_remaining=2,
        promo_code="COFFEE",
        is_featured=True,
    )
