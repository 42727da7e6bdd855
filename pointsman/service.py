"""
Pointsman public API.

QUERIES:
    PointsService.balance(account_id)   - Spendable balance
    PointsService.summary(account_id)   - Balance and tier (cached)
    PointsService.tier(account_id)      - Tier info
    PointsService.history(account_id)   - Transactions, most recent first
    PointsService.quests(account_id)    - Quests with progress
    PointsService.catalog()             - Reward catalog

COMMANDS:
    PointsService.record_transaction(...)   - Record a points movement
    PointsService.claim_quest_reward(...)   - Claim a completed quest
    PointsService.claim_reward(...)         - Redeem a catalog reward
    PointsService.admin_adjust_balance(...) - Manual correction
"""

from datetime import datetime
from typing import TYPE_CHECKING

from django.db.models import QuerySet

from pointsman.models import PointsTransaction
from pointsman.protocols.ledger import AccountSummary, RecordResult
from pointsman.services.ledger import Ledger
from pointsman.tiers import TierInfo

if TYPE_CHECKING:
    from pointsman.contrib.quests.service import QuestStatus
    from pointsman.contrib.rewards.models import Reward
    from pointsman.contrib.rewards.service import ClaimResult


class PointsService:
    """
    Pointsman public API.

    Uses @classmethod for extensibility. Quest and reward operations
    require the matching contrib app in INSTALLED_APPS.
    """

    # ======================================================================
    # QUERIES
    # ======================================================================

    @classmethod
    def balance(cls, account_id: str) -> int:
        return Ledger.get_balance(account_id)

    @classmethod
    def summary(cls, account_id: str) -> AccountSummary | None:
        return Ledger.get_summary(account_id)

    @classmethod
    def tier(cls, account_id: str) -> TierInfo:
        return Ledger.get_tier(account_id)

    @classmethod
    def history(
        cls,
        account_id: str,
        transaction_type: str | None = None,
        since: datetime | None = None,
        limit: int | None = None,
    ) -> QuerySet[PointsTransaction]:
        """
        Transaction history page, most recent first.

        Args:
            limit: Page size (defaults to HISTORY_LIMIT)
        """
        from pointsman.conf import pointsman_settings

        limit = limit or pointsman_settings.HISTORY_LIMIT
        return Ledger.get_history(account_id, transaction_type, since)[:limit]

    @classmethod
    def quests(cls, account_id: str) -> list["QuestStatus"]:
        from pointsman.contrib.quests.service import QuestService

        return QuestService.list_for_account(account_id)

    @classmethod
    def catalog(cls, featured_only: bool = False) -> QuerySet["Reward"]:
        from pointsman.contrib.rewards.service import RewardService

        return RewardService.catalog(featured_only=featured_only)

    # ======================================================================
    # COMMANDS
    # ======================================================================

    @classmethod
    def record_transaction(
        cls,
        account_id: str,
        transaction_type: str,
        amount: int,
        description: str = "",
        reference: str = "",
        created_by: str = "",
    ) -> RecordResult:
        return Ledger.record(
            account_id,
            transaction_type,
            amount,
            description=description,
            reference=reference,
            created_by=created_by,
        )

    @classmethod
    def claim_quest_reward(cls, account_id: str, quest: int | str) -> RecordResult:
        from pointsman.contrib.quests.service import QuestService

        return QuestService.claim(account_id, quest)

    @classmethod
    def claim_reward(cls, account_id: str, reward_id: int) -> "ClaimResult":
        from pointsman.contrib.rewards.service import RewardService

        return RewardService.claim(account_id, reward_id)

    @classmethod
    def admin_adjust_balance(
        cls,
        account_id: str,
        amount: int,
        description: str = "",
        created_by: str = "",
    ) -> RecordResult:
        return Ledger.adjust(account_id, amount, description=description, created_by=created_by)
