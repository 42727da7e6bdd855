"""Quest service — progress tracking, completion and reward claims."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from django.db import transaction
from django.utils import timezone

from pointsman.contrib.quests.models import Quest, QuestProgress, QuestState, progress_percent
from pointsman.exceptions import PointsmanError
from pointsman.gates import Gates
from pointsman.models import TransactionType
from pointsman.protocols.ledger import RecordResult
from pointsman.services.ledger import Ledger
from pointsman.signals import quest_completed, quest_reward_claimed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuestStatus:
    """A quest together with one account's progress on it."""

    quest: Quest
    current_value: int
    is_completed: bool
    reward_claimed: bool
    completion_count: int
    progress_percent: float
    state: str
    available_at: datetime | None = None


class QuestService:
    """
    Service for quest operations.

    Uses @classmethod for extensibility (consistent with other contrib services).
    Quests are referenced by primary key or slug.
    """

    @classmethod
    def list_for_account(cls, account_id: str) -> list[QuestStatus]:
        """
        All active quests with the account's progress.

        Read-only: progress rows are not created here.
        """
        account = Ledger.get_account(account_id)
        progress_by_quest = {}
        if account:
            progress_by_quest = {
                p.quest_id: p
                for p in QuestProgress.objects.filter(account=account).select_related("quest")
            }

        now = timezone.now()
        statuses = []
        for quest in Quest.objects.filter(is_active=True):
            progress = progress_by_quest.get(quest.pk)
            if progress is None:
                statuses.append(
                    QuestStatus(
                        quest=quest,
                        current_value=0,
                        is_completed=False,
                        reward_claimed=False,
                        completion_count=0,
                        progress_percent=progress_percent(0, quest.target_value),
                        state=QuestState.NOT_STARTED,
                    )
                )
                continue
            statuses.append(
                QuestStatus(
                    quest=quest,
                    current_value=progress.current_value,
                    is_completed=progress.is_completed,
                    reward_claimed=progress.reward_claimed,
                    completion_count=progress.completion_count,
                    progress_percent=progress.progress_percent,
                    state=progress.state,
                    available_at=cls._available_at(quest, progress, now),
                )
            )
        return statuses

    @classmethod
    def get_progress(cls, account_id: str, quest: int | str) -> QuestProgress | None:
        """Get progress row or None if never started."""
        return (
            QuestProgress.objects.select_related("quest")
            .filter(account__account_id=account_id, quest=cls._get_quest(quest, active_only=False))
            .first()
        )

    @classmethod
    def update_progress(
        cls,
        account_id: str,
        quest: int | str,
        delta: int = 1,
    ) -> QuestProgress:
        """
        Advance quest progress.

        current_value is clamped at target_value. Once completed the
        progress is frozen until the reward is claimed (repeatable quests
        start over after the claim).

        Raises:
            PointsmanError: INVALID_AMOUNT, QUEST_NOT_FOUND, ACCOUNT_NOT_FOUND
        """
        if delta <= 0:
            raise PointsmanError("INVALID_AMOUNT", amount=delta)

        quest = cls._get_quest(quest)

        with transaction.atomic():
            account = Ledger.lock_account(account_id)
            progress, _ = QuestProgress.objects.select_for_update().get_or_create(
                account=account,
                quest=quest,
            )
            if progress.is_completed:
                return progress

            progress.current_value = min(quest.target_value, progress.current_value + delta)
            progress.is_completed = progress.current_value >= quest.target_value
            progress.save(update_fields=["current_value", "is_completed", "updated_at"])

            if progress.is_completed:
                logger.info("Quest %s completed by %s", quest.slug, account_id)
                quest_completed.send(sender=QuestProgress, progress=progress)

        return progress

    @classmethod
    def record_activity(
        cls,
        account_id: str,
        activity: str,
        amount: int = 1,
    ) -> list[QuestProgress]:
        """Advance every active quest whose type matches the activity."""
        if amount <= 0:
            return []
        return [
            cls.update_progress(account_id, quest.pk, amount)
            for quest in Quest.objects.filter(is_active=True, quest_type=activity)
        ]

    @classmethod
    def claim(cls, account_id: str, quest: int | str) -> RecordResult:
        """
        Claim the reward of a completed quest.

        Credits reward_points as task_completion; zero-point quests write
        no transaction (transaction_id is None) but still count as claimed.
        Repeatable quests reset their progress for the next cycle.

        Raises:
            PointsmanError: QUEST_NOT_FOUND, ACCOUNT_NOT_FOUND
            GateError: QUEST_NOT_COMPLETED, ALREADY_CLAIMED,
                QUEST_ON_COOLDOWN, MAX_COMPLETIONS_REACHED
        """
        quest = cls._get_quest(quest, active_only=False)
        now = timezone.now()

        with transaction.atomic():
            account = Ledger.lock_account(account_id)
            progress = (
                QuestProgress.objects.select_for_update()
                .filter(account=account, quest=quest)
                .first()
            )
            Gates.quest_claimable(quest, progress, now=now)

            if quest.reward_points > 0:
                result = Ledger.record(
                    account_id,
                    TransactionType.TASK_COMPLETION,
                    quest.reward_points,
                    quest.title,
                    reference=f"quest:{quest.slug}",
                )
            else:
                result = RecordResult(transaction_id=None, new_balance=account.balance)

            progress.reward_claimed = True
            progress.completion_count += 1
            progress.last_completed_at = now
            if quest.is_repeatable:
                progress.current_value = 0
                progress.is_completed = False
                progress.reward_claimed = False
            progress.save(update_fields=[
                "current_value",
                "is_completed",
                "reward_claimed",
                "completion_count",
                "last_completed_at",
                "updated_at",
            ])

            quest_reward_claimed.send(
                sender=QuestProgress,
                progress=progress,
                transaction_id=result.transaction_id,
            )

        logger.info(
            "Quest %s claimed by %s (+%d, completion #%d)",
            quest.slug,
            account_id,
            quest.reward_points,
            progress.completion_count,
        )
        return result

    @classmethod
    def _get_quest(cls, quest: int | str, active_only: bool = True) -> Quest:
        qs = Quest.objects.all()
        if active_only:
            qs = qs.filter(is_active=True)
        lookup = {"pk": quest} if isinstance(quest, int) else {"slug": quest}
        try:
            return qs.get(**lookup)
        except Quest.DoesNotExist:
            raise PointsmanError("QUEST_NOT_FOUND", quest=quest)

    @classmethod
    def _available_at(
        cls,
        quest: Quest,
        progress: QuestProgress,
        now: datetime,
    ) -> datetime | None:
        """When a repeatable quest leaves cooldown (None if it already has)."""
        if not quest.is_repeatable or progress.last_completed_at is None:
            return None
        available_at = progress.last_completed_at + timedelta(hours=quest.repeat_cooldown_hours)
        return available_at if available_at > now else None
