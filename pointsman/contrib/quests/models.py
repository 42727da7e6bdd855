"""Quest models — definitions and per-account progress."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class QuestType(models.TextChoices):
    """Quest types. Values match the activities reported by event sources."""

    ORDER = "order", _("Заказы")
    SPEND = "spend", _("Сумма заказов")
    FIRST_ORDER = "first_order", _("Первый заказ")
    REFERRAL = "referral", _("Приглашения")
    VISIT = "visit", _("Визиты")
    DAILY_LOGIN = "daily_login", _("Ежедневный вход")
    LINK_TELEGRAM = "link_telegram", _("Привязка Telegram")
    LINK_EMAIL = "link_email", _("Привязка Email")
    SHARE = "share", _("Репост")
    REVIEW = "review", _("Отзыв")
    CUSTOM = "custom", _("Другое")


class QuestState(models.TextChoices):
    """Derived progress state."""

    NOT_STARTED = "not_started", _("Не начато")
    IN_PROGRESS = "in_progress", _("В процессе")
    COMPLETED = "completed", _("Выполнено")
    CLAIMED = "claimed", _("Награда получена")


class Quest(models.Model):
    """
    Quest definition.

    Non-repeatable quests pay out once per account. Repeatable quests
    reset after each claim and can be claimed again once
    repeat_cooldown_hours have passed, up to max_completions.
    """

    slug = models.SlugField(_("код"), max_length=50, unique=True)
    title = models.CharField(_("название"), max_length=200)
    description = models.TextField(_("описание"), blank=True)
    quest_type = models.CharField(
        _("тип"),
        max_length=20,
        choices=QuestType.choices,
        db_index=True,
    )

    target_value = models.PositiveIntegerField(
        _("цель"),
        default=1,
        help_text=_("Значение прогресса, при котором задание выполнено"),
    )
    reward_points = models.PositiveIntegerField(_("награда"))

    is_repeatable = models.BooleanField(_("повторяемое"), default=False)
    repeat_cooldown_hours = models.PositiveIntegerField(
        _("пауза между повторами (ч)"),
        default=0,
        help_text=_("Только для повторяемых заданий"),
    )
    max_completions = models.PositiveIntegerField(
        _("максимум выполнений"),
        null=True,
        blank=True,
        help_text=_("Пусто — без ограничения"),
    )

    is_active = models.BooleanField(_("активно"), default=True)
    sort_order = models.IntegerField(_("порядок"), default=0)
    created_at = models.DateTimeField(_("создано"), auto_now_add=True)
    updated_at = models.DateTimeField(_("обновлено"), auto_now=True)

    class Meta:
        verbose_name = _("задание")
        verbose_name_plural = _("задания")
        ordering = ["sort_order", "id"]

    def __str__(self):
        return f"{self.slug} (+{self.reward_points})"


class QuestProgress(models.Model):
    """
    Progress of one account on one quest.

    Created on the first progress update and mutated only by
    QuestService. reward_claimed is a one-way latch for
    non-repeatable quests.
    """

    account = models.ForeignKey(
        "pointsman.PointsAccount",
        on_delete=models.CASCADE,
        related_name="quest_progress",
        verbose_name=_("счёт"),
    )
    quest = models.ForeignKey(
        Quest,
        on_delete=models.CASCADE,
        related_name="progress",
        verbose_name=_("задание"),
    )

    current_value = models.PositiveIntegerField(_("прогресс"), default=0)
    is_completed = models.BooleanField(_("выполнено"), default=False)
    reward_claimed = models.BooleanField(_("награда получена"), default=False)
    completion_count = models.PositiveIntegerField(_("выполнений"), default=0)
    last_completed_at = models.DateTimeField(_("последнее выполнение"), null=True, blank=True)

    created_at = models.DateTimeField(_("создано"), auto_now_add=True)
    updated_at = models.DateTimeField(_("обновлено"), auto_now=True)

    class Meta:
        verbose_name = _("прогресс задания")
        verbose_name_plural = _("прогресс заданий")
        constraints = [
            models.UniqueConstraint(
                fields=["account", "quest"],
                name="pointsman_quest_progress_unique",
            ),
        ]

    def __str__(self):
        return f"{self.account_id}/{self.quest_id}: {self.current_value}"

    @property
    def progress_percent(self) -> float:
        """Completion percentage for display, capped at 100."""
        return progress_percent(self.current_value, self.quest.target_value)

    @property
    def state(self) -> str:
        if self.reward_claimed and not self.quest.is_repeatable:
            return QuestState.CLAIMED
        if self.is_completed:
            return QuestState.COMPLETED
        if self.current_value > 0:
            return QuestState.IN_PROGRESS
        if self.completion_count > 0:
            return QuestState.CLAIMED
        return QuestState.NOT_STARTED


def progress_percent(current_value: int, target_value: int) -> float:
    if target_value <= 0:
        return 100.0
    return min(100.0, current_value / target_value * 100)
