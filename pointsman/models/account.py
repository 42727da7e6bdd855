"""PointsAccount model — per-account balance, lifetime points and tier."""

from django.db import models
from django.utils.translation import gettext_lazy as _

from pointsman.tiers import LoyaltyTier, TierInfo, tier_for


class PointsAccount(models.Model):
    """
    Loyalty points account.

    One account per external user (Telegram user, app user). The balance
    is derived from the transaction log and mutated only by the Ledger.

    - balance: spendable points, never negative
    - lifetime_points: total points ever earned (never decreases)
    - tier: derived from lifetime_points, never set independently
    """

    account_id = models.CharField(
        _("идентификатор"),
        max_length=64,
        unique=True,
        help_text=_("Внешний идентификатор пользователя (например, Telegram ID)"),
    )
    display_name = models.CharField(_("имя"), max_length=150, blank=True)

    # Points
    balance = models.PositiveIntegerField(
        _("баланс"),
        default=0,
        help_text=_("Баллы, доступные для списания"),
    )
    lifetime_points = models.PositiveIntegerField(
        _("накоплено за всё время"),
        default=0,
        help_text=_("Всего начислено баллов (никогда не уменьшается)"),
    )
    tier = models.CharField(
        _("уровень"),
        max_length=20,
        choices=LoyaltyTier.choices,
        default=LoyaltyTier.BRONZE,
    )

    # Order statistics
    total_orders = models.PositiveIntegerField(_("заказов"), default=0)
    total_spent = models.PositiveBigIntegerField(_("потрачено"), default=0)

    welcome_bonus_received = models.BooleanField(_("приветственный бонус получен"), default=False)

    # Status
    is_active = models.BooleanField(_("активен"), default=True)
    created_at = models.DateTimeField(_("создан"), auto_now_add=True)
    updated_at = models.DateTimeField(_("обновлён"), auto_now=True)

    class Meta:
        db_table = "pointsman_account"
        verbose_name = _("счёт баллов")
        verbose_name_plural = _("счета баллов")
        indexes = [
            models.Index(fields=["-lifetime_points"], name="pointsman_acc_lifetime_idx"),
        ]

    def __str__(self):
        return f"{self.account_id}: {self.balance}pts | {self.tier}"

    @property
    def tier_info(self) -> TierInfo:
        return tier_for(self.lifetime_points)

    @property
    def discount_percent(self) -> int:
        return self.tier_info.discount_percent
