"""PointsTransaction model — the append-only ledger."""

from django.db import models
from django.utils.translation import gettext_lazy as _

from pointsman.exceptions import PointsmanError


class TransactionType(models.TextChoices):
    """Points transaction types."""

    TASK_COMPLETION = "task_completion", _("Выполнение задания")
    ORDER_REWARD = "order_reward", _("Кэшбэк за заказ")
    REFERRAL_BONUS = "referral_bonus", _("Реферальный бонус")
    ADMIN_ADJUSTMENT = "admin_adjustment", _("Корректировка")
    REDEMPTION = "redemption", _("Списание")
    EXPIRATION = "expiration", _("Истечение срока")


class PointsTransaction(models.Model):
    """
    Immutable record of a points movement.

    Every credit and debit is logged here and balance_after holds the
    running balance. Rows are append-only; saving an existing row fails.
    """

    account = models.ForeignKey(
        "pointsman.PointsAccount",
        on_delete=models.PROTECT,
        related_name="transactions",
        verbose_name=_("счёт"),
    )

    transaction_type = models.CharField(
        _("тип"),
        max_length=20,
        choices=TransactionType.choices,
    )
    amount = models.IntegerField(
        _("баллы"),
        help_text=_("Положительное — начисление, отрицательное — списание"),
    )
    balance_after = models.PositiveIntegerField(
        _("баланс после"),
        help_text=_("Баланс после этой операции"),
    )

    description = models.CharField(_("описание"), max_length=200, blank=True)
    reference = models.CharField(
        _("ссылка"),
        max_length=100,
        blank=True,
        help_text=_("Внешний идентификатор (например, order:VH-123)"),
    )

    created_at = models.DateTimeField(_("создана"), auto_now_add=True, db_index=True)
    created_by = models.CharField(_("автор"), max_length=100, blank=True)

    class Meta:
        db_table = "pointsman_transaction"
        verbose_name = _("операция с баллами")
        verbose_name_plural = _("операции с баллами")
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["account", "-created_at"], name="pointsman_tx_account_idx"),
        ]

    def __str__(self):
        sign = "+" if self.amount > 0 else ""
        return f"{sign}{self.amount}pts — {self.description or self.transaction_type}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise PointsmanError(
                "TRANSACTION_IMMUTABLE",
                transaction_id=self.pk,
            )
        super().save(*args, **kwargs)

    @property
    def is_credit(self) -> bool:
        return self.amount > 0
