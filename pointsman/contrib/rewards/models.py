"""Reward models — catalog entries and point-in-time claims."""

import string

from django.db import models
from django.db.models import F, Q
from django.utils import timezone
from django.utils.crypto import get_random_string
from django.utils.translation import gettext_lazy as _

REDEMPTION_CODE_PREFIX = "RWD-"
REDEMPTION_CODE_CHARS = string.ascii_uppercase + string.digits


def generate_redemption_code() -> str:
    return REDEMPTION_CODE_PREFIX + get_random_string(8, allowed_chars=REDEMPTION_CODE_CHARS)


class RewardType(models.TextChoices):
    FREE_DRINK = "free_drink", _("Бесплатный напиток")
    DISCOUNT_PERCENT = "discount_percent", _("Скидка в процентах")
    DISCOUNT_FIXED = "discount_fixed", _("Фиксированная скидка")
    FREE_UPGRADE = "free_upgrade", _("Бесплатное улучшение")
    BONUS_POINTS = "bonus_points", _("Бонусные баллы")
    EXCLUSIVE_ITEM = "exclusive_item", _("Эксклюзивный товар")
    CUSTOM = "custom", _("Другое")


class ClaimStatus(models.TextChoices):
    CLAIMED = "claimed", _("Получена")
    USED = "used", _("Использована")


class RewardQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)

    def featured(self):
        return self.filter(is_active=True, is_featured=True)

    def take_one(self, pk: int) -> bool:
        """
        Compare-and-decrement one unit of stock.

        A single conditional UPDATE, so concurrent claims on the same
        reward serialize in the database. Unbounded stock (NULL) stays
        NULL. Returns False when nothing was left to take.
        """
        updated = (
            self.filter(pk=pk)
            .filter(Q(stock_remaining__isnull=True) | Q(stock_remaining__gt=0))
            .update(stock_remaining=F("stock_remaining") - 1)
        )
        return updated == 1


class Reward(models.Model):
    """
    Catalog entry redeemable for points.

    A claim debits points_cost and credits points_awarded. stock_remaining
    is NULL for unbounded rewards and never goes below zero.
    """

    name = models.CharField(_("название"), max_length=200)
    description = models.TextField(_("описание"), blank=True)
    reward_type = models.CharField(
        _("тип"),
        max_length=20,
        choices=RewardType.choices,
        default=RewardType.CUSTOM,
    )

    points_cost = models.PositiveIntegerField(_("стоимость"), default=0)
    points_awarded = models.PositiveIntegerField(
        _("начисляется баллов"),
        default=0,
        help_text=_("Баллы, начисляемые при получении награды"),
    )
    promo_code = models.CharField(_("промокод"), max_length=50, blank=True)

    stock_remaining = models.PositiveIntegerField(
        _("остаток"),
        null=True,
        blank=True,
        help_text=_("Пусто — без ограничения"),
    )
    validity_days = models.PositiveIntegerField(_("срок действия (дней)"), default=30)

    is_active = models.BooleanField(_("активна"), default=True)
    is_featured = models.BooleanField(_("популярная"), default=False)
    sort_order = models.IntegerField(_("порядок"), default=0)
    created_at = models.DateTimeField(_("создана"), auto_now_add=True)
    updated_at = models.DateTimeField(_("обновлена"), auto_now=True)

    objects = RewardQuerySet.as_manager()

    class Meta:
        verbose_name = _("награда")
        verbose_name_plural = _("награды")
        ordering = ["sort_order", "points_cost", "id"]

    def __str__(self):
        return f"{self.name} ({self.points_cost}pts)"

    @property
    def in_stock(self) -> bool:
        return self.stock_remaining is None or self.stock_remaining > 0


class RewardClaim(models.Model):
    """
    Snapshot of a completed redemption.

    Name, cost, award and promo code are copied from the reward at claim
    time; later edits to the reward never change existing claims.
    """

    reward = models.ForeignKey(
        Reward,
        on_delete=models.PROTECT,
        related_name="claims",
        verbose_name=_("награда"),
    )
    account = models.ForeignKey(
        "pointsman.PointsAccount",
        on_delete=models.PROTECT,
        related_name="reward_claims",
        verbose_name=_("счёт"),
    )

    redemption_code = models.CharField(
        _("код получения"),
        max_length=20,
        unique=True,
        default=generate_redemption_code,
    )
    status = models.CharField(
        _("статус"),
        max_length=10,
        choices=ClaimStatus.choices,
        default=ClaimStatus.CLAIMED,
        db_index=True,
    )

    # Snapshot
    reward_name = models.CharField(_("название награды"), max_length=200)
    points_cost_at_claim = models.PositiveIntegerField(_("списано"))
    points_awarded_at_claim = models.PositiveIntegerField(_("начислено"))
    promo_code_at_claim = models.CharField(_("промокод"), max_length=50, blank=True)

    claimed_at = models.DateTimeField(_("получена"), auto_now_add=True)
    expires_at = models.DateTimeField(_("действует до"), null=True, blank=True)
    used_at = models.DateTimeField(_("использована"), null=True, blank=True)

    class Meta:
        verbose_name = _("полученная награда")
        verbose_name_plural = _("полученные награды")
        ordering = ["-claimed_at", "-id"]

    def __str__(self):
        return f"{self.redemption_code}: {self.reward_name}"

    @property
    def is_expired(self) -> bool:
        return (
            self.status == ClaimStatus.CLAIMED
            and self.expires_at is not None
            and self.expires_at <= timezone.now()
        )
