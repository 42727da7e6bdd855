"""Event sources — typed entry points for external events.

Order and referral events are replay-protected: the event nonce is stored
in the same transaction as the points it produces, so a redelivered event
is rejected and a failed one can be retried.
"""

import logging
from dataclasses import dataclass

from django.db import models, transaction
from django.utils.translation import gettext_lazy as _

from pointsman.conf import pointsman_settings
from pointsman.exceptions import PointsmanError
from pointsman.gates import Gates
from pointsman.models import EventSource, TransactionType
from pointsman.protocols.ledger import RecordResult
from pointsman.services.ledger import Ledger
from pointsman.signals import activity_recorded

logger = logging.getLogger(__name__)


class Activity(models.TextChoices):
    """Quest-relevant activities reported by event sources."""

    ORDER = "order", _("Заказ")
    SPEND = "spend", _("Сумма заказов")
    FIRST_ORDER = "first_order", _("Первый заказ")
    REFERRAL = "referral", _("Приглашение друга")
    VISIT = "visit", _("Визит")
    DAILY_LOGIN = "daily_login", _("Ежедневный вход")
    LINK_TELEGRAM = "link_telegram", _("Привязка Telegram")
    LINK_EMAIL = "link_email", _("Привязка Email")
    SHARE = "share", _("Репост")
    REVIEW = "review", _("Отзыв")


@dataclass(frozen=True)
class OrderPoints:
    """Points outcome of a completed order."""

    order_ref: str
    points_used: int
    points_earned: int
    first_order_bonus: int
    new_balance: int


def record_activity(account_id: str, activity: str, amount: int = 1) -> None:
    """Report a quest-relevant activity (quests advance in the same transaction)."""
    activity_recorded.send(
        sender=Activity,
        account_id=account_id,
        activity=Activity(activity).value,
        amount=amount,
    )


def order_completed(
    account_id: str,
    order_ref: str,
    total: int,
    points_used: int = 0,
    created_by: str = "",
) -> OrderPoints:
    """
    Apply the points side of a paid order.

    - points_used are debited as a redemption
    - ORDER_CASHBACK_PERCENT of total is credited as order_reward (floored)
    - the first order of an account earns FIRST_ORDER_BONUS_AMOUNT

    Args:
        account_id: Account identifier
        order_ref: Order number (VH-...)
        total: Amount actually paid after points
        points_used: Points spent on the order

    Raises:
        PointsmanError: INVALID_AMOUNT, ACCOUNT_NOT_FOUND,
            INSUFFICIENT_BALANCE, EVENT_ALREADY_PROCESSED
    """
    if total < 0 or points_used < 0:
        raise PointsmanError("INVALID_AMOUNT", total=total, points_used=points_used)

    reference = f"order:{order_ref}"

    with transaction.atomic():
        account = Ledger.lock_account(account_id)
        Gates.replay_protection(reference, source=EventSource.ORDER)
        new_balance = account.balance

        if points_used:
            result = Ledger.record(
                account_id,
                TransactionType.REDEMPTION,
                -points_used,
                f"Оплата баллами заказа {order_ref}",
                reference=reference,
                created_by=created_by,
            )
            new_balance = result.new_balance

        account.total_orders += 1
        account.total_spent += total
        account.save(update_fields=["total_orders", "total_spent", "updated_at"])
        is_first = account.total_orders == 1

        cashback = total * pointsman_settings.ORDER_CASHBACK_PERCENT // 100
        if cashback > 0:
            result = Ledger.record(
                account_id,
                TransactionType.ORDER_REWARD,
                cashback,
                f"Кэшбэк за заказ {order_ref}",
                reference=reference,
                created_by=created_by,
            )
            new_balance = result.new_balance

        bonus = pointsman_settings.FIRST_ORDER_BONUS_AMOUNT if is_first else 0
        if bonus > 0:
            result = Ledger.record(
                account_id,
                TransactionType.ORDER_REWARD,
                bonus,
                "Бонус за первый заказ",
                reference=reference,
                created_by=created_by,
            )
            new_balance = result.new_balance

        record_activity(account_id, Activity.ORDER)
        if total > 0:
            record_activity(account_id, Activity.SPEND, total)
        if is_first:
            record_activity(account_id, Activity.FIRST_ORDER)

    logger.info(
        "Order %s for %s: used %d, earned %d, first-order bonus %d",
        order_ref,
        account_id,
        points_used,
        cashback,
        bonus,
    )
    return OrderPoints(
        order_ref=order_ref,
        points_used=points_used,
        points_earned=cashback,
        first_order_bonus=bonus,
        new_balance=new_balance,
    )


def referral_confirmed(referrer_id: str, referred_id: str) -> RecordResult | None:
    """
    Credit the referrer once per referred account.

    Returns:
        RecordResult of the bonus, or None when REFERRAL_BONUS_AMOUNT is 0

    Raises:
        PointsmanError: INVALID_REFERRAL, ACCOUNT_NOT_FOUND,
            EVENT_ALREADY_PROCESSED
    """
    if referrer_id == referred_id:
        raise PointsmanError("INVALID_REFERRAL", account_id=referrer_id)

    reference = f"referral:{referred_id}"
    result = None

    with transaction.atomic():
        Ledger.lock_account(referrer_id)
        Gates.replay_protection(reference, source=EventSource.REFERRAL)

        amount = pointsman_settings.REFERRAL_BONUS_AMOUNT
        if amount > 0:
            result = Ledger.record(
                referrer_id,
                TransactionType.REFERRAL_BONUS,
                amount,
                f"Приглашение друга {referred_id}",
                reference=reference,
            )
        record_activity(referrer_id, Activity.REFERRAL)

    return result


def grant_welcome_bonus(account_id: str) -> RecordResult | None:
    """
    Credit the welcome bonus once per account.

    Returns:
        RecordResult, or None if the bonus was already granted (or disabled)
    """
    with transaction.atomic():
        account = Ledger.lock_account(account_id)
        if account.welcome_bonus_received:
            return None

        amount = pointsman_settings.WELCOME_BONUS_AMOUNT
        if amount <= 0:
            return None

        account.welcome_bonus_received = True
        account.save(update_fields=["welcome_bonus_received", "updated_at"])
        return Ledger.record(
            account_id,
            TransactionType.ADMIN_ADJUSTMENT,
            amount,
            "Приветственный бонус",
            reference="welcome",
        )


def app_opened(account_id: str) -> None:
    """Report an app visit (visit and daily login quests)."""
    with transaction.atomic():
        Ledger.lock_account(account_id)
        record_activity(account_id, Activity.VISIT)
        record_activity(account_id, Activity.DAILY_LOGIN)
