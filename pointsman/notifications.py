"""
Points notifications — user-facing content for ledger transactions.

compose() is pure: it maps a transaction event to a title and message.
notify() hands the composed content to the configured delivery backend.
"""

import logging

from django.utils.module_loading import import_string

from pointsman.models import PointsTransaction, TransactionType
from pointsman.protocols.notifications import NotificationBackend, PointsNotification

logger = logging.getLogger(__name__)

# Russian digit grouping uses a no-break space
THOUSANDS_SEPARATOR = "\u00a0"


def format_points(value: int) -> str:
    """Format an absolute points value with Russian digit grouping (1 000)."""
    return f"{abs(value):,}".replace(",", THOUSANDS_SEPARATOR)


def compose(
    transaction_type: str,
    amount: int,
    new_balance: int,
    description: str | None = None,
) -> PointsNotification:
    """
    Compose the notification for a points transaction.

    Args:
        transaction_type: TransactionType value (unknown strings fall back
            to a generic credit/debit text)
        amount: Signed amount; its sign picks credit or debit wording
        new_balance: Balance after the transaction
        description: Reason, shown for admin adjustments

    Returns:
        PointsNotification with title and message
    """
    delta = format_points(amount)
    balance = format_points(new_balance)
    is_credit = amount > 0

    try:
        kind = TransactionType(transaction_type)
    except ValueError:
        kind = None

    match kind:
        case TransactionType.TASK_COMPLETION:
            return PointsNotification(
                title="Задание выполнено!",
                message=f"Вам начислено +{delta} баллов за выполнение задания. Баланс: {balance} баллов.",
            )
        case TransactionType.ORDER_REWARD:
            return PointsNotification(
                title="Кэшбэк за заказ!",
                message=f"Вам начислено +{delta} баллов кэшбэка за заказ. Баланс: {balance} баллов.",
            )
        case TransactionType.REFERRAL_BONUS:
            return PointsNotification(
                title="Реферальный бонус!",
                message=f"Вам начислено +{delta} баллов за приглашение друга. Баланс: {balance} баллов.",
            )
        case TransactionType.ADMIN_ADJUSTMENT:
            reason = f": {description}" if description else ""
            if is_credit:
                return PointsNotification(
                    title="Начисление баллов",
                    message=f"Вам начислено +{delta} баллов{reason}. Баланс: {balance} баллов.",
                )
            return PointsNotification(
                title="Корректировка баланса",
                message=f"Списано -{delta} баллов{reason}. Баланс: {balance} баллов.",
            )
        case TransactionType.REDEMPTION:
            return PointsNotification(
                title="Оплата баллами",
                message=f"Списано -{delta} баллов для оплаты заказа. Баланс: {balance} баллов.",
            )
        case TransactionType.EXPIRATION:
            return PointsNotification(
                title="Баллы истекли",
                message=f"Сгорело -{delta} баллов в связи с истечением срока. Баланс: {balance} баллов.",
            )
        case _:
            if is_credit:
                return PointsNotification(
                    title="Начисление баллов",
                    message=f"Вам начислено +{delta} баллов. Баланс: {balance} баллов.",
                )
            return PointsNotification(
                title="Списание баллов",
                message=f"Списано -{delta} баллов. Баланс: {balance} баллов.",
            )


def compose_for(tx: PointsTransaction) -> PointsNotification:
    """Compose the notification for a stored transaction."""
    return compose(tx.transaction_type, tx.amount, tx.balance_after, tx.description or None)


def get_backend() -> NotificationBackend | None:
    """Get configured NotificationBackend."""
    from pointsman.conf import pointsman_settings

    backend_path = pointsman_settings.NOTIFICATION_BACKEND
    if backend_path:
        backend_class = import_string(backend_path)
        return backend_class()
    return None


def notify(account_id: str, tx: PointsTransaction) -> bool:
    """
    Deliver the notification for a committed transaction.

    Delivery failures never propagate: the points mutation already
    succeeded and stays successful even if the user is never notified.

    Returns:
        True if a backend accepted the notification
    """
    try:
        backend = get_backend()
        if backend is None:
            return False
        content = compose_for(tx)
        backend.deliver(
            account_id,
            content.title,
            content.message,
            reference=f"transaction:{tx.pk}",
        )
    except Exception:
        logger.exception(
            "Notification delivery failed for account %s (transaction %s)",
            account_id,
            tx.pk,
        )
        return False
    return True
