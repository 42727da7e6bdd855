"""Inbox service."""

import logging

from django.db.models import QuerySet

from pointsman.contrib.inbox.models import Notification
from pointsman.exceptions import PointsmanError
from pointsman.services.ledger import Ledger

logger = logging.getLogger(__name__)


class InboxService:
    """
    Service for in-app notifications.

    Uses @classmethod for extensibility (consistent with other contrib services).
    """

    @classmethod
    def push(
        cls,
        account_id: str,
        title: str,
        message: str,
        reference: str = "",
    ) -> Notification:
        """Store a notification for an account."""
        account = Ledger.get_account(account_id)
        if account is None:
            raise PointsmanError("ACCOUNT_NOT_FOUND", account_id=account_id)
        return Notification.objects.create(
            account=account,
            title=title,
            message=message,
            reference=reference,
        )

    @classmethod
    def list(cls, account_id: str, unread_only: bool = False) -> QuerySet[Notification]:
        """Notifications of an account, most recent first."""
        qs = Notification.objects.filter(account__account_id=account_id)
        if unread_only:
            qs = qs.filter(is_read=False)
        return qs.order_by("-created_at", "-id")

    @classmethod
    def unread_count(cls, account_id: str) -> int:
        return cls.list(account_id, unread_only=True).count()

    @classmethod
    def mark_read(cls, account_id: str, notification_id: int) -> bool:
        """Mark one notification read. Returns False if it does not belong to the account."""
        updated = Notification.objects.filter(
            pk=notification_id,
            account__account_id=account_id,
        ).update(is_read=True)
        return updated == 1

    @classmethod
    def mark_all_read(cls, account_id: str) -> int:
        """Mark every unread notification read. Returns the count updated."""
        count = Notification.objects.filter(
            account__account_id=account_id,
            is_read=False,
        ).update(is_read=True)
        if count:
            logger.debug("Marked %d notifications read for %s", count, account_id)
        return count
