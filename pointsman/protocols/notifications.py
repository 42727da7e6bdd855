"""Notification delivery protocol."""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class PointsNotification:
    """User-facing notification content for a points movement."""

    title: str
    message: str


@runtime_checkable
class NotificationBackend(Protocol):
    """
    Protocol for the delivery collaborator (in-app inbox, bot transport).

    Configuration in settings.py:
        POINTSMAN = {
            "NOTIFICATION_BACKEND": "pointsman.adapters.inbox.InboxNotificationBackend",
        }
    """

    def deliver(
        self,
        account_id: str,
        title: str,
        message: str,
        reference: str = "",
    ) -> None:
        """
        Deliver a notification to the account owner.

        Failures may raise; the caller logs them and never rolls back
        the points mutation that produced the notification.
        """
        ...
