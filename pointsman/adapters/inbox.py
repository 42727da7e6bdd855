"""Pointsman adapter writing notifications into the in-app inbox."""

from pointsman.contrib.inbox.service import InboxService


class InboxNotificationBackend:
    """Adapter: the inbox contrib implements NotificationBackend."""

    def deliver(self, account_id: str, title: str, message: str, reference: str = "") -> None:
        InboxService.push(account_id, title, message, reference=reference)
