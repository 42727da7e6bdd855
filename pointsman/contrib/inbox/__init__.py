"""
Pointsman Inbox - In-app notifications for points movements.

Usage:
    INSTALLED_APPS = [
        ...
        "pointsman",
        "pointsman.contrib.inbox",
    ]

    POINTSMAN = {
        "NOTIFICATION_BACKEND": "pointsman.adapters.inbox.InboxNotificationBackend",
    }

    from pointsman.contrib.inbox import InboxService

    InboxService.unread_count("TG-1001")
"""


def __getattr__(name):
    if name == "InboxService":
        from pointsman.contrib.inbox.service import InboxService

        return InboxService
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["InboxService"]
