"""Pointsman protocols."""

from pointsman.protocols.ledger import (
    AccountSummary,
    RecordResult,
)
from pointsman.protocols.notifications import (
    NotificationBackend,
    PointsNotification,
)

__all__ = [
    # Ledger
    "AccountSummary",
    "RecordResult",
    # Notifications
    "NotificationBackend",
    "PointsNotification",
]
