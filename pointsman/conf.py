"""
Pointsman configuration.

Usage in settings.py:
    POINTSMAN = {
        "ORDER_CASHBACK_PERCENT": 1,
        "NOTIFICATION_BACKEND": "pointsman.adapters.inbox.InboxNotificationBackend",
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class PointsmanSettings:
    """Pointsman configuration settings."""

    # Event sources
    ORDER_CASHBACK_PERCENT: int = 1
    WELCOME_BONUS_AMOUNT: int = 15000
    FIRST_ORDER_BONUS_AMOUNT: int = 10000
    REFERRAL_BONUS_AMOUNT: int = 5000

    # Delivery collaborator (dotted path, empty = no delivery)
    NOTIFICATION_BACKEND: str = ""

    # Read-through account summary cache
    SUMMARY_CACHE_TIMEOUT: int = 300

    # Default page size for history queries
    HISTORY_LIMIT: int = 50

    # ProcessedEvent cleanup
    EVENT_CLEANUP_DAYS: int = 90


def get_pointsman_settings() -> PointsmanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "POINTSMAN", {})
    return PointsmanSettings(**user_settings)


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_pointsman_settings(), name)


pointsman_settings = _LazySettings()
