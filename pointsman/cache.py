"""
Read-through cache of account summaries.

The cache is never authoritative: values are loaded from the database on a
miss and dropped by every ledger mutation. Nothing writes through it.
"""

from collections.abc import Callable

from django.core.cache import cache

from pointsman.protocols.ledger import AccountSummary

KEY_PREFIX = "pointsman:summary:"


def summary_key(account_id: str) -> str:
    return f"{KEY_PREFIX}{account_id}"


def get_summary(
    account_id: str,
    loader: Callable[[str], AccountSummary | None],
) -> AccountSummary | None:
    """Return the cached summary, loading it on a miss."""
    from pointsman.conf import pointsman_settings

    key = summary_key(account_id)
    summary = cache.get(key)
    if summary is None:
        summary = loader(account_id)
        if summary is not None:
            cache.set(key, summary, pointsman_settings.SUMMARY_CACHE_TIMEOUT)
    return summary


def invalidate(account_id: str) -> None:
    cache.delete(summary_key(account_id))
