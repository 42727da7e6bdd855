"""Ledger result types shared with collaborators."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RecordResult:
    """Outcome of a committed ledger write (no transaction id when nothing was written)."""

    transaction_id: int | None
    new_balance: int


@dataclass(frozen=True)
class AccountSummary:
    """Balance and tier snapshot for display (never authoritative)."""

    account_id: str
    balance: int
    lifetime_points: int
    tier: str
    discount_percent: int
    next_tier: str | None
    amount_to_next: int
