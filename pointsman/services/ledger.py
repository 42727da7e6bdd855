"""Ledger service — the single choke point for balance changes.

Every write locks the account row (select_for_update) inside
transaction.atomic(), so concurrent events on one account serialize.
"""

import logging
from datetime import datetime
from functools import partial

from django.db import OperationalError, transaction
from django.db.models import QuerySet
from django.utils.text import Truncator

from pointsman import cache
from pointsman.exceptions import PointsmanError
from pointsman.gates import Gates
from pointsman.models import PointsAccount, PointsTransaction, TransactionType
from pointsman.notifications import notify
from pointsman.protocols.ledger import AccountSummary, RecordResult
from pointsman.signals import points_recorded, tier_changed
from pointsman.tiers import TierInfo, tier_for

logger = logging.getLogger(__name__)


class Ledger:
    """
    Points ledger operations.

    Uses @classmethod for extensibility (consistent with other services).
    All balance mutations go through record(); nothing else writes
    PointsAccount.balance.
    """

    # ======================================================================
    # Accounts
    # ======================================================================

    @classmethod
    def open_account(cls, account_id: str, display_name: str = "") -> PointsAccount:
        """
        Open a points account.

        Idempotent — returns the existing account if already open.
        """
        account, created = PointsAccount.objects.get_or_create(
            account_id=account_id,
            defaults={"display_name": display_name},
        )
        if created:
            logger.info("Opened points account %s", account_id)
        return account

    @classmethod
    def get_account(cls, account_id: str) -> PointsAccount | None:
        """Get active account or None."""
        try:
            return PointsAccount.objects.get(account_id=account_id, is_active=True)
        except PointsAccount.DoesNotExist:
            return None

    @classmethod
    def get_balance(cls, account_id: str) -> int:
        """Get current balance. Returns 0 if no account."""
        account = cls.get_account(account_id)
        return account.balance if account else 0

    @classmethod
    def get_tier(cls, account_id: str) -> TierInfo:
        """Get tier info. Bronze if no account."""
        account = cls.get_account(account_id)
        return tier_for(account.lifetime_points if account else 0)

    @classmethod
    def get_summary(cls, account_id: str) -> AccountSummary | None:
        """Get balance and tier summary through the read-through cache."""
        return cache.get_summary(account_id, cls._load_summary)

    @classmethod
    def _load_summary(cls, account_id: str) -> AccountSummary | None:
        account = cls.get_account(account_id)
        if account is None:
            return None
        info = tier_for(account.lifetime_points)
        return AccountSummary(
            account_id=account.account_id,
            balance=account.balance,
            lifetime_points=account.lifetime_points,
            tier=info.tier,
            discount_percent=info.discount_percent,
            next_tier=info.next_tier,
            amount_to_next=info.amount_to_next,
        )

    @classmethod
    def lock_account(cls, account_id: str) -> PointsAccount:
        """
        Get active account with row-level lock for mutation.

        MUST be called inside transaction.atomic().
        Prevents lost-update race conditions on concurrent writes.
        """
        try:
            return PointsAccount.objects.select_for_update().get(
                account_id=account_id,
                is_active=True,
            )
        except PointsAccount.DoesNotExist:
            raise PointsmanError("ACCOUNT_NOT_FOUND", account_id=account_id)

    # ======================================================================
    # Writes
    # ======================================================================

    @classmethod
    def record(
        cls,
        account_id: str,
        transaction_type: str,
        amount: int,
        description: str = "",
        reference: str = "",
        created_by: str = "",
    ) -> RecordResult:
        """
        Record a points transaction.

        Args:
            account_id: Account identifier
            transaction_type: TransactionType value
            amount: Signed amount (positive credit, negative debit)
            description: Reason for the movement
            reference: External reference (order:VH-123)
            created_by: Who triggered the movement

        Returns:
            RecordResult with the new transaction id and balance

        Raises:
            PointsmanError: INVALID_AMOUNT, INSUFFICIENT_BALANCE,
                ACCOUNT_NOT_FOUND, or STORE_UNAVAILABLE (transient)
        """
        kind = cls._validate(transaction_type, amount)

        try:
            with transaction.atomic():
                account = cls.lock_account(account_id)
                tx = cls._apply(account, kind, amount, description, reference, created_by)
        except OperationalError as exc:
            logger.error("Points store unavailable recording for %s: %s", account_id, exc)
            raise PointsmanError("STORE_UNAVAILABLE", account_id=account_id) from exc

        return RecordResult(transaction_id=tx.pk, new_balance=tx.balance_after)

    @classmethod
    def adjust(
        cls,
        account_id: str,
        amount: int,
        description: str = "",
        created_by: str = "",
    ) -> RecordResult:
        """Admin balance adjustment (credit or debit)."""
        return cls.record(
            account_id,
            TransactionType.ADMIN_ADJUSTMENT,
            amount,
            description=description,
            created_by=created_by,
        )

    @classmethod
    def expire(
        cls,
        account_id: str,
        points: int,
        description: str = "",
    ) -> RecordResult | None:
        """
        Expire up to `points` from the balance.

        The debit is clamped to the current balance. Returns None when
        there is nothing left to expire.
        """
        if points <= 0:
            raise PointsmanError("INVALID_AMOUNT", amount=points)

        with transaction.atomic():
            account = cls.lock_account(account_id)
            expired = min(points, account.balance)
            if expired == 0:
                return None
            tx = cls._apply(account, TransactionType.EXPIRATION, -expired, description, "", "")

        return RecordResult(transaction_id=tx.pk, new_balance=tx.balance_after)

    @classmethod
    def _validate(cls, transaction_type: str, amount: int) -> TransactionType:
        try:
            kind = TransactionType(transaction_type)
        except ValueError:
            raise PointsmanError("INVALID_TRANSACTION_TYPE", transaction_type=transaction_type)
        if amount == 0:
            raise PointsmanError("INVALID_AMOUNT", amount=amount)
        return kind

    @classmethod
    def _apply(
        cls,
        account: PointsAccount,
        kind: TransactionType,
        amount: int,
        description: str,
        reference: str,
        created_by: str,
    ) -> PointsTransaction:
        """Apply a movement to a locked account. Caller owns the transaction."""
        if amount < 0:
            Gates.sufficient_balance(account, -amount)

        old_tier = account.tier
        account.balance += amount
        update_fields = ["balance", "updated_at"]

        # Expirations and redemptions never reduce lifetime points
        if amount > 0:
            account.lifetime_points += amount
            account.tier = tier_for(account.lifetime_points).tier
            update_fields += ["lifetime_points", "tier"]

        account.save(update_fields=update_fields)

        tx = PointsTransaction.objects.create(
            account=account,
            transaction_type=kind,
            amount=amount,
            balance_after=account.balance,
            description=cls._fit("description", description),
            reference=cls._fit("reference", reference),
            created_by=cls._fit("created_by", created_by),
        )
        logger.info(
            "Recorded %s %+d for %s (balance %d)",
            kind.value,
            amount,
            account.account_id,
            account.balance,
        )

        cache.invalidate(account.account_id)
        transaction.on_commit(partial(cache.invalidate, account.account_id))
        transaction.on_commit(partial(notify, account.account_id, tx))

        points_recorded.send(sender=PointsTransaction, transaction=tx, account=account)
        if account.tier != old_tier:
            logger.info("Account %s moved from %s to %s", account.account_id, old_tier, account.tier)
            tier_changed.send(
                sender=PointsAccount,
                account=account,
                old_tier=old_tier,
                new_tier=account.tier,
            )

        return tx

    @classmethod
    def _fit(cls, field_name: str, value: str) -> str:
        """Shorten free text built from external names to the column length."""
        max_length = PointsTransaction._meta.get_field(field_name).max_length
        return Truncator(value).chars(max_length)

    # ======================================================================
    # Reads
    # ======================================================================

    @classmethod
    def get_history(
        cls,
        account_id: str,
        transaction_type: str | None = None,
        since: datetime | None = None,
    ) -> QuerySet[PointsTransaction]:
        """
        Transaction history, most recent first.

        Returns a lazy QuerySet: nothing is read until iterated, and it can
        be iterated again or sliced for paging.
        """
        qs = PointsTransaction.objects.filter(
            account__account_id=account_id,
            account__is_active=True,
        )
        if transaction_type:
            qs = qs.filter(transaction_type=transaction_type)
        if since:
            qs = qs.filter(created_at__gte=since)
        return qs.order_by("-created_at", "-id")

    @classmethod
    def leaderboard(cls, limit: int = 20) -> list[PointsAccount]:
        """Active accounts ranked by lifetime points."""
        return list(
            PointsAccount.objects.filter(is_active=True)
            .order_by("-lifetime_points", "created_at")[:limit]
        )
