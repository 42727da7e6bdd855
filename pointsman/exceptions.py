"""Pointsman exceptions."""


class BaseError(Exception):
    """
    Structured exception with a stable code and context data.

    Subclasses declare ``_default_messages`` keyed by code; callers pass
    extra context as keyword arguments, exposed as ``data``.
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(f"[{code}] {self.message}")

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "data": dict(self.data)}


class PointsmanError(BaseError):
    """
    Structured exception for ledger, quest and reward operations.

    Usage:
        try:
            Ledger.record("TG-1001", TransactionType.REDEMPTION, -500)
        except PointsmanError as e:
            if e.code == "INSUFFICIENT_BALANCE":
                handle_overdraft()
    """

    _default_messages = {
        "ACCOUNT_NOT_FOUND": "Points account not found",
        "INVALID_AMOUNT": "Amount must be non-zero",
        "INVALID_TRANSACTION_TYPE": "Unknown transaction type",
        "TRANSACTION_IMMUTABLE": "Points transactions cannot be modified",
        "INSUFFICIENT_BALANCE": "Insufficient balance for debit",
        "INSUFFICIENT_POINTS": "Insufficient points for redemption",
        "OUT_OF_STOCK": "Reward is out of stock",
        "REWARD_INACTIVE": "Reward is not active",
        "REWARD_NOT_FOUND": "Reward not found",
        "QUEST_NOT_FOUND": "Quest not found",
        "QUEST_NOT_COMPLETED": "Quest is not completed",
        "QUEST_ON_COOLDOWN": "Quest is on cooldown",
        "ALREADY_CLAIMED": "Quest reward already claimed",
        "MAX_COMPLETIONS_REACHED": "Quest completion limit reached",
        "CLAIM_NOT_FOUND": "Reward claim not found",
        "CLAIM_ALREADY_USED": "Reward claim already used",
        "CLAIM_EXPIRED": "Reward claim expired",
        "EVENT_ALREADY_PROCESSED": "Event already processed",
        "INVALID_REFERRAL": "Account cannot refer itself",
        "STORE_UNAVAILABLE": "Points store unavailable, retry later",
    }

    TRANSIENT_CODES = frozenset({"STORE_UNAVAILABLE"})

    @property
    def is_transient(self) -> bool:
        """True when the caller may retry the same operation."""
        return self.code in self.TRANSIENT_CODES
