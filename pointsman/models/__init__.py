"""Pointsman models (CORE only).

CORE models are exported here. Contrib models are in their respective modules:
- pointsman.contrib.quests: Quest, QuestProgress, QuestType
- pointsman.contrib.rewards: Reward, RewardClaim, ClaimStatus
- pointsman.contrib.inbox: Notification
"""

from pointsman.models.account import PointsAccount
from pointsman.models.transaction import PointsTransaction, TransactionType
from pointsman.models.processed_event import EventSource, ProcessedEvent
from pointsman.tiers import LoyaltyTier

__all__ = [
    # Ledger
    "PointsAccount",
    "PointsTransaction",
    "TransactionType",
    "LoyaltyTier",
    # Replay protection
    "ProcessedEvent",
    "EventSource",
]
