"""
Pointsman signals — public event API.

Emitted signals:
- points_recorded: Emitted by Ledger after a transaction is written
- tier_changed: Emitted by Ledger when lifetime points move an account up a tier
- activity_recorded: Emitted by services.events for quest-relevant activity
  (order, spend, first_order, referral, visit, daily_login, ...)
- quest_completed: Emitted by QuestService when progress reaches the target
- quest_reward_claimed: Emitted by QuestService.claim()
- reward_claimed: Emitted by RewardService.claim()
"""

from django.dispatch import Signal

# Ledger signals
points_recorded = Signal()  # sender=PointsTransaction, transaction, account
tier_changed = Signal()  # sender=PointsAccount, account, old_tier, new_tier

# Event source signals
activity_recorded = Signal()  # sender=Activity, account_id, activity, amount

# Gamification signals
quest_completed = Signal()  # sender=QuestProgress, progress
quest_reward_claimed = Signal()  # sender=QuestProgress, progress, transaction_id
reward_claimed = Signal()  # sender=RewardClaim, claim
