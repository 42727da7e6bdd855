"""Pointsman services (CORE only).

CORE services are exported here. Contrib services are in their respective modules:
- pointsman.contrib.quests: QuestService
- pointsman.contrib.rewards: RewardService
- pointsman.contrib.inbox: InboxService
"""

from pointsman.services import events
from pointsman.services.ledger import Ledger

__all__ = ["Ledger", "events"]
