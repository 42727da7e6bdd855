"""Advance quests from activities reported by event sources."""

from django.dispatch import receiver

from pointsman.signals import activity_recorded


@receiver(activity_recorded)
def advance_quests(sender, account_id, activity, amount=1, **kwargs):
    from pointsman.contrib.quests.service import QuestService

    QuestService.record_activity(account_id, activity, amount)
