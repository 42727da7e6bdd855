"""
Pointsman Quests - Gamified tasks with progress, cooldowns and limits.

Usage:
    INSTALLED_APPS = [
        ...
        "pointsman",
        "pointsman.contrib.quests",
    ]

    from pointsman.contrib.quests import QuestService

    QuestService.update_progress("TG-1001", "order_5")
    QuestService.claim("TG-1001", "order_5")
    QuestService.list_for_account("TG-1001")
"""


def __getattr__(name):
    if name == "QuestService":
        from pointsman.contrib.quests.service import QuestService

        return QuestService
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["QuestService"]
