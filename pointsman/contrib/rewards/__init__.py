"""
Pointsman Rewards - Stock-limited reward catalog and claims.

Usage:
    INSTALLED_APPS = [
        ...
        "pointsman",
        "pointsman.contrib.rewards",
    ]

    from pointsman.contrib.rewards import RewardService

    RewardService.catalog(featured_only=True)
    result = RewardService.claim("TG-1001", reward_id)
    RewardService.mark_used(result.redemption_code)
"""


def __getattr__(name):
    if name == "RewardService":
        from pointsman.contrib.rewards.service import RewardService

        return RewardService
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["RewardService"]
