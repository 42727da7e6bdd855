"""
Django Pointsman - Loyalty points ledger and gamification engine.

Usage:
    from pointsman import Ledger, PointsService
    from pointsman.gates import Gates, GateError, GateResult

    Ledger.open_account("TG-1001")
    Ledger.record("TG-1001", "order_reward", 500, "Кэшбэк за заказ VH-1")
    PointsService.summary("TG-1001")

    # Pure helpers
    tier_for(150_000).tier  # "silver"
    compose("redemption", -500, 1000).title
"""


def __getattr__(name):
    if name == "Ledger":
        from pointsman.services.ledger import Ledger

        return Ledger
    if name == "PointsService":
        from pointsman.service import PointsService

        return PointsService
    if name == "PointsmanError":
        from pointsman.exceptions import PointsmanError

        return PointsmanError
    if name == "tier_for":
        from pointsman.tiers import tier_for

        return tier_for
    if name == "compose":
        from pointsman.notifications import compose

        return compose
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["Ledger", "PointsService", "PointsmanError", "tier_for", "compose"]
__version__ = "0.1.0"
