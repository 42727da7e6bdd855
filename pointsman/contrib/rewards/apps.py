"""Rewards app config."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class RewardsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pointsman.contrib.rewards"
    label = "pointsman_rewards"
    verbose_name = _("Награды")
