"""Quests app config."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class QuestsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pointsman.contrib.quests"
    label = "pointsman_quests"
    verbose_name = _("Задания")

    def ready(self):
        from pointsman.contrib.quests import receivers  # noqa: F401
