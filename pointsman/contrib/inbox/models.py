"""Inbox models."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Notification(models.Model):
    """In-app notification shown to the account owner."""

    account = models.ForeignKey(
        "pointsman.PointsAccount",
        on_delete=models.CASCADE,
        related_name="notifications",
        verbose_name=_("счёт"),
    )
    title = models.CharField(_("заголовок"), max_length=200)
    message = models.TextField(_("текст"))
    reference = models.CharField(_("ссылка"), max_length=100, blank=True)
    is_read = models.BooleanField(_("прочитано"), default=False)
    created_at = models.DateTimeField(_("создано"), auto_now_add=True)

    class Meta:
        verbose_name = _("уведомление")
        verbose_name_plural = _("уведомления")
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["account", "is_read"], name="pointsman_inbox_unread_idx"),
        ]

    def __str__(self):
        return f"{self.account_id}: {self.title}"
