"""
ProcessedEvent model — replay protection for order and referral events.

Each external event that moves points stores its nonce here in the same
transaction as the points it produces: "order:<order_ref>" for a paid
order, "referral:<referred_id>" for a confirmed referral. A redelivered
event hits the unique nonce and is rejected; a rolled-back one leaves no
nonce behind and can be retried.
"""

from datetime import timedelta

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class EventSource(models.TextChoices):
    ORDER = "order", _("Заказ")
    REFERRAL = "referral", _("Приглашение")


class ProcessedEvent(models.Model):
    """Nonce of an order or referral event whose points were committed."""

    nonce = models.CharField(
        verbose_name=_("nonce"),
        max_length=255,
        unique=True,
        help_text=_("order:<номер заказа> или referral:<приглашённый>"),
    )
    source = models.CharField(
        verbose_name=_("источник"),
        max_length=50,
        choices=EventSource.choices,
        db_index=True,
    )
    processed_at = models.DateTimeField(verbose_name=_("обработано"), auto_now_add=True)

    class Meta:
        db_table = "pointsman_processed_event"
        verbose_name = _("обработанное событие")
        verbose_name_plural = _("обработанные события")
        indexes = [
            models.Index(fields=["source", "processed_at"], name="pointsman_event_source_idx"),
        ]

    def __str__(self):
        return self.nonce

    @property
    def event_ref(self) -> str:
        """Order number or referred account id, without the source prefix."""
        return self.nonce.partition(":")[2]

    @classmethod
    def expired(cls, days: int | None = None, source: str | None = None) -> models.QuerySet:
        """
        Nonces older than the retention window.

        Once deleted, a redelivered event with that nonce would be processed
        again, so the window must outlast any upstream redelivery.
        """
        if days is None:
            from pointsman.conf import pointsman_settings
            days = pointsman_settings.EVENT_CLEANUP_DAYS
        qs = cls.objects.filter(processed_at__lt=timezone.now() - timedelta(days=days))
        if source:
            qs = qs.filter(source=source)
        return qs

    @classmethod
    def cleanup_old_events(cls, days: int | None = None, source: str | None = None):
        """Delete nonces older than EVENT_CLEANUP_DAYS (or `days`)."""
        return cls.expired(days=days, source=source).delete()
