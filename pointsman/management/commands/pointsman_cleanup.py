"""Prune order and referral nonces past the replay-protection window."""

from django.core.management.base import BaseCommand

from pointsman.models import EventSource, ProcessedEvent


class Command(BaseCommand):
    help = (
        "Delete order/referral event nonces older than EVENT_CLEANUP_DAYS. "
        "Events redelivered after their nonce is gone are processed again."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--days",
            type=int,
            default=None,
            help="Retention in days (defaults to POINTSMAN['EVENT_CLEANUP_DAYS'])",
        )
        parser.add_argument(
            "--source",
            choices=EventSource.values,
            default=None,
            help="Only prune nonces of this event source",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report what would be deleted without deleting",
        )

    def handle(self, *args, **options):
        days, source = options["days"], options["source"]
        label = f"{source} " if source else ""

        if options["dry_run"]:
            count = ProcessedEvent.expired(days=days, source=source).count()
            self.stdout.write(f"Would delete {count} {label}event nonces.")
            return

        deleted_count, _ = ProcessedEvent.cleanup_old_events(days=days, source=source)
        self.stdout.write(
            self.style.SUCCESS(f"Deleted {deleted_count} {label}event nonces.")
        )
