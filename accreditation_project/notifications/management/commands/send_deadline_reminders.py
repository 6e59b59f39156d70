"""
notifications/management/commands/send_deadline_reminders.py

Scheduled command (runs daily at 08:00 Asia/Jakarta).

Creates 7-day, 3-day, due-today and overdue reminders for open
assignments. Safe to run more than once a day: recipients already
reminded today are skipped.
"""

from datetime import datetime

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from notifications.services.reminders import send_deadline_reminders


class Command(BaseCommand):
    help = "Send deadline reminder notifications for assignments"

    def add_arguments(self, parser):
        parser.add_argument(
            "--date",
            help="Reference date (YYYY-MM-DD). Defaults to today in TIME_ZONE.",
        )

    def handle(self, *args, **options):
        today = self.reference_date(options.get("date"))

        self.stdout.write(
            self.style.NOTICE(
                f"[{today:%Y-%m-%d}] Checking for assignments with upcoming deadlines..."
            )
        )

        result = send_deadline_reminders(today)

        if result.failed:
            self.stderr.write(
                self.style.WARNING(
                    f"{result.failed} reminder(s) could not be created; see logs."
                )
            )

        self.stdout.write(
            self.style.SUCCESS(
                f"Sent {result.created} deadline reminder notifications."
            )
        )

    def reference_date(self, value):
        if not value:
            return timezone.localdate()
        try:
            return datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            raise CommandError(f"Invalid --date '{value}', expected YYYY-MM-DD")
