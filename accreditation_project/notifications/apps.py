from django.apps import AppConfig
import os


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "notifications"
    verbose_name = "Notifikasi"

    def ready(self):
        # --------------------------------------------------
        # Daily deadline reminder trigger
        # --------------------------------------------------
        # Only the reloaded runserver child owns the scheduler. Other
        # deployments call `manage.py send_deadline_reminders` from cron.
        if os.environ.get("RUN_MAIN") != "true":
            return

        from .scheduler import start_scheduler
        start_scheduler()
