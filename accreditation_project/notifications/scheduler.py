from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from django.conf import settings
from django.core.management import call_command
from django.utils import timezone
import logging

logger = logging.getLogger(__name__)

JOB_ID = "send_deadline_reminders"

# ============================================================
# GLOBAL SAFETY LOCK
# Prevents scheduler from starting more than once
# ============================================================
_scheduler = None


def build_trigger():
    return CronTrigger(
        hour=getattr(settings, "DEADLINE_REMINDER_HOUR", 8),
        minute=getattr(settings, "DEADLINE_REMINDER_MINUTE", 0),
        timezone=settings.TIME_ZONE,
    )


def start_scheduler():
    """
    Start APScheduler safely.

    - Respects ENABLE_SCHEDULER setting
    - Prevents double start (Django autoreload, imports)
    - One instance of the reminder job at a time
    """
    global _scheduler

    if not getattr(settings, "ENABLE_SCHEDULER", False):
        logger.info("APScheduler disabled via settings (ENABLE_SCHEDULER=False)")
        return None

    if _scheduler is not None:
        logger.info("APScheduler already running, skipping initialization")
        return _scheduler

    logger.info("Starting APScheduler...")

    scheduler = BackgroundScheduler(timezone=settings.TIME_ZONE)

    # --------------------------------------------
    # SCHEDULE: DAILY AT DEADLINE_REMINDER_HOUR
    # --------------------------------------------
    scheduler.add_job(
        run_deadline_reminders,
        trigger=build_trigger(),
        id=JOB_ID,
        replace_existing=True,
        max_instances=1,      # read-then-insert de-dup needs a single run
        coalesce=True,        # merge missed runs if server was down
    )

    scheduler.start()
    _scheduler = scheduler

    logger.info(
        "APScheduler started: deadline reminders daily at %02d:%02d %s",
        settings.DEADLINE_REMINDER_HOUR,
        settings.DEADLINE_REMINDER_MINUTE,
        settings.TIME_ZONE,
    )
    return _scheduler


def run_deadline_reminders():
    """
    Wrapper job that calls the Django management command.
    Keeps all business logic out of the scheduler.
    """
    now = timezone.localtime()
    logger.info(f"Running scheduled deadline reminders at {now:%Y-%m-%d %H:%M:%S}")

    call_command("send_deadline_reminders")
