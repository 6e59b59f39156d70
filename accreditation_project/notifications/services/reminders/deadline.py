"""
notifications/services/reminders/deadline.py

Daily deadline reminder scan.

For each threshold (7, 3, 0 days before the deadline) and for every
overdue assignment, each recipient gets one reminder per day. A failing
assignment or recipient is logged and skipped; the scan carries on.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta

from django.db import transaction

from accreditation.models import Assignment
from notifications.models import Notification
from notifications.services.dispatch import format_deadline, send_deadline_reminder
from notifications.services.recipients import resolve_recipients

logger = logging.getLogger(__name__)


# ============================================================
# THRESHOLDS (DAYS BEFORE DEADLINE)
# ============================================================

THRESHOLD_TYPES = {
    7: Notification.Type.DEADLINE_REMINDER_7_DAYS,
    3: Notification.Type.DEADLINE_REMINDER_3_DAYS,
    0: Notification.Type.DEADLINE_REMINDER_TODAY,
}

DEFAULT_THRESHOLDS = (7, 3, 0)


@dataclass
class ReminderRunResult:
    created: int = 0
    skipped: int = 0
    failed: int = 0


# ============================================================
# SCAN
# ============================================================

def send_deadline_reminders(today, thresholds=DEFAULT_THRESHOLDS, channels=None):
    """
    Emit deadline reminders as of `today`.

    `created` counts reminders issued (one per recipient), not the
    per-channel records behind them.
    """
    unknown = set(thresholds) - set(THRESHOLD_TYPES)
    if unknown:
        raise ValueError(f"Unsupported reminder thresholds: {sorted(unknown)}")

    result = ReminderRunResult()

    for days in thresholds:
        target_date = today + timedelta(days=days)
        assignments = (
            Assignment.objects
            .due_on(target_date)
            .with_reminder_context()
        )

        for assignment in assignments:
            _remind(
                assignment,
                notification_type=THRESHOLD_TYPES[days],
                days_until_deadline=days,
                today=today,
                result=result,
                channels=channels,
            )

    # --------------------------------------------------
    # OVERDUE (ANY NUMBER OF DAYS PAST)
    # --------------------------------------------------
    overdue = (
        Assignment.objects
        .overdue_as_of(today)
        .with_reminder_context()
    )

    for assignment in overdue:
        _remind(
            assignment,
            notification_type=Notification.Type.DEADLINE_REMINDER_OVERDUE,
            days_until_deadline=(assignment.deadline - today).days,
            today=today,
            result=result,
            channels=channels,
        )

    logger.info(
        "Deadline reminders for %s: %s created, %s skipped, %s failed",
        today, result.created, result.skipped, result.failed,
    )
    return result


def _remind(assignment, *, notification_type, days_until_deadline, today, result, channels):
    try:
        recipients = resolve_recipients(assignment.target)
        document_name = assignment.document_name
        unit_name = assignment.unit.name if assignment.unit_id else None
        deadline_date = format_deadline(assignment.deadline)
    except Exception:
        logger.exception("Could not prepare reminders for assignment %s", assignment.pk)
        result.failed += 1
        return

    for user in recipients:
        try:
            with transaction.atomic():
                if Notification.objects.already_sent(
                    recipient=user,
                    type=notification_type,
                    assignment=assignment,
                    day=today,
                ):
                    result.skipped += 1
                    continue

                send_deadline_reminder(
                    user,
                    days_until_deadline=days_until_deadline,
                    deadline_date=deadline_date,
                    document_name=document_name,
                    unit_name=unit_name,
                    assignment=assignment,
                    channels=channels,
                    notification_type=notification_type,
                    reminder_date=today,
                )

            result.created += 1

        except Exception:
            logger.exception(
                "Failed to create %s reminder for assignment %s, user %s",
                notification_type, assignment.pk, user.pk,
            )
            result.failed += 1
