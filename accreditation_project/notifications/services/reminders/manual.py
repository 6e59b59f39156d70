"""
Admin-triggered deadline reminders.

Unlike the daily scan these are sent on request and are not
de-duplicated: an administrator asked for them explicitly.
"""

import logging

from accreditation.models import Assignment
from notifications.services.dispatch import format_deadline, send_deadline_reminder
from notifications.services.recipients import resolve_recipients

logger = logging.getLogger(__name__)


def _send_for_assignment(assignment, today, note):
    days_until_deadline = (assignment.deadline - today).days
    unit_name = assignment.unit.name if assignment.unit_id else None

    count = 0
    for user in resolve_recipients(assignment.target):
        send_deadline_reminder(
            user,
            days_until_deadline=days_until_deadline,
            deadline_date=format_deadline(assignment.deadline),
            document_name=assignment.document_name,
            unit_name=unit_name,
            assignment=assignment,
            note=note,
            reminder_date=today,
        )
        count += 1
    return count


def send_manual_reminder(*, today, days_before, assignment=None, unit=None, note=None):
    """
    Remind one assignment's recipients, or every open assignment of a
    unit whose deadline falls within `days_before` days.

    Returns the number of reminders issued.
    """
    if assignment is None and unit is None:
        raise ValueError("Either an assignment or a unit is required")

    if assignment is not None:
        if assignment.deadline is None:
            return 0
        return _send_for_assignment(assignment, today, note)

    assignments = (
        Assignment.objects
        .open()
        .filter(unit=unit)
        .with_reminder_context()
    )

    count = 0
    for candidate in assignments:
        if (candidate.deadline - today).days <= days_before:
            count += _send_for_assignment(candidate, today, note)

    logger.info("Manual reminder for unit %s issued %s reminders", unit.pk, count)
    return count
