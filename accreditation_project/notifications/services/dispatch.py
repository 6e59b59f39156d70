"""
notifications/services/dispatch.py

Creates Notification records and hands them to their channel.

- One record per (recipient, channel)
- In-app records are delivered on creation
- Email / WhatsApp records are queued once, after commit
"""

import logging
from functools import partial

from django.db import transaction
from django.utils import dateformat

from notifications.models import Notification
from notifications.outcomes import DeliveryOutcome, transition
from notifications.tasks import (
    send_email_notification,
    send_whatsapp_notification,
)

logger = logging.getLogger(__name__)

DEFAULT_CHANNELS = (
    Notification.Channel.IN_APP,
    Notification.Channel.EMAIL,
)


# ============================================================
# QUEUE HAND-OFF
# ============================================================

def enqueue_delivery(notification):
    """Request delivery for a freshly created record."""
    if notification.channel == Notification.Channel.IN_APP:
        transition(notification, DeliveryOutcome.sent())
        return

    task = {
        Notification.Channel.EMAIL: send_email_notification,
        Notification.Channel.WHATSAPP: send_whatsapp_notification,
    }[notification.channel]

    transaction.on_commit(partial(task.delay, str(notification.pk)))


# ============================================================
# SINGLE USER / UNIT / BROADCAST
# ============================================================

def send_to_user(
    user,
    notification_type,
    title,
    message,
    data=None,
    channels=None,
    assignment=None,
    reminder_date=None,
):
    notifications = []

    for channel in channels or DEFAULT_CHANNELS:
        notification = Notification.objects.create(
            type=notification_type,
            channel=channel,
            recipient=user,
            unit_id=user.unit_id,
            assignment=assignment,
            title=title,
            message=message,
            data=data or {},
            reminder_date=reminder_date,
            status=Notification.Status.PENDING,
        )
        notifications.append(notification)
        enqueue_delivery(notification)

    return notifications


def send_to_unit(unit, notification_type, title, message, data=None, channels=None):
    notifications = []
    for user in unit.users_with_roles():
        notifications.extend(
            send_to_user(user, notification_type, title, message, data, channels)
        )
    return notifications


def send_broadcast(units, notification_type, title, message, data=None, channels=None):
    """Fan out to every member of every given unit."""
    notifications = []
    for unit in units:
        notifications.extend(
            send_to_unit(unit, notification_type, title, message, data, channels)
        )

    logger.info(
        "Broadcast '%s' created %s notifications", title, len(notifications)
    )
    return notifications


# ============================================================
# DEADLINE REMINDERS
# ============================================================

REMINDER_TITLES = {
    Notification.Type.DEADLINE_REMINDER_TODAY: "Deadline Pengumpulan Dokumen - Hari Ini",
    Notification.Type.DEADLINE_REMINDER_3_DAYS: "Pengingat Deadline - 3 Hari Lagi",
    Notification.Type.DEADLINE_REMINDER_7_DAYS: "Pengingat Deadline - 7 Hari Lagi",
    Notification.Type.DEADLINE_REMINDER_OVERDUE: "Pengingat Deadline - Terlambat",
}

REMINDER_PHRASES = {
    Notification.Type.DEADLINE_REMINDER_TODAY: "adalah hari ini",
    Notification.Type.DEADLINE_REMINDER_3_DAYS: "tinggal 3 hari lagi",
    Notification.Type.DEADLINE_REMINDER_7_DAYS: "tinggal 7 hari lagi",
    Notification.Type.DEADLINE_REMINDER_OVERDUE: "sudah terlambat",
}


def reminder_type_for(days_until_deadline):
    if days_until_deadline == 0:
        return Notification.Type.DEADLINE_REMINDER_TODAY
    if 0 < days_until_deadline <= 3:
        return Notification.Type.DEADLINE_REMINDER_3_DAYS
    if 0 < days_until_deadline <= 7:
        return Notification.Type.DEADLINE_REMINDER_7_DAYS
    return Notification.Type.DEADLINE_REMINDER_OVERDUE


def format_deadline(deadline):
    return dateformat.format(deadline, "d F Y")


def send_deadline_reminder(
    user,
    days_until_deadline,
    deadline_date,
    document_name,
    unit_name=None,
    assignment=None,
    channels=None,
    notification_type=None,
    note=None,
    reminder_date=None,
):
    notification_type = notification_type or reminder_type_for(days_until_deadline)

    message = 'Deadline pengumpulan dokumen "{}" {}. Deadline: {}{}'.format(
        document_name,
        REMINDER_PHRASES[notification_type],
        deadline_date,
        f" untuk {unit_name}" if unit_name else "",
    )

    data = {
        "deadline_date": deadline_date,
        "days_until_deadline": days_until_deadline,
        "document_name": document_name,
        "unit_name": unit_name,
    }
    if assignment is not None:
        data["assignment_id"] = assignment.pk
    if note:
        data["note"] = note
        message = f"{message}\n\nCatatan: {note}"

    return send_to_user(
        user,
        notification_type,
        REMINDER_TITLES[notification_type],
        message,
        data=data,
        channels=channels,
        assignment=assignment,
        reminder_date=reminder_date,
    )


# ============================================================
# OTHER EVENTS
# ============================================================

def send_document_rejected(
    user,
    document_name,
    rejection_reason,
    resubmission_deadline,
    required_fixes=None,
):
    required_fixes = list(required_fixes or [])
    fixes = (
        "\n".join(f"- {fix}" for fix in required_fixes)
        if required_fixes
        else "- Silakan perbaiki sesuai alasan penolakan"
    )

    message = (
        f'Dokumen "{document_name}" Anda ditolak.\n\n'
        f"Alasan: {rejection_reason}\n\n"
        f"Perbaikan yang diperlukan:\n{fixes}\n\n"
        f"Deadline resubmission: {resubmission_deadline}"
    )

    return send_to_user(
        user,
        Notification.Type.DOCUMENT_REJECTED,
        "Dokumen Ditolak",
        message,
        data={
            "document_name": document_name,
            "rejection_reason": rejection_reason,
            "resubmission_deadline": resubmission_deadline,
            "required_fixes": required_fixes,
        },
    )


def send_evaluation_incomplete(user, assignment_title, is_assessor=True):
    if is_assessor:
        notification_type = Notification.Type.EVALUATION_INCOMPLETE_ASSESSOR
        role = "Asesor"
    else:
        notification_type = Notification.Type.EVALUATION_INCOMPLETE_COORDINATOR
        role = "Koordinator Prodi"

    message = (
        f'Penilaian untuk "{assignment_title}" belum lengkap. '
        f"Silakan lengkapi penilaian Anda sebagai {role}."
    )

    return send_to_user(
        user,
        notification_type,
        "Penilaian Belum Lengkap",
        message,
        data={"assignment_title": assignment_title, "role": role},
    )


def send_accreditation_schedule(unit, schedule_date, schedule_time, location):
    message = (
        f"Jadwal akreditasi untuk {unit.name}:\n\n"
        f"Tanggal: {schedule_date}\n"
        f"Waktu: {schedule_time}\n"
        f"Lokasi: {location}\n\n"
        f"Silakan persiapkan dokumen yang diperlukan."
    )

    return send_broadcast(
        [unit],
        Notification.Type.ACCREDITATION_SCHEDULE,
        "Jadwal Akreditasi",
        message,
        data={
            "schedule_date": schedule_date,
            "schedule_time": schedule_time,
            "location": location,
        },
    )


def send_policy_update(units, policy_title, policy_description, policy_url=None):
    message = f"Pembaruan kebijakan LPMPP:\n\n{policy_title}\n\n{policy_description}"
    if policy_url:
        message += f"\n\nDetail lengkap: {policy_url}"

    return send_broadcast(
        units,
        Notification.Type.POLICY_UPDATE,
        "Pembaruan Kebijakan LPMPP",
        message,
        data={
            "policy_title": policy_title,
            "policy_description": policy_description,
            "policy_url": policy_url,
        },
    )
