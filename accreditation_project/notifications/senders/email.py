"""
notifications/senders/email.py

Email delivery for one Notification through Django's mail backend.
"""

import logging

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string

from notifications.outcomes import DeliveryError, DeliveryOutcome, transition

logger = logging.getLogger(__name__)

EMAIL_TEMPLATE = "notifications/emails/notification.html"
EMAIL_TEXT_TEMPLATE = "notifications/emails/notification.txt"


def humanize_key(key):
    """`deadline_date` -> `Deadline date`"""
    text = str(key).replace("_", " ")
    return text[:1].upper() + text[1:]


def build_detail_rows(data):
    """
    Flatten the structured payload into rows for the email template.
    Lists become nested bullet items, scalars stay inline.
    """
    rows = []
    for key, value in (data or {}).items():
        if isinstance(value, (list, tuple)):
            rows.append({"label": humanize_key(key), "entries": list(value), "value": None})
        else:
            rows.append({"label": humanize_key(key), "entries": None, "value": value})
    return rows


def build_email_message(notification):
    user = notification.recipient

    context = {
        "title": notification.title,
        "recipient_name": user.display_name,
        "message": notification.message,
        "details": build_detail_rows(notification.data),
        "dashboard_url": f"{settings.APP_URL}/dashboard",
    }

    email = EmailMultiAlternatives(
        subject=notification.title,
        body=render_to_string(EMAIL_TEXT_TEMPLATE, context),
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[user.email],
    )
    email.attach_alternative(render_to_string(EMAIL_TEMPLATE, context), "text/html")
    return email


def deliver_email(notification):
    """
    Send one notification by email.

    - No recipient / no address  -> failed, nothing sent
    - Transport error            -> failed, DeliveryError raised
    """
    user = notification.recipient

    if user is None or not user.email:
        outcome = DeliveryOutcome.failed("User email not found")
        transition(notification, outcome)
        return outcome

    try:
        build_email_message(notification).send(fail_silently=False)
    except Exception as exc:
        transition(notification, DeliveryOutcome.failed(str(exc)))
        logger.error(
            "Failed to send email notification %s: %s",
            notification.pk, exc,
        )
        raise DeliveryError(notification.pk, str(exc)) from exc

    outcome = DeliveryOutcome.sent()
    transition(notification, outcome)

    logger.info("Email notification %s sent to %s", notification.pk, user.email)
    return outcome
