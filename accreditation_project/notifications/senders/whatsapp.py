"""
notifications/senders/whatsapp.py

WhatsApp delivery through an HTTP gateway.

Gateway contract:
    POST <WHATSAPP_GATEWAY_URL>
    Authorization: Bearer <WHATSAPP_API_KEY>
    {"to": "<digits only>", "message": "*<title>*\\n\\n<message>"}
"""

import logging
import re

import requests
from django.conf import settings

from notifications.outcomes import DeliveryError, DeliveryOutcome, transition

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"[^0-9]")


def normalize_phone_number(value):
    """Strip everything except digits: "+62 812-3456" -> "628123456"."""
    return _NON_DIGITS.sub("", value or "")


def format_message(notification):
    # *text* is bold in WhatsApp markup
    return f"*{notification.title}*\n\n{notification.message}"


def gateway_config():
    return (
        getattr(settings, "WHATSAPP_GATEWAY_URL", "") or "",
        getattr(settings, "WHATSAPP_API_KEY", "") or "",
    )


def _fail(notification, reason):
    outcome = DeliveryOutcome.failed(reason)
    transition(notification, outcome)
    return outcome


def deliver_whatsapp(notification, session=None):
    """
    Send one notification through the WhatsApp gateway.

    Checks, in order, each short-circuiting to `failed`:
    recipient, phone number, gateway configuration.
    """
    http = session or requests

    try:
        user = notification.recipient
        if user is None:
            return _fail(notification, "User not found")

        if not user.phone_number:
            return _fail(notification, "Phone number not found")

        gateway_url, api_key = gateway_config()
        if not gateway_url or not api_key:
            logger.warning(
                "WhatsApp gateway not configured. Skipping notification %s.",
                notification.pk,
            )
            return _fail(notification, "WhatsApp gateway not configured")

        response = http.post(
            gateway_url,
            json={
                "to": normalize_phone_number(user.phone_number),
                "message": format_message(notification),
            },
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=getattr(settings, "WHATSAPP_TIMEOUT", 30),
        )

        if 200 <= response.status_code < 300:
            outcome = DeliveryOutcome.sent()
            transition(notification, outcome)
            logger.info("WhatsApp notification %s sent", notification.pk)
            return outcome

        return _fail(notification, response.text or "Unknown error")

    except Exception as exc:
        if notification.status != notification.Status.SENT:
            transition(notification, DeliveryOutcome.failed(str(exc)))
        logger.error(
            "Failed to send WhatsApp notification %s: %s",
            notification.pk, exc,
        )
        raise DeliveryError(notification.pk, str(exc)) from exc
