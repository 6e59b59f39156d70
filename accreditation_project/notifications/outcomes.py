"""
Delivery outcomes and the notification status machine.

    pending ──► sent
       │
       └────► failed ──► sent | failed   (queue redelivery only)

Expected failures (missing email, missing phone, gateway not
configured) come back as a failed DeliveryOutcome and never raise.
Transport failures raise DeliveryError so the queue can retry.
"""

from dataclasses import dataclass
from typing import Optional

from django.utils import timezone

from .models import Notification


class DeliveryError(Exception):
    """Transport-level failure; the queue should retry the delivery."""

    def __init__(self, notification_id, reason):
        super().__init__(f"Delivery of notification {notification_id} failed: {reason}")
        self.notification_id = notification_id
        self.reason = reason


class InvalidTransition(Exception):
    pass


@dataclass(frozen=True)
class DeliveryOutcome:
    status: str
    reason: Optional[str] = None

    @classmethod
    def sent(cls):
        return cls(status=Notification.Status.SENT)

    @classmethod
    def failed(cls, reason):
        return cls(status=Notification.Status.FAILED, reason=reason)

    @property
    def ok(self):
        return self.status == Notification.Status.SENT


def transition(notification, outcome, now=None):
    """
    Apply a delivery outcome to a notification and persist it.

    A sent record is final. A failed record may only be re-entered by a
    redelivery of the same record, which is counted in `attempts`.
    """
    if notification.status == Notification.Status.SENT:
        raise InvalidTransition(
            f"Notification {notification.pk} is already sent"
        )

    if outcome.status not in (Notification.Status.SENT, Notification.Status.FAILED):
        raise InvalidTransition(f"Unknown outcome status: {outcome.status}")

    notification.status = outcome.status
    notification.attempts += 1

    if outcome.ok:
        notification.sent_at = now or timezone.now()
        notification.error_message = ""
    else:
        notification.error_message = outcome.reason or "Unknown error"

    notification.save(update_fields=[
        "status",
        "sent_at",
        "error_message",
        "attempts",
        "updated_at",
    ])
    return notification
