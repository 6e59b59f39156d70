"""
Queue units for notification delivery.

The senders do one attempt each; transport failures surface as
DeliveryError and Celery retries them with backoff.
"""

from celery import Task, shared_task
from celery.utils.log import get_task_logger

from .models import Notification
from .outcomes import DeliveryError
from .senders import deliver_email, deliver_whatsapp

logger = get_task_logger(__name__)


class DeliveryTask(Task):
    """Base delivery task with retry on transport errors only."""
    autoretry_for = (DeliveryError,)
    retry_kwargs = {"max_retries": 3}
    retry_backoff = True
    retry_backoff_max = 600
    retry_jitter = True


def _run_sender(notification_id, sender):
    notification = (
        Notification.objects
        .select_related("recipient")
        .filter(pk=notification_id)
        .first()
    )

    if notification is None:
        logger.warning(f"Notification {notification_id} no longer exists")
        return {"notification_id": str(notification_id), "status": None}

    # At-least-once queue: a sent record is never sent again
    if notification.status == Notification.Status.SENT:
        return {"notification_id": str(notification.pk), "status": notification.status}

    outcome = sender(notification)
    return {"notification_id": str(notification.pk), "status": outcome.status}


@shared_task(base=DeliveryTask, name="notifications.send_email_notification")
def send_email_notification(notification_id):
    return _run_sender(notification_id, deliver_email)


@shared_task(base=DeliveryTask, name="notifications.send_whatsapp_notification")
def send_whatsapp_notification(notification_id):
    return _run_sender(notification_id, deliver_whatsapp)
