import uuid
from unittest import mock

import pytest

from notifications.models import Notification
from notifications.outcomes import DeliveryError, DeliveryOutcome, transition
from notifications.tasks import (
    DeliveryTask,
    send_email_notification,
    send_whatsapp_notification,
)


@pytest.fixture
def email_notification(assessor):
    return Notification.objects.create(
        type=Notification.Type.POLICY_UPDATE,
        channel=Notification.Channel.EMAIL,
        recipient=assessor,
        title="Pembaruan Kebijakan LPMPP",
        message="SOP baru berlaku.",
    )


def test_retry_policy_targets_transport_errors():
    assert DeliveryTask.autoretry_for == (DeliveryError,)
    assert DeliveryTask.retry_kwargs == {"max_retries": 3}
    assert DeliveryTask.retry_backoff is True


def test_task_names():
    assert send_email_notification.name == "notifications.send_email_notification"
    assert send_whatsapp_notification.name == "notifications.send_whatsapp_notification"


@pytest.mark.django_db
class TestDeliveryTasks:

    def test_email_task_runs_sender(self, email_notification):
        result = send_email_notification.run(str(email_notification.pk))

        assert result == {
            "notification_id": str(email_notification.pk),
            "status": Notification.Status.SENT,
        }
        email_notification.refresh_from_db()
        assert email_notification.status == Notification.Status.SENT

    def test_whatsapp_task_reports_failure(self, email_notification):
        result = send_whatsapp_notification.run(str(email_notification.pk))

        assert result["status"] == Notification.Status.FAILED

    def test_missing_record(self):
        missing = str(uuid.uuid4())

        with mock.patch("notifications.tasks.deliver_email") as sender:
            result = send_email_notification.run(missing)

        sender.assert_not_called()
        assert result == {"notification_id": missing, "status": None}

    def test_already_sent_is_not_sent_again(self, email_notification):
        transition(email_notification, DeliveryOutcome.sent())

        with mock.patch("notifications.tasks.deliver_email") as sender:
            result = send_email_notification.run(str(email_notification.pk))

        sender.assert_not_called()
        assert result["status"] == Notification.Status.SENT

    def test_failed_record_is_redelivered(self, email_notification):
        transition(email_notification, DeliveryOutcome.failed("SMTP down"))

        send_email_notification.run(str(email_notification.pk))

        email_notification.refresh_from_db()
        assert email_notification.status == Notification.Status.SENT
        assert email_notification.attempts == 2

    def test_transport_error_propagates(self, email_notification):
        with mock.patch(
            "notifications.tasks.deliver_email",
            side_effect=DeliveryError(email_notification.pk, "timeout"),
        ):
            with pytest.raises(DeliveryError):
                send_email_notification.run(str(email_notification.pk))
