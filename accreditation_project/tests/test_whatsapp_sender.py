from unittest import mock

import pytest
import requests

from notifications.models import Notification
from notifications.outcomes import DeliveryError
from notifications.senders import deliver_whatsapp, normalize_phone_number
from notifications.senders.whatsapp import format_message

GATEWAY_URL = "https://wa-gateway.test/send"


@pytest.fixture
def gateway(settings):
    settings.WHATSAPP_GATEWAY_URL = GATEWAY_URL
    settings.WHATSAPP_API_KEY = "secret-key"
    settings.WHATSAPP_TIMEOUT = 10


@pytest.fixture
def session():
    http = mock.Mock(spec=requests.Session)
    http.post.return_value = mock.Mock(status_code=200, text='{"status": "queued"}')
    return http


def make_whatsapp_notification(recipient):
    return Notification.objects.create(
        type=Notification.Type.DEADLINE_REMINDER_TODAY,
        channel=Notification.Channel.WHATSAPP,
        recipient=recipient,
        title="Deadline Pengumpulan Dokumen - Hari Ini",
        message='Deadline pengumpulan dokumen "Visi dan Misi" adalah hari ini.',
    )


class TestFormatting:

    @pytest.mark.parametrize("raw, expected", [
        ("+62 812-3456-7890", "6281234567890"),
        ("+62 812-3456-789", "628123456789"),
        ("(0812) 3456 789", "08123456789"),
        ("", ""),
        (None, ""),
    ])
    def test_normalize_phone_number(self, raw, expected):
        assert normalize_phone_number(raw) == expected

    def test_title_is_bold(self):
        notification = Notification(title="Judul", message="Isi pesan")
        assert format_message(notification) == "*Judul*\n\nIsi pesan"


@pytest.mark.django_db
class TestDeliverWhatsapp:

    def test_posts_to_gateway(self, gateway, session, make_user):
        user = make_user(phone_number="+62 812-3456-789")
        notification = make_whatsapp_notification(user)

        outcome = deliver_whatsapp(notification, session=session)

        assert outcome.ok
        session.post.assert_called_once_with(
            GATEWAY_URL,
            json={
                "to": "628123456789",
                "message": format_message(notification),
            },
            headers={
                "Authorization": "Bearer secret-key",
                "Content-Type": "application/json",
            },
            timeout=10,
        )
        notification.refresh_from_db()
        assert notification.status == Notification.Status.SENT

    def test_gateway_not_configured(self, session, assessor):
        notification = make_whatsapp_notification(assessor)

        outcome = deliver_whatsapp(notification, session=session)

        session.post.assert_not_called()
        assert outcome.reason == "WhatsApp gateway not configured"
        notification.refresh_from_db()
        assert notification.status == Notification.Status.FAILED
        assert notification.error_message == "WhatsApp gateway not configured"

    def test_partial_configuration_counts_as_missing(self, settings, session, assessor):
        settings.WHATSAPP_GATEWAY_URL = GATEWAY_URL
        notification = make_whatsapp_notification(assessor)

        outcome = deliver_whatsapp(notification, session=session)

        session.post.assert_not_called()
        assert outcome.reason == "WhatsApp gateway not configured"

    def test_missing_phone_number(self, gateway, session, make_user):
        notification = make_whatsapp_notification(make_user(phone_number=""))

        outcome = deliver_whatsapp(notification, session=session)

        session.post.assert_not_called()
        assert outcome.reason == "Phone number not found"

    def test_missing_recipient(self, gateway, session):
        notification = make_whatsapp_notification(None)

        outcome = deliver_whatsapp(notification, session=session)

        session.post.assert_not_called()
        assert outcome.reason == "User not found"

    def test_non_2xx_keeps_response_body(self, gateway, session, assessor):
        session.post.return_value = mock.Mock(status_code=422, text="invalid number")
        notification = make_whatsapp_notification(assessor)

        outcome = deliver_whatsapp(notification, session=session)

        assert not outcome.ok
        notification.refresh_from_db()
        assert notification.status == Notification.Status.FAILED
        assert notification.error_message == "invalid number"

    def test_non_2xx_without_body(self, gateway, session, assessor):
        session.post.return_value = mock.Mock(status_code=500, text="")
        notification = make_whatsapp_notification(assessor)

        outcome = deliver_whatsapp(notification, session=session)

        assert outcome.reason == "Unknown error"

    def test_network_error_raises_for_retry(self, gateway, session, assessor):
        session.post.side_effect = requests.ConnectionError("gateway unreachable")
        notification = make_whatsapp_notification(assessor)

        with pytest.raises(DeliveryError):
            deliver_whatsapp(notification, session=session)

        notification.refresh_from_db()
        assert notification.status == Notification.Status.FAILED
        assert notification.error_message == "gateway unreachable"

    def test_uses_requests_by_default(self, gateway, assessor):
        notification = make_whatsapp_notification(assessor)

        with mock.patch("notifications.senders.whatsapp.requests.post") as post:
            post.return_value = mock.Mock(status_code=201, text="")
            outcome = deliver_whatsapp(notification)

        assert outcome.ok
        assert post.call_args.kwargs["json"]["to"] == "6281234567890"
