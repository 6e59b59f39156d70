import uuid

import pytest
from django.urls import reverse

from notifications.models import Notification


def create_notification(recipient, **kwargs):
    defaults = {
        "type": Notification.Type.BROADCAST_LPMPP,
        "channel": Notification.Channel.IN_APP,
        "recipient": recipient,
        "title": "Pengumuman",
        "message": "Isi pengumuman",
    }
    defaults.update(kwargs)
    return Notification.objects.create(**defaults)


@pytest.fixture
def member(make_user):
    return make_user(username="anggota")


@pytest.fixture
def staff(make_user):
    return make_user(username="lpmpp", is_staff=True)


@pytest.fixture
def member_client(client, member):
    client.force_login(member)
    return client


@pytest.fixture
def staff_client(client, staff):
    client.force_login(staff)
    return client


@pytest.mark.django_db
class TestReadApi:

    def test_login_required(self, client):
        response = client.get(reverse("notifications:index"))
        assert response.status_code == 302

    def test_list_is_scoped_to_user(self, member_client, member, make_user):
        mine = create_notification(member)
        create_notification(make_user())

        payload = member_client.get(reverse("notifications:index")).json()

        assert payload["count"] == 1
        assert payload["results"][0]["id"] == str(mine.pk)
        assert payload["unread_count"] == 1

    def test_list_filters(self, member_client, member):
        create_notification(member, is_read=True)
        unread_email = create_notification(member, channel=Notification.Channel.EMAIL)
        create_notification(member, type=Notification.Type.POLICY_UPDATE)

        unread = member_client.get(reverse("notifications:index"), {"filter": "unread"}).json()
        email = member_client.get(reverse("notifications:index"), {"channel": "email"}).json()
        policy = member_client.get(reverse("notifications:index"), {"type": "policy_update"}).json()

        assert unread["count"] == 2
        assert [n["id"] for n in email["results"]] == [str(unread_email.pk)]
        assert policy["count"] == 1

    def test_list_is_paginated(self, member_client, member):
        for _ in range(25):
            create_notification(member)

        first = member_client.get(reverse("notifications:index")).json()
        second = member_client.get(reverse("notifications:index"), {"page": 2}).json()

        assert len(first["results"]) == 20
        assert len(second["results"]) == 5
        assert first["num_pages"] == 2

    def test_unread_count(self, member_client, member):
        create_notification(member)
        create_notification(member, is_read=True)

        response = member_client.get(reverse("notifications:unread-count"))

        assert response.json() == {"count": 1}

    def test_recent_returns_latest_five(self, member_client, member):
        for _ in range(7):
            create_notification(member)

        response = member_client.get(reverse("notifications:recent"))

        assert len(response.json()) == 5

    def test_mark_as_read(self, member_client, member):
        notification = create_notification(member)

        response = member_client.post(reverse("notifications:read", args=[notification.pk]))

        assert response.status_code == 200
        assert response.json()["is_read"] is True
        notification.refresh_from_db()
        assert notification.read_at is not None

    def test_cannot_read_someone_elses_notification(self, member_client, make_user):
        foreign = create_notification(make_user())

        response = member_client.post(reverse("notifications:read", args=[foreign.pk]))

        assert response.status_code == 404
        foreign.refresh_from_db()
        assert foreign.is_read is False

    def test_unknown_notification(self, member_client):
        response = member_client.post(reverse("notifications:read", args=[uuid.uuid4()]))
        assert response.status_code == 404

    def test_mark_as_read_requires_post(self, member_client, member):
        notification = create_notification(member)

        response = member_client.get(reverse("notifications:read", args=[notification.pk]))

        assert response.status_code == 405

    def test_mark_all_as_read(self, member_client, member, make_user):
        create_notification(member)
        create_notification(member)
        other = create_notification(make_user())

        response = member_client.post(reverse("notifications:read-all"))

        assert response.json() == {"updated": 2}
        other.refresh_from_db()
        assert other.is_read is False


@pytest.mark.django_db
class TestBroadcast:

    def test_staff_only(self, member_client, unit):
        response = member_client.post(reverse("notifications:broadcast"), {
            "units": [unit.pk],
            "type": "broadcast_lpmpp",
            "title": "Pengumuman",
            "message": "Isi",
            "channels": ["in_app"],
        })

        assert response.status_code == 403
        assert not Notification.objects.exists()

    def test_invalid_form(self, staff_client):
        response = staff_client.post(reverse("notifications:broadcast"), {
            "type": "deadline_reminder_today",
            "message": "Isi",
        })

        assert response.status_code == 400
        errors = response.json()["errors"]
        assert errors["units"] == ["Minimal satu unit harus dipilih."]
        assert errors["title"] == ["Judul notifikasi harus diisi."]
        assert "type" in errors
        assert "channels" in errors

    def test_broadcast_to_unit(self, staff_client, unit, unit_members):
        response = staff_client.post(reverse("notifications:broadcast"), {
            "units": [unit.pk],
            "type": "broadcast_lpmpp",
            "title": "Pengumuman",
            "message": "Visitasi minggu depan",
            "channels": ["in_app"],
        })

        assert response.status_code == 201
        assert response.json() == {"created": 3}
        assert Notification.objects.filter(
            type=Notification.Type.BROADCAST_LPMPP,
            status=Notification.Status.SENT,
        ).count() == 3

    def test_broadcast_payload_has_no_delivery_settings(self, staff_client, unit, unit_members):
        staff_client.post(reverse("notifications:broadcast"), {
            "units": [unit.pk],
            "type": "policy_update",
            "title": "Kebijakan Baru",
            "message": "SOP dokumen diperbarui",
            "channels": ["in_app", "email"],
        })

        records = Notification.objects.filter(type=Notification.Type.POLICY_UPDATE)
        assert records.count() == 6
        assert all(n.data == {} for n in records)


@pytest.mark.django_db
class TestManualReminderEndpoint:

    def test_requires_assignment_or_unit(self, staff_client):
        response = staff_client.post(reverse("notifications:manual-reminder"), {"days_before": "3"})

        assert response.status_code == 400
        assert response.json()["errors"]["__all__"] == ["Assignment ID atau Unit ID harus diisi."]

    def test_days_before_is_restricted(self, staff_client, unit):
        response = staff_client.post(reverse("notifications:manual-reminder"), {
            "unit": unit.pk,
            "days_before": "5",
        })

        assert response.status_code == 400
        assert "days_before" in response.json()["errors"]

    def test_sends_for_assignment(self, staff_client, make_assignment, assessor):
        assignment = make_assignment(days_from_today=3, assessor=assessor)

        response = staff_client.post(reverse("notifications:manual-reminder"), {
            "assignment": assignment.pk,
            "days_before": "3",
            "message": "Mohon segera",
        })

        assert response.status_code == 200
        assert response.json() == {"sent": 1}
        assert Notification.objects.filter(
            recipient=assessor,
            channel=Notification.Channel.IN_APP,
            data__note="Mohon segera",
        ).exists()

    def test_staff_only(self, member_client, unit):
        response = member_client.post(reverse("notifications:manual-reminder"), {
            "unit": unit.pk,
            "days_before": "7",
        })

        assert response.status_code == 403


@pytest.mark.django_db
def test_unread_badge_context_processor(rf, member):
    from django.contrib.auth.models import AnonymousUser

    from notifications.context_processors import unread_notifications

    create_notification(member)

    request = rf.get("/")
    request.user = member
    assert unread_notifications(request) == {
        "unread_notifications_count": 1,
        "has_unread_notifications": True,
    }

    request.user = AnonymousUser()
    assert unread_notifications(request)["unread_notifications_count"] == 0
