"""Shared fixtures: units, members, assessors and assignments."""
from datetime import date, timedelta

import pytest

from accounts.models import Role, Unit, UnitMembership, User
from accreditation.models import Assignment, Criterion, Program, Standard


@pytest.fixture(autouse=True)
def _notification_settings(settings):
    settings.APP_URL = "https://akreditasi.test"
    settings.DEFAULT_FROM_EMAIL = "noreply@akreditasi.test"
    settings.EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
    settings.WHATSAPP_GATEWAY_URL = ""
    settings.WHATSAPP_API_KEY = ""
    settings.NOTIFICATION_UNIT_ROLES = []
    settings.ENABLE_SCHEDULER = False


@pytest.fixture
def today():
    return date(2024, 6, 10)


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(**kwargs):
        counter["n"] += 1
        defaults = {
            "username": f"user{counter['n']}",
            "email": f"user{counter['n']}@akreditasi.test",
            "first_name": "User",
            "last_name": str(counter["n"]),
        }
        defaults.update(kwargs)
        return User.objects.create_user(**defaults)

    return _make_user


@pytest.fixture
def assessor(make_user):
    return make_user(username="asesor", first_name="Siti", last_name="Aminah", phone_number="+62 812-3456-7890")


@pytest.fixture
def coordinator_role(db):
    return Role.objects.create(name="coordinator", display_name="Koordinator Prodi")


@pytest.fixture
def unit(db):
    return Unit.objects.create(name="Teknik Informatika", code="TI")


@pytest.fixture
def unit_members(make_user, unit, coordinator_role):
    members = [make_user(unit=unit) for _ in range(3)]
    for member in members:
        UnitMembership.objects.create(user=member, unit=unit, role=coordinator_role)
    return members


@pytest.fixture
def criterion(db):
    program = Program.objects.create(name="S1 Teknik Informatika")
    standard = Standard.objects.create(name="Standar 1", program=program)
    return Criterion.objects.create(name="Visi dan Misi", standard=standard)


@pytest.fixture
def make_assignment(db, criterion, today):
    def _make_assignment(days_from_today=7, **kwargs):
        defaults = {
            "criterion": criterion,
            "deadline": today + timedelta(days=days_from_today),
        }
        defaults.update(kwargs)
        return Assignment.objects.create(**defaults)

    return _make_assignment
