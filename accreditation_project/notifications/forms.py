from django import forms
from django.core.exceptions import ValidationError

from accounts.models import Unit
from accreditation.models import Assignment

from .models import Notification


BROADCAST_TYPES = [
    (Notification.Type.BROADCAST_LPMPP, Notification.Type.BROADCAST_LPMPP.label),
    (Notification.Type.ACCREDITATION_SCHEDULE, Notification.Type.ACCREDITATION_SCHEDULE.label),
    (Notification.Type.POLICY_UPDATE, Notification.Type.POLICY_UPDATE.label),
    (Notification.Type.DOCUMENT_ISSUE, Notification.Type.DOCUMENT_ISSUE.label),
]


class BroadcastForm(forms.Form):
    units = forms.ModelMultipleChoiceField(
        queryset=Unit.objects.filter(is_active=True),
        error_messages={
            "required": "Minimal satu unit harus dipilih.",
            "invalid_choice": "Unit yang dipilih tidak ditemukan.",
        },
    )

    type = forms.ChoiceField(
        choices=BROADCAST_TYPES,
        error_messages={
            "required": "Tipe notifikasi harus dipilih.",
            "invalid_choice": "Tipe notifikasi tidak valid.",
        },
    )

    title = forms.CharField(
        max_length=255,
        error_messages={
            "required": "Judul notifikasi harus diisi.",
            "max_length": "Judul notifikasi maksimal 255 karakter.",
        },
    )

    message = forms.CharField(
        max_length=2000,
        error_messages={
            "required": "Pesan notifikasi harus diisi.",
            "max_length": "Pesan notifikasi maksimal 2000 karakter.",
        },
    )

    channels = forms.MultipleChoiceField(
        choices=Notification.Channel.choices,
        error_messages={
            "required": "Minimal satu channel harus dipilih.",
            "invalid_choice": "Channel tidak valid.",
        },
    )


class ManualReminderForm(forms.Form):
    assignment = forms.ModelChoiceField(
        queryset=Assignment.objects.all(),
        required=False,
        error_messages={"invalid_choice": "Assignment yang dipilih tidak ditemukan."},
    )

    unit = forms.ModelChoiceField(
        queryset=Unit.objects.all(),
        required=False,
        error_messages={"invalid_choice": "Unit yang dipilih tidak ditemukan."},
    )

    days_before = forms.TypedChoiceField(
        choices=[(0, "0"), (3, "3"), (7, "7")],
        coerce=int,
        error_messages={
            "required": "Hari sebelum deadline harus dipilih.",
            "invalid_choice": "Hari sebelum deadline harus 0, 3, atau 7.",
        },
    )

    message = forms.CharField(
        max_length=1000,
        required=False,
        error_messages={"max_length": "Pesan maksimal 1000 karakter."},
    )

    # ----------------------------
    # VALIDATION
    # ----------------------------
    def clean(self):
        cleaned_data = super().clean()

        if not cleaned_data.get("assignment") and not cleaned_data.get("unit"):
            raise ValidationError("Assignment ID atau Unit ID harus diisi.")

        return cleaned_data
