import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
        ("accreditation", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("type", models.CharField(
                    choices=[
                        ("deadline_reminder_7_days", "Pengingat Deadline - 7 Hari"),
                        ("deadline_reminder_3_days", "Pengingat Deadline - 3 Hari"),
                        ("deadline_reminder_today", "Pengingat Deadline - Hari Ini"),
                        ("deadline_reminder_overdue", "Pengingat Deadline - Terlambat"),
                        ("document_rejected", "Dokumen Ditolak"),
                        ("document_resubmission_required", "Perlu Resubmission Dokumen"),
                        ("evaluation_incomplete", "Penilaian Belum Lengkap"),
                        ("evaluation_incomplete_assessor", "Penilaian Belum Lengkap - Asesor"),
                        ("evaluation_incomplete_coordinator", "Penilaian Belum Lengkap - Koordinator"),
                        ("broadcast_lpmpp", "Broadcast LPMPP"),
                        ("accreditation_schedule", "Jadwal Akreditasi"),
                        ("policy_update", "Pembaruan Kebijakan"),
                        ("document_issue", "Dokumen Bermasalah"),
                        ("assignment_created", "Penugasan Baru"),
                    ],
                    db_index=True,
                    max_length=50,
                )),
                ("channel", models.CharField(
                    choices=[("in_app", "In-App"), ("email", "Email"), ("whatsapp", "WhatsApp")],
                    default="in_app",
                    max_length=20,
                )),
                ("title", models.CharField(max_length=255)),
                ("message", models.TextField()),
                ("data", models.JSONField(blank=True, default=dict)),
                ("status", models.CharField(
                    choices=[("pending", "Pending"), ("sent", "Sent"), ("failed", "Failed")],
                    db_index=True,
                    default="pending",
                    max_length=20,
                )),
                ("sent_at", models.DateTimeField(blank=True, null=True)),
                ("error_message", models.TextField(blank=True)),
                ("attempts", models.PositiveIntegerField(default=0)),
                ("is_read", models.BooleanField(db_index=True, default=False)),
                ("read_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("assignment", models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="notifications",
                    to="accreditation.assignment",
                )),
                ("recipient", models.ForeignKey(
                    blank=True,
                    help_text="User who receives this notification",
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="notifications",
                    to=settings.AUTH_USER_MODEL,
                )),
                ("unit", models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="notifications",
                    to="accounts.unit",
                )),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["recipient", "is_read"], name="notificatio_recipie_4e3567_idx"),
                    models.Index(fields=["unit", "is_read"], name="notificatio_unit_id_9b1f0c_idx"),
                    models.Index(fields=["recipient", "type", "assignment"], name="notificatio_recipie_a7d2e1_idx"),
                ],
            },
        ),
    ]
