import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone

from accounts.models import Unit
from accreditation.models import Assignment


class NotificationQuerySet(models.QuerySet):

    def for_user(self, user):
        return self.filter(recipient=user)

    def unread(self):
        return self.filter(is_read=False)

    def already_sent(self, *, recipient, type, assignment, day):
        """
        De-duplication check for reminders.

        Any record for (recipient, type, assignment) issued for the
        given reference day counts, whatever its channel or status.
        """
        return self.filter(
            recipient=recipient,
            type=type,
            assignment=assignment,
            reminder_date=day,
        ).exists()


class Notification(models.Model):
    """
    One notification instance for one recipient on one channel.
    Created pending; only a delivery outcome moves it to sent/failed.
    """

    # =====================================================
    # TYPE (WHY THE NOTIFICATION EXISTS)
    # =====================================================
    class Type(models.TextChoices):
        DEADLINE_REMINDER_7_DAYS = "deadline_reminder_7_days", "Pengingat Deadline - 7 Hari"
        DEADLINE_REMINDER_3_DAYS = "deadline_reminder_3_days", "Pengingat Deadline - 3 Hari"
        DEADLINE_REMINDER_TODAY = "deadline_reminder_today", "Pengingat Deadline - Hari Ini"
        DEADLINE_REMINDER_OVERDUE = "deadline_reminder_overdue", "Pengingat Deadline - Terlambat"
        DOCUMENT_REJECTED = "document_rejected", "Dokumen Ditolak"
        DOCUMENT_RESUBMISSION_REQUIRED = "document_resubmission_required", "Perlu Resubmission Dokumen"
        EVALUATION_INCOMPLETE = "evaluation_incomplete", "Penilaian Belum Lengkap"
        EVALUATION_INCOMPLETE_ASSESSOR = "evaluation_incomplete_assessor", "Penilaian Belum Lengkap - Asesor"
        EVALUATION_INCOMPLETE_COORDINATOR = "evaluation_incomplete_coordinator", "Penilaian Belum Lengkap - Koordinator"
        BROADCAST_LPMPP = "broadcast_lpmpp", "Broadcast LPMPP"
        ACCREDITATION_SCHEDULE = "accreditation_schedule", "Jadwal Akreditasi"
        POLICY_UPDATE = "policy_update", "Pembaruan Kebijakan"
        DOCUMENT_ISSUE = "document_issue", "Dokumen Bermasalah"
        ASSIGNMENT_CREATED = "assignment_created", "Penugasan Baru"

    # =====================================================
    # CHANNEL
    # =====================================================
    class Channel(models.TextChoices):
        IN_APP = "in_app", "In-App"
        EMAIL = "email", "Email"
        WHATSAPP = "whatsapp", "WhatsApp"

    # =====================================================
    # DELIVERY STATUS
    # =====================================================
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        SENT = "sent", "Sent"
        FAILED = "failed", "Failed"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # =====================================================
    # CLASSIFICATION
    # =====================================================
    type = models.CharField(
        max_length=50,
        choices=Type.choices,
        db_index=True
    )

    channel = models.CharField(
        max_length=20,
        choices=Channel.choices,
        default=Channel.IN_APP,
    )

    # =====================================================
    # RELATIONSHIPS
    # =====================================================
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notifications",
        help_text="User who receives this notification"
    )

    unit = models.ForeignKey(
        Unit,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notifications"
    )

    assignment = models.ForeignKey(
        Assignment,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notifications"
    )

    # =====================================================
    # CONTENT
    # =====================================================
    title = models.CharField(max_length=255)
    message = models.TextField()
    data = models.JSONField(default=dict, blank=True)

    # Reference day of a deadline reminder (the scan's `today`, not the clock)
    reminder_date = models.DateField(null=True, blank=True)

    # =====================================================
    # DELIVERY
    # =====================================================
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True
    )
    sent_at = models.DateTimeField(null=True, blank=True)
    error_message = models.TextField(blank=True)
    attempts = models.PositiveIntegerField(default=0)

    # =====================================================
    # READ STATE
    # =====================================================
    is_read = models.BooleanField(default=False, db_index=True)
    read_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = NotificationQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["recipient", "is_read"], name="notificatio_recipie_4e3567_idx"),
            models.Index(fields=["unit", "is_read"], name="notificatio_unit_id_9b1f0c_idx"),
            models.Index(fields=["recipient", "type", "assignment"], name="notificatio_recipie_a7d2e1_idx"),
            models.Index(fields=["assignment", "type", "reminder_date"], name="notificatio_assignm_5c81d0_idx"),
        ]

    def __str__(self):
        return f"{self.recipient} | {self.channel} | {self.title}"

    @property
    def is_terminal(self):
        return self.status in (self.Status.SENT, self.Status.FAILED)

    # =====================================================
    # READ HELPERS
    # =====================================================
    def mark_as_read(self):
        if not self.is_read:
            self.is_read = True
            self.read_at = timezone.now()
            self.save(update_fields=["is_read", "read_at", "updated_at"])

    @classmethod
    def mark_all_as_read(cls, user):
        return cls.objects.filter(recipient=user, is_read=False).update(
            is_read=True,
            read_at=timezone.now(),
        )
