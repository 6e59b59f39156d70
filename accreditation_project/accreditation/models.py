from django.conf import settings
from django.db import models
from django.utils import timezone

from accounts.models import Unit


# Placeholder used in reminder texts when no criterion is linked
UNNAMED_DOCUMENT = "Dokumen Penugasan"


class Program(models.Model):
    name = models.CharField(max_length=200)
    unit = models.ForeignKey(
        Unit,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="programs"
    )

    def __str__(self):
        return self.name


class Standard(models.Model):
    name = models.CharField(max_length=200)
    program = models.ForeignKey(
        Program,
        on_delete=models.CASCADE,
        related_name="standards"
    )

    def __str__(self):
        return self.name


class Criterion(models.Model):
    name = models.CharField(max_length=255)
    standard = models.ForeignKey(
        Standard,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="criteria"
    )

    class Meta:
        verbose_name_plural = "criteria"

    def __str__(self):
        return self.name

    @property
    def program_name(self):
        if self.standard_id and self.standard.program_id:
            return self.standard.program.name
        return None


# ============================================================
# ASSIGNMENT
# ============================================================

class AssignmentQuerySet(models.QuerySet):

    def open(self):
        """Assignments still expecting work and carrying a deadline."""
        return (
            self.filter(
                deadline__isnull=False,
                unassigned_at__isnull=True,
            )
            .exclude(status=Assignment.Status.COMPLETED)
        )

    def due_on(self, date):
        return self.open().filter(deadline=date)

    def overdue_as_of(self, date):
        return self.open().filter(deadline__lt=date)

    def with_reminder_context(self):
        return self.select_related(
            "assessor",
            "unit",
            "criterion__standard__program",
        )


class Assignment(models.Model):
    """
    Links an assessor or a whole unit to a criterion with a deadline.
    Read-only from the notification side.
    """

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        IN_PROGRESS = "in_progress", "In progress"
        COMPLETED = "completed", "Completed"
        CANCELLED = "cancelled", "Cancelled"

    criterion = models.ForeignKey(
        Criterion,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assignments"
    )

    assessor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assignments"
    )

    unit = models.ForeignKey(
        Unit,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assignments"
    )

    deadline = models.DateField(null=True, blank=True, db_index=True)

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True
    )

    unassigned_at = models.DateTimeField(null=True, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    objects = AssignmentQuerySet.as_manager()

    class Meta:
        ordering = ["deadline", "id"]

    def __str__(self):
        return f"{self.document_name} (deadline {self.deadline})"

    @property
    def document_name(self):
        if not self.criterion_id:
            return UNNAMED_DOCUMENT
        program_name = self.criterion.program_name or "N/A"
        return f"{self.criterion.name} - {program_name}"

    @property
    def target(self):
        """Tagged recipient target (unit wins over assessor)."""
        from notifications.services.recipients import target_for_assignment
        return target_for_assignment(self)
