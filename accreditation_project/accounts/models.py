from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models


class Role(models.Model):
    name = models.SlugField(max_length=50, unique=True)
    display_name = models.CharField(max_length=150, blank=True)

    def __str__(self):
        return self.display_name or self.name


class Unit(models.Model):
    """
    Organizational unit (faculty, study program, bureau).
    Assignments may target a whole unit instead of one assessor.
    """

    class UnitType(models.TextChoices):
        FACULTY = "faculty", "Faculty"
        PROGRAM = "program", "Study Program"
        BUREAU = "bureau", "Bureau"
        OTHER = "other", "Other"

    name = models.CharField(max_length=150)
    code = models.CharField(max_length=30, unique=True)
    unit_type = models.CharField(
        max_length=20,
        choices=UnitType.choices,
        default=UnitType.PROGRAM,
    )

    parent = models.ForeignKey(
        "self",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="children"
    )

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name

    # =====================================================
    # MEMBERSHIP RESOLVER
    # =====================================================
    def users_with_roles(self, role_names=None):
        """
        Active users holding a role inside this unit.

        role_names narrows the roles; when omitted the
        NOTIFICATION_UNIT_ROLES setting applies, and an empty
        setting accepts every role.
        """
        if role_names is None:
            role_names = getattr(settings, "NOTIFICATION_UNIT_ROLES", None) or []

        qs = User.objects.filter(
            unit_memberships__unit=self,
            is_active=True,
        )

        if role_names:
            qs = qs.filter(unit_memberships__role__name__in=role_names)

        return qs.distinct().order_by("id")


class User(AbstractUser):
    unit = models.ForeignKey(
        Unit,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="users"
    )

    phone_number = models.CharField(max_length=30, blank=True)

    @property
    def display_name(self):
        return self.get_full_name() or self.username

    def __str__(self):
        full = self.get_full_name()
        return f"{full} ({self.username})" if full else self.username


class UnitMembership(models.Model):
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="unit_memberships"
    )
    unit = models.ForeignKey(
        Unit,
        on_delete=models.CASCADE,
        related_name="memberships"
    )
    role = models.ForeignKey(
        Role,
        on_delete=models.CASCADE,
        related_name="memberships"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "unit", "role"],
                name="unique_unit_membership",
            ),
        ]

    def __str__(self):
        return f"{self.user} @ {self.unit} ({self.role})"
