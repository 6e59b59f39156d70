from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """
    Admin configuration for notification records
    (delivery status + read state)
    """

    # =====================================================
    # LIST VIEW
    # =====================================================
    list_display = (
        "id",
        "recipient",
        "type",
        "channel",
        "colored_status",
        "title",
        "is_read",
        "created_at",
    )

    list_filter = (
        "type",
        "channel",
        "status",
        "is_read",
        "created_at",
    )

    search_fields = (
        "title",
        "message",
        "recipient__username",
        "recipient__first_name",
        "recipient__last_name",
    )

    ordering = ("-created_at",)
    list_per_page = 25
    list_select_related = ("recipient",)

    # =====================================================
    # FIELDSETS (DETAIL VIEW)
    # =====================================================
    fieldsets = (
        ("Recipient", {
            "fields": ("recipient", "unit"),
        }),
        ("Classification", {
            "fields": ("type", "channel"),
        }),
        ("Content", {
            "fields": ("title", "message", "data"),
        }),
        ("Context", {
            "fields": ("assignment", "reminder_date"),
        }),
        ("Delivery", {
            "fields": ("status", "attempts", "sent_at", "error_message"),
        }),
        ("Read state", {
            "fields": ("is_read", "read_at", "created_at"),
        }),
    )

    readonly_fields = (
        "status",
        "attempts",
        "sent_at",
        "error_message",
        "created_at",
        "read_at",
    )

    actions = (
        "mark_as_read",
        "mark_as_unread",
    )

    # =====================================================
    # CUSTOM DISPLAY HELPERS
    # =====================================================
    @admin.display(description="Status", ordering="status")
    def colored_status(self, obj):
        color_map = {
            Notification.Status.PENDING: "#f59e0b",  # orange
            Notification.Status.SENT: "#16a34a",     # green
            Notification.Status.FAILED: "#dc2626",   # red
        }

        return format_html(
            '<span style="color:{}; font-weight:600;">{}</span>',
            color_map.get(obj.status, "#000000"),
            obj.get_status_display(),
        )

    # =====================================================
    # ADMIN ACTIONS
    # =====================================================
    @admin.action(description="Mark selected notifications as READ")
    def mark_as_read(self, request, queryset):
        queryset.update(is_read=True, read_at=timezone.now())

    @admin.action(description="Mark selected notifications as UNREAD")
    def mark_as_unread(self, request, queryset):
        queryset.update(is_read=False, read_at=None)
