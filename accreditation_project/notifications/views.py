"""
JSON endpoints consumed by the dashboards.

Every query is scoped to request.user; staff-only endpoints trigger
broadcasts and manual reminders.
"""

from functools import wraps

from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.views.decorators.http import require_GET, require_POST

from .forms import BroadcastForm, ManualReminderForm
from .models import Notification
from .services import send_broadcast, send_manual_reminder

PAGE_SIZE = 20
RECENT_LIMIT = 5


def serialize(notification):
    return {
        "id": str(notification.id),
        "type": notification.type,
        "type_label": notification.get_type_display(),
        "channel": notification.channel,
        "title": notification.title,
        "message": notification.message,
        "data": notification.data,
        "status": notification.status,
        "is_read": notification.is_read,
        "read_at": notification.read_at.isoformat() if notification.read_at else None,
        "created_at": notification.created_at.isoformat(),
    }


def form_errors(form):
    return {
        field: [error["message"] for error in errors]
        for field, errors in form.errors.get_json_data().items()
    }


def staff_required(view):
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_staff:
            return JsonResponse({"detail": "Forbidden"}, status=403)
        return view(request, *args, **kwargs)
    return wrapper


# ============================================================
# READ API
# ============================================================

@login_required
@require_GET
def notification_list(request):
    qs = Notification.objects.for_user(request.user).select_related("unit")

    read_filter = request.GET.get("filter")
    if read_filter == "unread":
        qs = qs.filter(is_read=False)
    elif read_filter == "read":
        qs = qs.filter(is_read=True)

    notification_type = request.GET.get("type")
    if notification_type:
        qs = qs.filter(type=notification_type)

    channel = request.GET.get("channel")
    if channel:
        qs = qs.filter(channel=channel)

    page_obj = Paginator(qs, PAGE_SIZE).get_page(request.GET.get("page"))

    return JsonResponse({
        "results": [serialize(n) for n in page_obj.object_list],
        "page": page_obj.number,
        "num_pages": page_obj.paginator.num_pages,
        "count": page_obj.paginator.count,
        "unread_count": Notification.objects.for_user(request.user).unread().count(),
        "filters": {
            "filter": read_filter,
            "type": notification_type,
            "channel": channel,
        },
        "types": [
            {"value": value, "label": label}
            for value, label in Notification.Type.choices
        ],
        "channels": [
            {"value": value, "label": label}
            for value, label in Notification.Channel.choices
        ],
    })


@login_required
@require_GET
def unread_count(request):
    count = Notification.objects.for_user(request.user).unread().count()
    return JsonResponse({"count": count})


@login_required
@require_GET
def recent(request):
    notifications = Notification.objects.for_user(request.user)[:RECENT_LIMIT]
    return JsonResponse([serialize(n) for n in notifications], safe=False)


@login_required
@require_POST
def mark_as_read(request, notification_id):
    notification = get_object_or_404(
        Notification,
        pk=notification_id,
        recipient=request.user,
    )
    notification.mark_as_read()
    return JsonResponse(serialize(notification))


@login_required
@require_POST
def mark_all_as_read(request):
    updated = Notification.mark_all_as_read(request.user)
    return JsonResponse({"updated": updated})


# ============================================================
# ADMIN ACTIONS
# ============================================================

@login_required
@require_POST
@staff_required
def broadcast(request):
    form = BroadcastForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form_errors(form)}, status=400)

    data = form.cleaned_data
    notifications = send_broadcast(
        data["units"],
        data["type"],
        data["title"],
        data["message"],
        channels=data["channels"],
    )
    return JsonResponse({"created": len(notifications)}, status=201)


@login_required
@require_POST
@staff_required
def manual_reminder(request):
    form = ManualReminderForm(request.POST)
    if not form.is_valid():
        return JsonResponse({"errors": form_errors(form)}, status=400)

    data = form.cleaned_data
    count = send_manual_reminder(
        today=timezone.localdate(),
        days_before=data["days_before"],
        assignment=data["assignment"],
        unit=data["unit"],
        note=data["message"] or None,
    )
    return JsonResponse({"sent": count})
