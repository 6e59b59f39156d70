"""
Unread notification badge for every template.

Enable in settings.py:

TEMPLATES = [
    {
        "OPTIONS": {
            "context_processors": [
                # ...
                "notifications.context_processors.unread_notifications",
            ],
        },
    },
]
"""

from .models import Notification


def unread_notifications(request):
    user = getattr(request, "user", None)

    if user is None or not user.is_authenticated:
        return {
            "unread_notifications_count": 0,
            "has_unread_notifications": False,
        }

    count = Notification.objects.for_user(user).unread().count()

    return {
        "unread_notifications_count": count,
        "has_unread_notifications": count > 0,
    }
