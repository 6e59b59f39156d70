from django.urls import path

from . import views

app_name = "notifications"

urlpatterns = [
    # Read API
    path("", views.notification_list, name="index"),
    path("unread-count/", views.unread_count, name="unread-count"),
    path("recent/", views.recent, name="recent"),
    path("read-all/", views.mark_all_as_read, name="read-all"),
    path("<uuid:notification_id>/read/", views.mark_as_read, name="read"),

    # Admin actions
    path("broadcast/", views.broadcast, name="broadcast"),
    path("reminders/", views.manual_reminder, name="manual-reminder"),
]
