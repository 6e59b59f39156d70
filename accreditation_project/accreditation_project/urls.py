from django.contrib import admin
from django.urls import path, include
from django.shortcuts import redirect


def root_redirect(request):
    if request.user.is_authenticated:
        return redirect("notifications:index")
    return redirect("admin:login")


urlpatterns = [
    # ROOT
    path("", root_redirect, name="root"),

    # DJANGO ADMIN
    path("admin/", admin.site.urls),

    # NOTIFICATIONS (JSON API FOR THE DASHBOARDS)
    path("notifications/", include("notifications.urls")),
]
