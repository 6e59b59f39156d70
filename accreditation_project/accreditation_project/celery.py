"""Celery application for notification delivery."""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "accreditation_project.settings")

celery_app = Celery("accreditation_project")

# All CELERY_* values live in Django settings
celery_app.config_from_object("django.conf:settings", namespace="CELERY")
celery_app.autodiscover_tasks()
