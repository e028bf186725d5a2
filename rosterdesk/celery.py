"""
Celery application configuration for RosterDesk.

Tasks are auto-discovered from each Django app's tasks.py module.
Two queues are defined:
  - default: general background work
  - notifications: member notifications and audit events emitted after an
    assignment commits (isolated so a slow mail relay never backs up other work)
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "rosterdesk.settings.local")

app = Celery("rosterdesk")

# Read configuration from Django settings, namespaced under CELERY_
app.config_from_object("django.conf:settings", namespace="CELERY")

# Auto-discover tasks in all installed apps
app.autodiscover_tasks()
