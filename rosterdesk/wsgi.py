"""WSGI configuration for RosterDesk."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "rosterdesk.settings.local")

application = get_wsgi_application()
