"""
ASGI configuration for RosterDesk.

Exposes the Django application for ASGI servers. There are no WebSocket
routes; notification delivery is handled by Celery workers.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "rosterdesk.settings.local")

application = get_asgi_application()
