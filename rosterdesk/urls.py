"""
RosterDesk root URL configuration.

URL namespaces follow the pattern: app_name:view_name
  - scheduling:  shift slots, shift assignments (JSON API under /api/v1/)
"""

import logging

from django.contrib import admin
from django.db import DatabaseError, connections
from django.http import JsonResponse
from django.urls import include, path
from django.utils import timezone

logger = logging.getLogger(__name__)


def _database_reachable(alias: str = "default") -> bool:
    try:
        with connections[alias].cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError:
        logger.warning("Health check: database %r unreachable", alias, exc_info=True)
        return False
    return True


def health_check(request):
    """Liveness probe: 200 when the database answers, 503 otherwise. No tenant headers needed."""
    db_ok = _database_reachable()
    return JsonResponse(
        {
            "status": "ok" if db_ok else "degraded",
            "db": db_ok,
            "timestamp": timezone.now().isoformat(),
        },
        status=200 if db_ok else 503,
    )


urlpatterns = [
    path("health/", health_check, name="health_check"),
    path("admin/", admin.site.urls),
    path("api/v1/", include("apps.scheduling.urls", namespace="scheduling")),
]
