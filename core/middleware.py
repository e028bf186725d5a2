"""
Core middleware for RosterDesk.

TenantContextMiddleware:
  Reads the tenant and actor identifiers set by the upstream gateway and
  attaches them to the request as UUIDs. Every service call downstream takes
  request.tenant_id explicitly; nothing is stored in thread-local state.

  Header names come from settings.ROSTERDESK (TENANT_HEADER / ACTOR_HEADER).
  A missing or malformed header leaves the attribute as None; whether that is
  acceptable is decided by the view (see core.permissions).
"""

import logging
import uuid

from django.conf import settings

logger = logging.getLogger(__name__)


class TenantContextMiddleware:
    """
    Middleware that resolves the tenant and actor for each request.
    """

    def __init__(self, get_response):
        """
        Initialize the middleware.

        Args:
            get_response: The next middleware or view in the chain.
        """
        self.get_response = get_response
        config = settings.ROSTERDESK
        self.tenant_header = config["TENANT_HEADER"]
        self.actor_header = config["ACTOR_HEADER"]

    def __call__(self, request):
        """
        Attach tenant_id and actor_id before processing the request.

        Args:
            request: The incoming HTTP request.

        Returns:
            The HTTP response from the next layer.
        """
        request.tenant_id = self._parse_uuid(request, self.tenant_header)
        request.actor_id = self._parse_uuid(request, self.actor_header)
        return self.get_response(request)

    @staticmethod
    def _parse_uuid(request, header: str) -> uuid.UUID | None:
        """
        Return the header value as a UUID, or None if absent or malformed.

        Args:
            request: The incoming HTTP request.
            header: The HTTP header name (e.g. "X-Tenant-ID").
        """
        raw = request.headers.get(header, "").strip()
        if not raw:
            return None
        try:
            return uuid.UUID(raw)
        except ValueError:
            logger.warning("Ignoring malformed %s header on %s", header, request.path)
            return None
