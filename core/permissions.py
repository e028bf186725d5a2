"""
Tenant-scoping mixin for RosterDesk API views.

Every API view that touches tenant data should use TenantScopedMixin. It
refuses requests with no tenant context, optionally requires an actor for
mutating methods, and converts service errors into JSON responses so views
only contain the success path.

Usage:
    class MyView(TenantScopedMixin, View):
        def get(self, request):
            slots = ShiftSlot.objects.for_tenant(request.tenant_id).alive()
"""

import logging

from django.http import HttpRequest
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_exempt

from core.exceptions import DomainError
from core.http import domain_error_response, json_error

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name="dispatch")
class TenantScopedMixin:
    """
    Base mixin for JSON API views scoped to the caller's tenant.

    Subclasses list in `actor_required_methods` the HTTP methods that must
    carry an actor header (writes are attributed in the audit log).
    """

    actor_required_methods: tuple[str, ...] = ("post", "patch", "put", "delete")

    def dispatch(self, request: HttpRequest, *args, **kwargs):
        """
        Check tenant/actor context, then dispatch and map domain errors.

        Args:
            request: The incoming HTTP request.

        Returns:
            The view's response, or a JSON error response.
        """
        if getattr(request, "tenant_id", None) is None:
            return json_error(403, "FORBIDDEN", "Tenant ID is required")

        method = request.method.lower()
        if method in self.actor_required_methods and getattr(request, "actor_id", None) is None:
            return json_error(403, "FORBIDDEN", "Actor ID is required")

        try:
            return super().dispatch(request, *args, **kwargs)
        except DomainError as exc:
            if exc.status >= 500:
                logger.error("%s %s failed: %s", request.method, request.path, exc.message)
            return domain_error_response(exc)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.path)
            return json_error(500, "INTERNAL", "Internal server error")
