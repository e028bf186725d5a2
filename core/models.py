"""
Shared model base for tenant-owned records.

Every record in RosterDesk belongs to exactly one tenant and is never
physically deleted by application code: `deleted_at` marks a soft delete.
Queries go through TenantScopedQuerySet so forgetting the tenant filter is
visible at the call site (`Model.objects.for_tenant(tenant_id)`).
"""

import uuid

from django.db import models
from django.utils import timezone


class TenantScopedQuerySet(models.QuerySet):
    """
    QuerySet helpers for tenant isolation and soft-delete filtering.

    Usage:
        Member.objects.for_tenant(tenant_id).alive()  # live rows of one tenant
        Member.objects.all()                          # everything (admin only)
    """

    def for_tenant(self, tenant_id):
        """Restrict to rows owned by the given tenant."""
        return self.filter(tenant_id=tenant_id)

    def alive(self):
        """Exclude soft-deleted rows."""
        return self.filter(deleted_at__isnull=True)


class TenantScopedModel(models.Model):
    """
    Abstract base: opaque UUID identity, owning tenant, timestamps, soft delete.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant = models.ForeignKey(
        "tenants.Tenant",
        on_delete=models.CASCADE,
        related_name="+",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = TenantScopedQuerySet.as_manager()

    class Meta:
        abstract = True

    @property
    def is_deleted(self) -> bool:
        """Return True if this record has been soft-deleted."""
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        """Stamp deleted_at; the row stays for history."""
        self.deleted_at = timezone.now()
        self.save(update_fields=["deleted_at", "updated_at"])
