"""
Tenant model for RosterDesk.

A tenant is one organization using the platform. Tenant management itself
(signup, billing, plan limits) lives outside this service; the record exists
here so that every tenant-owned row has a real foreign key to point at.
"""

import uuid

from django.db import models


class Tenant(models.Model):
    """
    An organization whose events, members and shifts are isolated from all others.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant_name = models.CharField(max_length=255)
    timezone = models.CharField(
        max_length=50,
        default="UTC",
        help_text="IANA timezone used to interpret business day dates and slot times.",
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["tenant_name"]
        verbose_name = "Tenant"
        verbose_name_plural = "Tenants"

    def __str__(self) -> str:
        """Return the tenant name."""
        return self.tenant_name
