"""
Members models for RosterDesk.

A member is a person who can be assigned to shift slots within one tenant.
Member CRUD is owned by the member service; the allocator only reads these
rows to check existence and active status before an assignment.
"""

from django.db import models

from core.models import TenantScopedModel


class Member(TenantScopedModel):
    """
    A tenant member eligible for shift assignments.

    Deactivated members (is_active=False) keep their assignment history but
    cannot be confirmed into new slots.
    """

    display_name = models.CharField(max_length=255)
    email = models.EmailField(blank=True)
    discord_user_id = models.CharField(max_length=100, blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["display_name"]
        verbose_name = "Member"
        verbose_name_plural = "Members"
        indexes = [
            models.Index(fields=["tenant", "is_active"], name="member_tenant_active_idx"),
        ]

    def __str__(self) -> str:
        """Return the member's display name."""
        return self.display_name
