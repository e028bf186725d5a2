"""
Audit trail models for RosterDesk.

Every assignment change is logged immutably: who did what, to which record,
when, and the resulting state. Logs are never updated.

Entries are written by the Celery task in apps.audit.tasks after the
assignment transaction has committed, so a failed audit write can never roll
back an assignment. The trade-off is a short window where the change exists
without its log entry.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class AuditLog(models.Model):
    """
    Immutable record of a change made through the capacity allocator.

    The changed record is identified by (entity_type, entity_id); actor_id is
    the caller-supplied actor header value, null for system actions.
    """

    class Action(models.TextChoices):
        CREATE = "CREATE", _("Create")
        CANCEL = "CANCEL", _("Cancel")
        DELETE = "DELETE", _("Delete")

    tenant = models.ForeignKey("tenants.Tenant", on_delete=models.CASCADE, related_name="+")

    # Who performed the action
    actor_id = models.UUIDField(null=True, blank=True)

    action = models.CharField(max_length=20, choices=Action.choices)

    # The record that was changed
    entity_type = models.CharField(max_length=100)
    entity_id = models.UUIDField()

    before = models.JSONField(
        default=dict,
        blank=True,
        help_text="State of the record before the change. Empty for creations.",
    )
    after = models.JSONField(
        default=dict,
        blank=True,
        help_text="State of the record after the change.",
    )

    note = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = "Audit Log Entry"
        verbose_name_plural = "Audit Log"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["tenant", "entity_type", "entity_id"], name="audit_entity_idx"),
            models.Index(fields=["tenant", "actor_id", "-created_at"], name="audit_actor_idx"),
        ]

    def __str__(self) -> str:
        """Return a human-readable summary of the audit entry."""
        actor = self.actor_id or "System"
        return f"[{self.created_at:%Y-%m-%d %H:%M}] {actor} → {self.action} {self.entity_type}"

    def save(self, *args, **kwargs):
        """
        Refuse updates: audit entries can only be inserted.

        Raises:
            RuntimeError: If attempting to update an existing audit log entry.
        """
        if not self._state.adding:
            raise RuntimeError("AuditLog entries are immutable and cannot be updated.")
        super().save(*args, **kwargs)
