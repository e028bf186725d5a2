"""
Notifications models for RosterDesk.

Member-facing notifications are persisted here by the Celery task in
apps.notifications.tasks, which also sends an email through Django's
configured email backend when the member has an address on file.
"""

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Notification(models.Model):
    """
    A persisted notification for one member.

    Created only by the delivery task, never by views. `assignment_id` ties
    the notification to the assignment that caused it, so a redelivered task
    does not notify twice. The `data` JSON field stores the event payload.
    """

    class Type(models.TextChoices):
        SHIFT_ASSIGNED = "shift_assigned", _("Shift Assigned")

    tenant = models.ForeignKey("tenants.Tenant", on_delete=models.CASCADE, related_name="+")
    recipient = models.ForeignKey(
        "members.Member",
        on_delete=models.CASCADE,
        related_name="notifications",
    )
    notification_type = models.CharField(max_length=30, choices=Type.choices)
    assignment_id = models.UUIDField(null=True, blank=True)

    # Human-readable content
    title = models.CharField(max_length=200)
    body = models.TextField()

    data = models.JSONField(default=dict, blank=True)

    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)
    emailed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Notification"
        verbose_name_plural = "Notifications"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["recipient", "notification_type", "assignment_id"],
                name="unique_notification_per_assignment",
            ),
        ]
        indexes = [
            models.Index(fields=["recipient", "is_read"], name="notification_unread_idx"),
            models.Index(fields=["recipient", "-created_at"], name="notification_recent_idx"),
        ]

    def __str__(self) -> str:
        """Return a brief description of the notification."""
        return f"[{self.get_notification_type_display()}] → {self.recipient.display_name}"

    def mark_read(self) -> None:
        """Mark this notification as read and record the timestamp."""
        if not self.is_read:
            self.is_read = True
            self.read_at = timezone.now()
            self.save(update_fields=["is_read", "read_at"])
